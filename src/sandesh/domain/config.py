from __future__ import annotations

"""
Logger Configuration Model.

Holds the process-lifetime settings captured when the logging service is
initialized, plus a loader for plain dictionary configurations.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sandesh.domain.constants import LOG_FILE_SIZE, TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)

# Keys accepted by LogService.from_config() and their defaults
DEFAULT_CONFIG: Dict[str, Any] = {
    "debuggable": False,
    "enable_file_log": False,
    "log_dir": None,
}


@dataclass(frozen=True)
class LoggerConfig:
    """
    Immutable state of an initialized logging service.

    Attributes:
        debuggable: Whether INFO messages may reach the console sink.
        file_logging_enabled: Whether file persistence was requested.
        log_file_path: Resolved log file, set only when the directory was usable.
        max_bytes: Size at or above which the next write truncates the file.
        timestamp_format: strftime pattern for the file timestamp column.
    """
    debuggable: bool = False
    file_logging_enabled: bool = False
    log_file_path: Optional[str] = None
    max_bytes: int = LOG_FILE_SIZE
    timestamp_format: str = TIMESTAMP_FORMAT

    @property
    def writes_to_file(self) -> bool:
        return bool(self.file_logging_enabled and self.log_file_path)


def normalize_config(raw: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Merge a user supplied dictionary over the defaults.

    Unknown keys are dropped and flags are coerced to bool.

    Args:
        raw: Partial configuration dictionary (may be None).

    Returns:
        Dict[str, Any]: Complete, sanitized configuration.
    """
    merged = dict(DEFAULT_CONFIG)
    if not raw:
        return merged

    for key, value in raw.items():
        if key not in DEFAULT_CONFIG:
            logger.debug(f"Config: Ignoring unknown key '{key}'")
            continue
        merged[key] = value

    merged["debuggable"] = bool(merged["debuggable"])
    merged["enable_file_log"] = bool(merged["enable_file_log"])
    if merged["log_dir"] is not None:
        merged["log_dir"] = str(merged["log_dir"]).strip() or None
    return merged
