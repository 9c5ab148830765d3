from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-application private storage directory, decides whether a
log file can live there, and reads back the tail of existing logs. Acts as
an abstraction over 'os' so Windows and Unix-like systems behave alike.
"""

import logging
import os
from typing import Optional

from sandesh.domain.constants import LOG_FILE_NAME

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Sandesh"
UNIX_APP_DIR_NAME = ".sandesh"
LOGS_SUBDIR = "logs"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/Sandesh
    - Linux/Mac: ~/.sandesh

    The directory is not created here; callers decide whether its absence
    is fatal.

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def get_default_log_dir() -> str:
    """Directory holding the log file when the host does not supply one."""
    return os.path.join(get_user_data_dir(), LOGS_SUBDIR)


def prepare_log_file(log_dir: Optional[str], file_name: str = LOG_FILE_NAME) -> Optional[str]:
    """
    Create (or verify) the log directory and compute the log file path.

    Never raises: any failure means file logging stays off.

    Args:
        log_dir: Target directory. None or blank selects the default location.
        file_name: Log file name inside the directory.

    Returns:
        Optional[str]: Absolute log file path, or None when the directory is
        unusable.
    """
    root = (log_dir or "").strip() or get_default_log_dir()
    root = os.path.abspath(os.path.expanduser(root))

    try:
        os.makedirs(root, exist_ok=True)
    except OSError as e:
        logger.debug(f"FS: Log directory unavailable at '{root}': {e}")
        return None

    if not os.path.isdir(root) or not os.access(root, os.W_OK):
        logger.debug(f"FS: Log directory is not writable: '{root}'")
        return None

    return os.path.join(root, file_name)


def file_size(path: str) -> int:
    """Size of a file in bytes, 0 when it does not exist yet."""
    try:
        return os.path.getsize(path)
    except OSError:
        return 0


def read_tail(path: Optional[str], n_lines: int = 100) -> str:
    """
    Extract the terminal tail of a text log file.

    Used by feedback and crash reporting hosts to attach execution context.

    Args:
        path: Log file to read.
        n_lines: Maximum number of lines to retrieve from the file end.

    Returns:
        str: Consolidated tail content, or an empty string when unavailable.
    """
    if not path or not os.path.exists(path):
        return ""

    # errors='replace' keeps partially written lines readable
    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            lines = f.readlines()
    except OSError as e:
        logger.debug(f"FS: Could not read log tail from '{path}': {e}")
        return ""

    if n_lines <= 0:
        return ""
    return "".join(lines[-n_lines:])
