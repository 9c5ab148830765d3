from __future__ import annotations

"""
Logging Domain Models.

Defines the severity scale, toast duration presets, string resource
references, and the single-line log entry written to the log file.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from sandesh.domain.constants import (
    FIELD_SEPARATOR,
    LINE_TERMINATOR,
    TIMESTAMP_FORMAT,
    TOAST_LONG_MS,
    TOAST_SHORT_MS,
)


class Severity(Enum):
    """Log severities understood by the service, mapped to stdlib levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING

    @property
    def level(self) -> int:
        return int(self.value)


class ToastDuration(Enum):
    """Display presets for transient notifications."""

    SHORT = TOAST_SHORT_MS
    LONG = TOAST_LONG_MS

    @property
    def millis(self) -> int:
        return int(self.value)


@dataclass(frozen=True)
class StringRes:
    """
    Reference to a localized string owned by the host.

    Attributes:
        key: Resource identifier understood by the injected resolver
             (a dot-notation locale key or a host-specific integer id).
    """
    key: Union[str, int]

    def __str__(self) -> str:
        return str(self.key)


# Anything a toast can display: literal text or a resource reference
ToastMessage = Union[str, StringRes]


def format_timestamp(created: Optional[float] = None, fmt: str = TIMESTAMP_FORMAT) -> str:
    """
    Render an epoch timestamp in local time using the log file layout.

    Args:
        created: Seconds since the epoch. Defaults to the current time.
        fmt: strftime pattern.

    Returns:
        str: Formatted wall-clock time (e.g. '2016-02-25 13:45:07').
    """
    if created is None:
        created = time.time()
    return time.strftime(fmt, time.localtime(created))


@dataclass(frozen=True)
class LogEntry:
    """
    One line of the persistent log file.

    The tag travels with the entry for diagnostics but is not part of the
    serialized line.
    """
    timestamp: str
    tag: str
    message: str = field(default="")

    def to_line(self) -> str:
        """Serialize as '<timestamp>\\t<message>\\r\\n'."""
        return f"{self.timestamp}{FIELD_SEPARATOR}{self.message}{LINE_TERMINATOR}"
