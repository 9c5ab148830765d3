from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Provides the size-capped log file handler and the internal tagging mechanism
that lets the package distinguish its own handlers from external or
library-injected ones.
"""

import logging
import sys
import threading
import traceback

from sandesh.domain.constants import LOG_FILE_SIZE, TIMESTAMP_FORMAT
from sandesh.domain.models import LogEntry, format_timestamp
from sandesh.infra.fs import file_size

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_sandesh_handler"


# ==============================================================================
# INTERNAL LOGGING UTILITIES
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    """
    Mark a handler as an internally-managed handler.

    Args:
        handler: The logging handler instance to tag.
    """
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    """
    Verify if a handler was initialized by this package.

    Args:
        handler: The handler to inspect.

    Returns:
        bool: True if the handler carries our internal tag.
    """
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# CAPPED FILE HANDLER
# ==============================================================================

class CappedFileHandler(logging.Handler):
    """
    Single-generation log file handler.

    Each record opens the file, writes one '<timestamp>\\t<message>\\r\\n'
    line and closes it again. When the file has reached ``max_bytes`` the
    next write reopens it in truncate mode, discarding all previous content.
    I/O failures are printed to stderr and counted, never raised.
    """

    def __init__(
            self,
            path: str,
            max_bytes: int = LOG_FILE_SIZE,
            timestamp_format: str = TIMESTAMP_FORMAT,
    ) -> None:
        super().__init__(logging.NOTSET)
        self.path = path
        self.max_bytes = int(max_bytes)
        self.timestamp_format = timestamp_format
        self._count_lock = threading.Lock()
        self._error_count = 0
        self._written_count = 0
        _tag_handler(self)

    @property
    def error_count(self) -> int:
        """Number of records dropped because of I/O failures."""
        with self._count_lock:
            return self._error_count

    @property
    def written_count(self) -> int:
        with self._count_lock:
            return self._written_count

    def to_entry(self, record: logging.LogRecord) -> LogEntry:
        return LogEntry(
            timestamp=format_timestamp(record.created, self.timestamp_format),
            tag=record.name,
            message=record.getMessage(),
        )

    def select_mode(self) -> str:
        """'a' while the file is under the cap, 'w' once it reached it."""
        return "a" if file_size(self.path) < self.max_bytes else "w"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.to_entry(record).to_line()
            mode = self.select_mode()

            # newline='' keeps the CRLF terminator byte-exact on every platform
            with open(self.path, mode, encoding="utf-8", newline="") as f:
                f.write(line)

            with self._count_lock:
                self._written_count += 1
        except Exception:
            self.handleError(record)

    def handleError(self, record: logging.LogRecord) -> None:
        """
        Report a dropped record on the developer console and count it.

        Unlike the stdlib default this prints regardless of
        ``logging.raiseExceptions`` so silent loss stays visible.
        """
        with self._count_lock:
            self._error_count += 1
        try:
            sys.stderr.write(f"sandesh: dropped log line for '{self.path}'\n")
            traceback.print_exc(file=sys.stderr)
        except Exception:
            # stderr itself is gone (interpreter shutdown); nothing left to report to
            pass
