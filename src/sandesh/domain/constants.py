from __future__ import annotations

"""
Domain Constants.

Centralizes the fixed values of the log file contract (name, size cap,
timestamp layout) and the fallback identifiers used by the logging service.
"""

DEFAULT_TAG = "Logger"

# -----------------------------------------------------------------------------
# LOG FILE CONTRACT
# -----------------------------------------------------------------------------
LOG_FILE_NAME = "Logs.txt"
LOG_FILE_SIZE = 1024 * 1024  # 1 MiB, truncated on the next write once reached
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LINE_TERMINATOR = "\r\n"
FIELD_SEPARATOR = "\t"

# -----------------------------------------------------------------------------
# TOAST DURATIONS (milliseconds)
# -----------------------------------------------------------------------------
TOAST_SHORT_MS = 2000
TOAST_LONG_MS = 3500
