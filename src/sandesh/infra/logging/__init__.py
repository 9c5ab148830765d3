from __future__ import annotations

from .config import ConsoleConfig
from .core import (
    CONSOLE_LOGGER_NAME,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from .handlers import CappedFileHandler

__all__ = [
    "CONSOLE_LOGGER_NAME",
    "CappedFileHandler",
    "ConsoleConfig",
    "configure_logging",
    "get_logger",
    "shutdown_logging",
]
