from __future__ import annotations

"""
Sandesh: tagged, severity-leveled logging with a size-capped log file and
transient user notifications.

The desktop toast adapter lives in 'sandesh.interface.gui' so that headless
hosts never import the GUI toolkit.
"""

from sandesh.core.service import LogService
from sandesh.domain.config import LoggerConfig
from sandesh.domain.errors import LoggerNotInitializedError
from sandesh.domain.models import LogEntry, Severity, StringRes, ToastDuration
from sandesh.domain.ports import ConsoleSink, Notifier, StringResolver
from sandesh.infra.logging import ConsoleConfig, configure_logging
from sandesh.utils.i18n import I18n

__version__ = "1.0.0"

__all__ = [
    "ConsoleConfig",
    "ConsoleSink",
    "I18n",
    "LogEntry",
    "LogService",
    "LoggerConfig",
    "LoggerNotInitializedError",
    "Notifier",
    "Severity",
    "StringRes",
    "StringResolver",
    "ToastDuration",
    "configure_logging",
]
