from __future__ import annotations

"""
Logging Service.

The application-facing facade: severity-leveled log emission to the console
sink, optional mirroring into the size-capped log file, and transient user
notifications. Built once by the host's composition root and passed to
consumers explicitly. Logging calls never raise into the caller.
"""

import logging
import sys
import threading
import traceback
from typing import Any, Dict, Optional

from sandesh.domain.config import LoggerConfig, normalize_config
from sandesh.domain.constants import DEFAULT_TAG
from sandesh.domain.errors import LoggerNotInitializedError
from sandesh.domain.models import Severity, StringRes, ToastDuration, ToastMessage
from sandesh.domain.ports import ConsoleSink, Notifier, StringResolver
from sandesh.infra.console import LoggingConsoleSink
from sandesh.infra.file_writer import LogFileWriter
from sandesh.infra.fs import prepare_log_file, read_tail

logger = logging.getLogger(__name__)


class LogService:
    """
    Tagged logger with optional file persistence and toast notifications.

    Until ``init()`` runs the service behaves as a non-debuggable,
    console-only logger; notifications require initialization.
    """

    def __init__(self, console: Optional[ConsoleSink] = None) -> None:
        """
        Args:
            console: Developer console destination. Defaults to stdlib logging.
        """
        self._console: ConsoleSink = console or LoggingConsoleSink()
        self._config: Optional[LoggerConfig] = None
        self._writer: Optional[LogFileWriter] = None
        self._notifier: Optional[Notifier] = None
        self._resolver: Optional[StringResolver] = None
        self._init_lock = threading.Lock()
        self._count_lock = threading.Lock()
        self._console_errors = 0

    # -----------------------------------------------------------------------------
    # INITIALIZATION
    # -----------------------------------------------------------------------------

    def init(
            self,
            debuggable: bool,
            enable_file_log: bool,
            *,
            log_dir: Optional[str] = None,
            notifier: Optional[Notifier] = None,
            resolver: Optional[StringResolver] = None,
            force: bool = False,
    ) -> LoggerConfig:
        """
        Capture build mode and file-logging preferences.

        A failure to prepare the log directory silently leaves file logging
        off. Repeated calls are ignored unless ``force`` is set, in which case
        the previous file writer is drained and replaced.

        Args:
            debuggable: True when INFO messages may be shown on the console.
            enable_file_log: True to mirror every log line into 'Logs.txt'.
            log_dir: Directory for the log file; defaults to the app data dir.
            notifier: Host surface for toasts.
            resolver: Host lookup for StringRes messages.
            force: Re-initialize an already initialized service.

        Returns:
            LoggerConfig: The effective configuration.
        """
        with self._init_lock:
            if self._config is not None and not force:
                logger.warning(
                    "LogService: Already initialized, ignoring init(). Pass force=True to re-initialize."
                )
                return self._config

            previous = self._writer
            self._writer = None
            if previous is not None:
                previous.stop()

            log_file_path = prepare_log_file(log_dir) if enable_file_log else None
            if enable_file_log and log_file_path is None:
                logger.debug("LogService: Log directory unavailable, file logging disabled.")

            config = LoggerConfig(
                debuggable=bool(debuggable),
                file_logging_enabled=bool(enable_file_log),
                log_file_path=log_file_path,
            )

            if config.writes_to_file:
                self._writer = LogFileWriter(
                    config.log_file_path,
                    max_bytes=config.max_bytes,
                    timestamp_format=config.timestamp_format,
                ).start()

            self._notifier = notifier
            self._resolver = resolver
            self._config = config
            return config

    @classmethod
    def from_config(
            cls,
            raw: Optional[Dict[str, Any]],
            *,
            console: Optional[ConsoleSink] = None,
            notifier: Optional[Notifier] = None,
            resolver: Optional[StringResolver] = None,
    ) -> "LogService":
        """
        Build and initialize a service from a plain configuration dictionary.

        Recognized keys: 'debuggable', 'enable_file_log', 'log_dir'.
        """
        cfg = normalize_config(raw)
        service = cls(console=console)
        service.init(
            cfg["debuggable"],
            cfg["enable_file_log"],
            log_dir=cfg["log_dir"],
            notifier=notifier,
            resolver=resolver,
        )
        return service

    @property
    def is_initialized(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> LoggerConfig:
        return self._config or LoggerConfig()

    @property
    def log_file_path(self) -> Optional[str]:
        return self.config.log_file_path

    # -----------------------------------------------------------------------------
    # LOG EMISSION
    # -----------------------------------------------------------------------------

    def debug(self, tag: Optional[str], message: Optional[str]) -> None:
        self.emit(tag, message, Severity.DEBUG)

    def info(self, tag: Optional[str], message: Optional[str]) -> None:
        """
        Log at INFO level.

        INFO lines reach the console only for debuggable builds since they may
        carry sensitive detail. The file copy is written either way.
        """
        self.emit(tag, message, Severity.INFO)

    def warn(
            self,
            tag: Optional[str],
            message: Optional[str],
            error: Optional[BaseException] = None,
    ) -> None:
        self.emit(tag, message, Severity.WARN, error)

    def emit(
            self,
            tag: Optional[str],
            message: Optional[str],
            level: Severity,
            error: Optional[BaseException] = None,
    ) -> None:
        """
        Dispatch one log call to the console sink and the file writer.

        Args:
            tag: Origin identifier; empty or None selects the default tag.
            message: Text to log; None becomes an empty string.
            level: Severity of the call.
            error: Exception whose traceback accompanies WARN console output.
        """
        tag = tag or DEFAULT_TAG
        message = "" if message is None else str(message)

        if level is not Severity.INFO or self.config.debuggable:
            self._write_console(level, tag, message, error if level is Severity.WARN else None)

        writer = self._writer
        if writer is not None:
            writer.append(message, tag)

    def _write_console(
            self,
            level: Severity,
            tag: str,
            message: str,
            error: Optional[BaseException],
    ) -> None:
        try:
            self._console.write(level, tag, message, error)
        except Exception:
            with self._count_lock:
                self._console_errors += 1
            traceback.print_exc(file=sys.stderr)

    # -----------------------------------------------------------------------------
    # NOTIFICATIONS
    # -----------------------------------------------------------------------------

    def notify(self, message: ToastMessage, duration: ToastDuration = ToastDuration.SHORT) -> None:
        """
        Display a transient notification through the host surface.

        Args:
            message: Literal text or a StringRes to resolve first.
            duration: SHORT or LONG display preset.

        Raises:
            LoggerNotInitializedError: If init() has not been called.
        """
        self._require_initialized()
        text = self.resolve(message)

        if self._notifier is None:
            logger.info(f"Toast ({duration.name}): {text}")
            return

        self._notifier.show(text, duration)

    def toast_short(self, message: ToastMessage) -> None:
        self.notify(message, ToastDuration.SHORT)

    def toast_long(self, message: ToastMessage) -> None:
        self.notify(message, ToastDuration.LONG)

    def resolve(self, message: ToastMessage) -> str:
        """
        Turn a toast message into display text.

        Raises:
            LoggerNotInitializedError: If init() has not been called.
        """
        self._require_initialized()
        if isinstance(message, StringRes):
            if self._resolver is None:
                return str(message.key)
            return self._resolver.resolve(message.key)
        return "" if message is None else str(message)

    def _require_initialized(self) -> None:
        if self._config is None:
            raise LoggerNotInitializedError()

    # -----------------------------------------------------------------------------
    # DIAGNOSTICS & LIFECYCLE
    # -----------------------------------------------------------------------------

    def stats(self) -> Dict[str, Any]:
        """
        Snapshot of the silent-failure counters.

        Returns:
            Dict[str, Any]: 'file_logging' (active flag), 'lines_written',
            'file_errors' (dropped file lines) and 'console_errors'.
        """
        writer = self._writer
        with self._count_lock:
            console_errors = self._console_errors
        return {
            "file_logging": writer is not None and writer.running,
            "lines_written": writer.written_count if writer else 0,
            "file_errors": writer.error_count if writer else 0,
            "console_errors": console_errors,
        }

    def recent_logs(self, n_lines: int = 100) -> str:
        """Tail of the log file for crash or feedback reports."""
        self.flush()
        return read_tail(self.log_file_path, n_lines)

    def flush(self) -> None:
        """Wait until all queued file lines are written."""
        writer = self._writer
        if writer is not None:
            writer.flush()

    def shutdown(self) -> None:
        """Drain and stop the file writer. Later log calls go to the console only."""
        with self._init_lock:
            writer = self._writer
            self._writer = None
        if writer is not None:
            writer.stop()
