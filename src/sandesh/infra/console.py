from __future__ import annotations

"""
Default Console Sink.

Routes developer-visible output into the stdlib logging tree under the
'sandesh.<tag>' hierarchy. Unless told otherwise the sink bootstraps
configure_logging() itself, so DEBUG output is visible without host setup.
"""

from typing import Optional

from sandesh.domain.models import Severity
from sandesh.domain.ports import ConsoleSink
from sandesh.infra.logging.config import ConsoleConfig
from sandesh.infra.logging.core import configure_logging, get_logger


class LoggingConsoleSink(ConsoleSink):
    """ConsoleSink backed by ``logging.Logger`` instances, one per tag."""

    def __init__(self, cfg: Optional[ConsoleConfig] = None, *, configure: bool = True) -> None:
        """
        Args:
            cfg: Console settings used when the package logger is bootstrapped.
            configure: Attach the stderr pipeline to the 'sandesh' logger. It is
                       idempotent, so a host that already called configure_logging()
                       keeps its setup. Pass False to leave rendering to the host.
        """
        if configure:
            configure_logging(cfg)

    def write(
            self,
            severity: Severity,
            tag: str,
            message: str,
            error: Optional[BaseException] = None,
    ) -> None:
        # exc_info accepts the exception instance and renders its traceback
        get_logger(tag).log(severity.level, message, exc_info=error)
