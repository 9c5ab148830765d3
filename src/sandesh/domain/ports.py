from __future__ import annotations

"""
Collaborator Interfaces.

Abstract contracts for the host facilities the logging service talks to:
the developer console, the notification surface, and string resources.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

from sandesh.domain.models import Severity, ToastDuration


class ConsoleSink(ABC):
    """
    Destination for developer-visible log output.
    """

    @abstractmethod
    def write(
            self,
            severity: Severity,
            tag: str,
            message: str,
            error: Optional[BaseException] = None,
    ) -> None:
        """
        Emit one console log line.

        Args:
            severity: Level of the message.
            tag: Origin identifier.
            message: Text to emit.
            error: Optional exception whose traceback should be attached.
        """
        pass


class Notifier(ABC):
    """
    Host surface for transient, non-blocking notifications.
    """

    @abstractmethod
    def show(self, message: str, duration: ToastDuration) -> None:
        pass


class StringResolver(ABC):
    """
    Resolves a resource identifier into its localized text.
    """

    @abstractmethod
    def resolve(self, key: Union[str, int]) -> str:
        pass
