from __future__ import annotations

"""
Domain Exceptions.
"""


class LoggerNotInitializedError(RuntimeError):
    """Raised when a notification is requested before the service is initialized."""

    def __init__(self, message: str = "Logger not initialized") -> None:
        super().__init__(message)
