from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Recording collaborators (console sink, notifier) shared by
   the service tests.
"""

import os
import sys
from pathlib import Path
from typing import Generator, List, Optional, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from sandesh.core.service import LogService  # noqa: E402
from sandesh.domain.models import Severity, ToastDuration  # noqa: E402
from sandesh.domain.ports import ConsoleSink, Notifier  # noqa: E402


# -----------------------------------------------------------------------------
# Recording Collaborators
# -----------------------------------------------------------------------------
class RecordingConsole(ConsoleSink):
    """ConsoleSink that keeps every call for later assertions."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Severity, str, str, Optional[BaseException]]] = []

    def write(self, severity, tag, message, error=None) -> None:
        self.calls.append((severity, tag, message, error))


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.shown: List[Tuple[str, ToastDuration]] = []

    def show(self, message: str, duration: ToastDuration) -> None:
        self.shown.append((message, duration))


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Per-test log directory (not created yet, init() must create it)."""
    return tmp_path / "logs"


@pytest.fixture
def service(console: RecordingConsole) -> Generator[LogService, None, None]:
    """
    Uninitialized LogService wired to the recording console.

    The file writer thread is always stopped at teardown.
    """
    svc = LogService(console=console)
    yield svc
    svc.shutdown()
