from __future__ import annotations

"""
Unit tests for LogService emission and initialization.

Verifies:
1. Tag and message defaults.
2. INFO console gating by build mode, while the file copy is always written.
3. WARN error propagation to the console sink.
4. File logging setup, soft failure, re-initialization and the size cap.
5. Logging never raises, even before init() or when the sink fails.
"""

import logging
import re
import threading
from pathlib import Path

from sandesh.core.service import LogService
from sandesh.domain.constants import DEFAULT_TAG, LOG_FILE_SIZE
from sandesh.domain.models import Severity

LINE_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\t(.*)$")


def _file_messages(service: LogService) -> list:
    service.flush()
    with open(service.log_file_path, "rb") as f:
        raw = f.read().decode("utf-8")
    assert raw.endswith("\r\n")
    out = []
    for line in raw.split("\r\n")[:-1]:
        match = LINE_RE.match(line)
        assert match is not None, f"Malformed line: {line!r}"
        out.append(match.group(1))
    return out


# -----------------------------------------------------------------------------
# CONSOLE PATH
# -----------------------------------------------------------------------------

def test_debug_with_missing_tag_and_message(service, console) -> None:
    service.init(debuggable=False, enable_file_log=False)

    service.debug(None, None)

    assert console.calls == [(Severity.DEBUG, DEFAULT_TAG, "", None)]


def test_empty_tag_uses_default(service, console) -> None:
    service.init(debuggable=True, enable_file_log=False)

    service.warn("", "careful")

    assert console.calls[0][1] == DEFAULT_TAG


def test_info_hidden_when_not_debuggable(service, console) -> None:
    service.init(debuggable=False, enable_file_log=False)

    service.info("Auth", "secret")

    assert console.calls == []


def test_info_shown_when_debuggable(service, console) -> None:
    service.init(debuggable=True, enable_file_log=False)

    service.info("Auth", "details")

    assert console.calls == [(Severity.INFO, "Auth", "details", None)]


def test_warn_forwards_error(service, console) -> None:
    service.init(debuggable=False, enable_file_log=False)
    error = ValueError("boom")

    service.warn("Net", "request failed", error)

    assert console.calls == [(Severity.WARN, "Net", "request failed", error)]


def test_emit_only_attaches_error_to_warn(service, console) -> None:
    service.init(debuggable=True, enable_file_log=False)

    service.emit("T", "m", Severity.DEBUG, ValueError("ignored"))

    assert console.calls == [(Severity.DEBUG, "T", "m", None)]


def test_logging_before_init_is_console_only(service, console) -> None:
    service.debug("Early", "before init")
    service.info("Early", "hidden")

    assert not service.is_initialized
    assert console.calls == [(Severity.DEBUG, "Early", "before init", None)]


def test_console_failure_never_raises(capsys) -> None:
    class BrokenConsole:
        def write(self, *args):
            raise RuntimeError("sink down")

    service = LogService(console=BrokenConsole())  # type: ignore[arg-type]
    service.debug("T", "m")

    assert service.stats()["console_errors"] == 1
    assert "sink down" in capsys.readouterr().err


# -----------------------------------------------------------------------------
# FILE PATH
# -----------------------------------------------------------------------------

def test_file_logging_writes_every_severity(service, console, log_dir: Path) -> None:
    cfg = service.init(debuggable=False, enable_file_log=True, log_dir=str(log_dir))

    service.debug("A", "d")
    service.info("B", "secret")
    service.warn("C", "w", RuntimeError("x"))

    assert cfg.log_file_path == str(log_dir / "Logs.txt")
    assert _file_messages(service) == ["d", "secret", "w"]
    # INFO was gated on the console but still reached the file
    assert [c[0] for c in console.calls] == [Severity.DEBUG, Severity.WARN]


def test_file_line_ends_with_message(service, log_dir: Path) -> None:
    service.init(debuggable=True, enable_file_log=True, log_dir=str(log_dir))

    service.debug("Tag", "hello\tworld")

    assert _file_messages(service) == ["hello\tworld"]


def test_file_logging_disabled_without_request(service, log_dir: Path) -> None:
    cfg = service.init(debuggable=True, enable_file_log=False, log_dir=str(log_dir))
    service.debug("T", "m")
    service.flush()

    assert cfg.log_file_path is None
    assert not log_dir.exists()
    assert service.stats()["file_logging"] is False


def test_unusable_log_dir_disables_file_logging(service, console, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not dir", encoding="utf-8")

    cfg = service.init(debuggable=True, enable_file_log=True, log_dir=str(blocker / "logs"))
    service.debug("T", "still logs to console")
    service.flush()

    assert cfg.file_logging_enabled is True
    assert cfg.log_file_path is None
    assert service.stats()["file_logging"] is False
    assert console.calls[-1][2] == "still logs to console"
    assert list(tmp_path.iterdir()) == [blocker]


def test_cap_reached_truncates_to_single_line(service, log_dir: Path) -> None:
    log_dir.mkdir()
    log_file = log_dir / "Logs.txt"
    log_file.write_bytes(b"y" * LOG_FILE_SIZE)

    service.init(debuggable=True, enable_file_log=True, log_dir=str(log_dir))
    service.debug("T", "after cap")

    assert _file_messages(service) == ["after cap"]


def test_below_cap_appends_to_existing(service, log_dir: Path) -> None:
    log_dir.mkdir()
    (log_dir / "Logs.txt").write_bytes(b"2016-02-25 10:00:00\told\r\n")

    service.init(debuggable=True, enable_file_log=True, log_dir=str(log_dir))
    service.debug("T", "new")

    assert _file_messages(service) == ["old", "new"]


def test_stats_track_written_lines(service, log_dir: Path) -> None:
    service.init(debuggable=True, enable_file_log=True, log_dir=str(log_dir))
    for i in range(3):
        service.debug("T", str(i))
    service.flush()

    stats = service.stats()
    assert stats["file_logging"] is True
    assert stats["lines_written"] == 3
    assert stats["file_errors"] == 0


def test_recent_logs_returns_tail(service, log_dir: Path) -> None:
    service.init(debuggable=True, enable_file_log=True, log_dir=str(log_dir))
    for i in range(5):
        service.debug("T", f"entry {i}")

    tail = service.recent_logs(2)

    assert tail.count("\r\n") == 2
    assert "entry 3" in tail and "entry 4" in tail


def test_shutdown_stops_file_copy(service, log_dir: Path) -> None:
    service.init(debuggable=True, enable_file_log=True, log_dir=str(log_dir))
    service.debug("T", "kept")
    service.shutdown()
    service.debug("T", "console only")

    with open(log_dir / "Logs.txt", "rb") as f:
        assert f.read().decode("utf-8").endswith("\tkept\r\n")


# -----------------------------------------------------------------------------
# INITIALIZATION LIFECYCLE
# -----------------------------------------------------------------------------

def test_second_init_is_ignored(service, console) -> None:
    first = service.init(debuggable=False, enable_file_log=False)
    second = service.init(debuggable=True, enable_file_log=False)

    assert second is first
    service.info("T", "still hidden")
    assert console.calls == []


def test_forced_init_replaces_config_and_writer(service, tmp_path: Path) -> None:
    first_dir = tmp_path / "first"
    second_dir = tmp_path / "second"
    service.init(debuggable=True, enable_file_log=True, log_dir=str(first_dir))
    service.debug("T", "one")

    cfg = service.init(debuggable=True, enable_file_log=True, log_dir=str(second_dir), force=True)
    service.debug("T", "two")
    service.flush()

    assert cfg.log_file_path == str(second_dir / "Logs.txt")
    assert (first_dir / "Logs.txt").read_bytes().decode("utf-8").endswith("\tone\r\n")
    assert (second_dir / "Logs.txt").read_bytes().decode("utf-8").endswith("\ttwo\r\n")


def test_from_config_builds_initialized_service(console, log_dir: Path) -> None:
    service = LogService.from_config(
        {"debuggable": True, "enable_file_log": True, "log_dir": str(log_dir)},
        console=console,
    )
    try:
        assert service.is_initialized
        assert service.config.debuggable is True
        assert service.log_file_path == str(log_dir / "Logs.txt")
    finally:
        service.shutdown()


def test_second_init_is_reported_at_warning(service, caplog) -> None:
    service.init(debuggable=False, enable_file_log=False)

    with caplog.at_level(logging.WARNING, logger="sandesh.core.service"):
        service.init(debuggable=False, enable_file_log=True)

    assert any(
        r.levelno == logging.WARNING and "Already initialized" in r.getMessage()
        for r in caplog.records
    )


def test_console_error_count_is_thread_safe(capsys) -> None:
    class BrokenConsole:
        def write(self, *args):
            raise RuntimeError("sink down")

    service = LogService(console=BrokenConsole())  # type: ignore[arg-type]
    workers, calls = 8, 50

    def work() -> None:
        for _ in range(calls):
            service.debug("T", "m")

    threads = [threading.Thread(target=work) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    capsys.readouterr()

    assert service.stats()["console_errors"] == workers * calls
