from __future__ import annotations

"""
Console Logging Orchestrator.

Maintains the idempotent lifecycle of the developer console output. Uses a
non-blocking Queue architecture so that terminal I/O never stalls the thread
that emitted the log call.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from sandesh.infra.logging.config import _LEVEL_MAP, ConsoleConfig
from sandesh.infra.logging.handlers import _is_our_handler, _tag_handler

# Parent logger of every tag emitted through the console sink
CONSOLE_LOGGER_NAME: str = "sandesh"

# Internal state flags for idempotency and lifecycle tracking
_CONFIGURED_FLAG_ATTR: str = "_sandesh_configured"
_QUEUE_LISTENER_ATTR: str = "_sandesh_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: Optional[ConsoleConfig] = None, *, force: bool = False) -> logging.Logger:
    """
    Execute idempotent configuration of the console logger.

    Attaches a single QueueHandler to the package logger; a QueueListener
    drains it into a stderr StreamHandler on a background thread.

    Args:
        cfg: Structural configuration. Defaults to ConsoleConfig().
        force: If True, bypass idempotency checks and re-initialize handlers.

    Returns:
        logging.Logger: The configured package logger.
    """
    cfg = cfg or ConsoleConfig()
    base = logging.getLogger(CONSOLE_LOGGER_NAME)

    # 1. Idempotency Check
    if getattr(base, _CONFIGURED_FLAG_ATTR, False) and not force:
        return base

    level_int = _parse_level(cfg.level)
    base.setLevel(level_int)
    base.propagate = cfg.propagate

    # Cleanup existing infrastructure to prevent handler leakage
    _remove_our_handlers(base)
    _stop_existing_listener(base)

    # 2. Handler Definition
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(logging.Formatter(cfg.fmt, datefmt=cfg.datefmt))
    _tag_handler(sh)

    # 3. Queue-Based Orchestration (Non-blocking I/O)
    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)

    queue_handler = QueueHandler(log_queue)
    _tag_handler(queue_handler)

    listener = QueueListener(log_queue, sh, respect_handler_level=True)
    listener.start()

    base.addHandler(queue_handler)

    setattr(base, _QUEUE_LISTENER_ATTR, listener)
    setattr(base, _CONFIGURED_FLAG_ATTR, True)

    # Flush pending console lines on interpreter shutdown
    atexit.register(_safe_stop_listener, listener)

    return base


def shutdown_logging() -> None:
    """Detach package handlers and stop the console listener, draining it first."""
    base = logging.getLogger(CONSOLE_LOGGER_NAME)
    _stop_existing_listener(base)
    _remove_our_handlers(base)
    if hasattr(base, _CONFIGURED_FLAG_ATTR):
        delattr(base, _CONFIGURED_FLAG_ATTR)
    base.propagate = True


def get_logger(tag: str) -> logging.Logger:
    """
    Acquire the console logger for a tag.

    Args:
        tag: Origin identifier supplied by the caller.

    Returns:
        logging.Logger: Child of the package logger named after the tag.
    """
    return logging.getLogger(f"{CONSOLE_LOGGER_NAME}.{tag}")


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.DEBUG
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.DEBUG)


def _remove_our_handlers(target: logging.Logger) -> None:
    """Identify and detach all internally-managed handlers."""
    for h in list(target.handlers):
        if _is_our_handler(h):
            target.removeHandler(h)
            h.close()


def _stop_existing_listener(target: logging.Logger) -> None:
    """Terminate and release the existing QueueListener to reset state."""
    listener = getattr(target, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(target, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating double-stop calls.

    The atexit hook and explicit shutdowns may both reach the same listener;
    only the first one joins the thread.
    """
    if not listener:
        return

    if getattr(listener, "_thread", None) is not None:
        listener.stop()
