from __future__ import annotations

"""
Background Log File Writer.

Owns the log file through a single consumer thread. Callers enqueue entries
without blocking; a QueueListener drains them in submission order into a
CappedFileHandler, so concurrent log calls can never interleave partial
lines in the file.
"""

import atexit
import logging
import queue
import threading
from logging.handlers import QueueListener
from typing import Optional

from sandesh.domain.constants import DEFAULT_TAG, LOG_FILE_SIZE, TIMESTAMP_FORMAT
from sandesh.infra.logging.handlers import CappedFileHandler

logger = logging.getLogger(__name__)


class LogFileWriter:
    """
    Single-writer appender for the persistent log file.

    The writer is inert until ``start()``; ``append()`` on a stopped writer
    is a no-op. Failures are absorbed by the handler and exposed through
    ``error_count``.
    """

    def __init__(
            self,
            path: str,
            max_bytes: int = LOG_FILE_SIZE,
            timestamp_format: str = TIMESTAMP_FORMAT,
    ) -> None:
        self._path = path
        self._queue: queue.Queue = queue.Queue(-1)
        self._handler = CappedFileHandler(path, max_bytes=max_bytes, timestamp_format=timestamp_format)
        self._listener: Optional[QueueListener] = None
        self._lock = threading.Lock()

    # -----------------------------------------------------------------------------
    # STATE
    # -----------------------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def running(self) -> bool:
        return self._listener is not None

    @property
    def error_count(self) -> int:
        return self._handler.error_count

    @property
    def written_count(self) -> int:
        return self._handler.written_count

    # -----------------------------------------------------------------------------
    # LIFECYCLE
    # -----------------------------------------------------------------------------

    def start(self) -> "LogFileWriter":
        """Spawn the consumer thread. Calling it twice is harmless."""
        with self._lock:
            if self._listener is not None:
                return self

            listener = QueueListener(self._queue, self._handler)
            listener.start()
            self._listener = listener

        atexit.register(self.stop)
        logger.debug(f"LogFileWriter: Writing to {self._path}")
        return self

    def stop(self) -> None:
        """
        Drain pending entries, join the consumer thread and release the handler.
        """
        with self._lock:
            listener = self._listener
            self._listener = None

        if listener is None:
            return

        # The stop sentinel is queued behind pending records, so they are written first
        listener.stop()
        self._handler.close()
        atexit.unregister(self.stop)

    def flush(self) -> None:
        """Block until every entry submitted so far has been handled."""
        if self._listener is not None:
            self._queue.join()

    # -----------------------------------------------------------------------------
    # SUBMISSION
    # -----------------------------------------------------------------------------

    def append(self, message: str, tag: str = DEFAULT_TAG) -> None:
        """
        Queue one line for the log file.

        The timestamp is taken now, at submission, so file order and time
        order agree.

        Args:
            message: Text of the line.
            tag: Origin identifier, kept on the record for diagnostics only.
        """
        record = logging.makeLogRecord({
            "name": tag,
            "msg": message,
            "levelno": logging.INFO,
            "levelname": logging.getLevelName(logging.INFO),
        })

        # stop() clears the listener under the same lock, so nothing is queued behind its sentinel
        with self._lock:
            if self._listener is None:
                return
            self._queue.put_nowait(record)
