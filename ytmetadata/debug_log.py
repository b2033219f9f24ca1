"""Debug log buffer for on-page display when debug mode is enabled."""

from __future__ import annotations

import logging
import threading
from collections import deque

MAX_LINES = 20
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_log_buffer: deque[str] = deque(maxlen=MAX_LINES)
_lock = threading.Lock()


def add(msg: str) -> None:
    """Add a debug message to the buffer."""
    with _lock:
        _log_buffer.append(msg)


def get_lines() -> list[str]:
    """Get the current log lines (newest last)."""
    with _lock:
        return list(_log_buffer)


def clear() -> None:
    """Clear the log buffer."""
    with _lock:
        _log_buffer.clear()


class BufferHandler(logging.Handler):
    """Mirror log records into the debug buffer."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            add(self.format(record))
        except Exception:
            self.handleError(record)


def install(level: int = logging.DEBUG, logger_name: str = "ytmetadata") -> BufferHandler:
    """Attach a BufferHandler to the package logger (idempotent)."""
    target = logging.getLogger(logger_name)
    for handler in target.handlers:
        if isinstance(handler, BufferHandler):
            return handler
    handler = BufferHandler(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    target.addHandler(handler)
    if target.level == logging.NOTSET or target.level > level:
        target.setLevel(level)
    return handler
