"""
Logging builder: create and apply a dictConfig logging configuration and optionally
move handler IO to a background QueueListener.

Configuration knobs (on Settings, read with getattr so duck-typed settings work in tests):
 - LOG_LEVEL, LOG_FORMAT, LOG_TO_STDOUT, LOG_DIR, LOG_MAX_BYTES, LOG_BACKUP_COUNT, ENV
 - ENABLE_SQL_LOGGING: DEBUG for sqlalchemy.engine instead of WARNING
 - LOG_USE_QUEUE: enqueue records in the producer, write them in a listener thread
 - LOG_QUEUE_MAX_SIZE: > 0 bounds the queue; 0 means unbounded
 - LOG_QUEUE_BLOCKING: with a bounded queue, block producers instead of dropping records
"""
from __future__ import annotations

from pathlib import Path
import logging
import logging.config
import queue as _queue
import threading
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from qa_service.utils.logging import get_project_name
from qa_service.config.settings import Settings
from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

_QUEUE_LISTENER: Optional[QueueListener] = None
_DROPPED_LOGS_COUNT = 0
_DROPPED_LOGS_LOCK = threading.Lock()


class NonBlockingQueueHandler(QueueHandler):
    """
    QueueHandler that drops (and counts) records when a bounded queue is full
    instead of blocking the producing coroutine's thread.
    """

    def emit(self, record: logging.LogRecord) -> None:
        global _DROPPED_LOGS_COUNT
        try:
            self.queue.put_nowait(self.prepare(record))
        except _queue.Full:
            with _DROPPED_LOGS_LOCK:
                _DROPPED_LOGS_COUNT += 1


def get_queue_stats() -> dict:
    """Return small diagnostics about queue usage."""
    with _DROPPED_LOGS_LOCK:
        return {"dropped_logs": _DROPPED_LOGS_COUNT, "queue_present": _QUEUE_LISTENER is not None}


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping:
      - formatters: "standard" (ColorFormatter for text, plain otherwise) and "json"
      - filters: "request_id", "redact"
      - handlers: console + file/error_file when writing to LOG_DIR, console + error_console otherwise
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "fmt": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging configuration for the process.

      1. Create LOG_DIR when logging to files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. If LOG_USE_QUEUE: detach the real handlers from the root logger, run them in a
         QueueListener thread, and attach a QueueHandler carrying the request-id and
         redact filters (they must run in the producer, where the contextvar is set).
    """
    global _QUEUE_LISTENER

    stop_queue_logging()

    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    if not getattr(settings, "LOG_USE_QUEUE", False):
        return

    root_logger = logging.getLogger()
    real_handlers = list(root_logger.handlers)
    if not real_handlers:
        return
    for handler in real_handlers:
        root_logger.removeHandler(handler)

    max_size = int(getattr(settings, "LOG_QUEUE_MAX_SIZE", 0) or 0)
    blocking = bool(getattr(settings, "LOG_QUEUE_BLOCKING", False))
    log_queue: _queue.Queue = _queue.Queue(max_size)  # maxsize=0 -> unbounded

    queue_handler_cls = NonBlockingQueueHandler if (max_size > 0 and not blocking) else QueueHandler
    queue_handler = queue_handler_cls(log_queue)
    queue_handler.addFilter(RequestIdFilter())
    queue_handler.addFilter(RedactFilter())

    listener = QueueListener(log_queue, *real_handlers, respect_handler_level=True)
    listener.start()
    root_logger.addHandler(queue_handler)
    _QUEUE_LISTENER = listener


def stop_queue_logging() -> None:
    """Flush and stop the background listener, if one is running."""
    global _QUEUE_LISTENER
    listener = _QUEUE_LISTENER
    if listener is None:
        return
    try:
        listener.stop()
    finally:
        _QUEUE_LISTENER = None
