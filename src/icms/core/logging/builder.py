"""
Logging setup for the ICMS API.

`make_dict_config(settings)` returns the dictConfig mapping and `setup_logging`
applies it. With `LOG_USE_QUEUE` the configured handlers are moved behind a
`QueueListener`, so a request only pays for an enqueue.

    LOG_TO_STDOUT=true              console, error_console
    LOG_TO_STDOUT=false + LOG_DIR   console, file (app.log), error_file (errors.log)

Outbound notification clients (httpx for Twilio, resend) log at WARNING
unless `LOG_LEVEL` is DEBUG.
"""

import logging
import logging.config
import queue
import threading
from dataclasses import dataclass, field
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from ...config.settings import Settings
from ...utils.project_info import get_project_name
from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | rid=%(request_id)s | %(message)s"

CLIENT_LOGGERS = ("httpx", "httpcore", "resend")

logger = logging.getLogger(__name__)


@dataclass
class _QueueRuntime:
    """The active listener and its queue, plus the count of records dropped on a full queue."""

    listener: QueueListener | None = None
    records: queue.Queue | None = None
    dropped: int = 0
    warn_at: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock)

    def count_drop(self) -> None:
        with self.lock:
            self.dropped += 1


_runtime = _QueueRuntime()


class DroppingQueueHandler(QueueHandler):
    """Enqueue without blocking; a full queue drops the record and counts it."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(self.prepare(record))
        except queue.Full:
            _runtime.count_drop()
            self.handleError(record)


def get_queue_stats() -> dict:
    with _runtime.lock:
        return {"dropped_logs": _runtime.dropped, "queue_present": _runtime.records is not None}


def _writes_files(settings: Settings) -> bool:
    return bool(settings.LOG_DIR) and not settings.LOG_TO_STDOUT


def _build_handlers(settings: Settings) -> dict[str, dict]:
    if _writes_files(settings):
        return {
            "console": get_console_handler(settings),
            "file": get_file_handler(settings),
            "error_file": get_error_file_handler(settings),
        }
    return {
        "console": get_console_handler(settings),
        "error_console": get_error_console_handler(settings),
    }


def make_dict_config(settings: Settings) -> dict:
    handlers = _build_handlers(settings)
    everywhere = list(handlers)
    client_level = "DEBUG" if settings.LOG_LEVEL == "DEBUG" else "WARNING"

    loggers: dict[str, dict] = {
        "": {"handlers": everywhere, "level": settings.LOG_LEVEL},
        "uvicorn.error": {"handlers": everywhere, "level": settings.LOG_LEVEL, "propagate": False},
        "uvicorn.access": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "sqlalchemy.engine": {
            "handlers": ["console"],
            "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
            "propagate": False,
        },
    }
    for name in CLIENT_LOGGERS:
        loggers[name] = {"level": client_level}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
                "format": TEXT_FORMAT,
            },
            "json": {"()": JsonFormatter, "env": settings.ENV, "service": get_project_name()},
        },
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": loggers,
    }


def _detach_everywhere(handlers: list[logging.Handler]) -> None:
    """Remove `handlers` from the root logger and from any named logger dictConfig gave them to."""
    targets = [logging.getLogger()] + [
        obj for obj in logging.Logger.manager.loggerDict.values() if isinstance(obj, logging.Logger)
    ]
    for target in targets:
        for handler in handlers:
            if handler in target.handlers:
                target.removeHandler(handler)


def _start_queue(settings: Settings) -> None:
    root = logging.getLogger()
    handlers = list(root.handlers)
    if not handlers:
        return
    _detach_everywhere(handlers)

    capacity = settings.LOG_QUEUE_MAX_SIZE or 0
    records: queue.Queue = queue.Queue(capacity)
    may_drop = capacity > 0 and not settings.LOG_QUEUE_BLOCKING

    listener = QueueListener(records, *handlers, respect_handler_level=True)
    listener.start()

    # filters run here, in the producing context, where the request id is set
    front = (DroppingQueueHandler if may_drop else QueueHandler)(records)
    front.addFilter(RequestIdFilter())
    front.addFilter(RedactFilter())
    root.addHandler(front)

    _runtime.listener = listener
    _runtime.records = records
    _runtime.warn_at = settings.LOG_QUEUE_DROP_WARNING_THRESHOLD if may_drop else 0


def setup_logging(settings: Settings) -> None:
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())

    if settings.LOG_USE_QUEUE:
        _start_queue(settings)


def stop_queue_logging() -> None:
    """Flush and stop the listener. A no-op without an active queue."""
    listener = _runtime.listener
    if listener is None:
        return

    with _runtime.lock:
        dropped = _runtime.dropped
    if _runtime.warn_at and dropped >= _runtime.warn_at:
        logger.warning("logging.queue.dropped", extra={"dropped": dropped})

    try:
        listener.stop()
    finally:
        _runtime.listener = None
        _runtime.records = None
