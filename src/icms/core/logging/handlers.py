"""dictConfig handler entries, one function per handler name used by the builder."""

from pathlib import Path

from ...config.settings import Settings

APP_LOG = "app.log"
ERROR_LOG = "errors.log"


def _stream(formatter: str, level: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": formatter,
        "level": level,
        "filters": ["request_id", "redact"],
    }


def _rotating(settings: Settings, filename: str, formatter: str, level: str) -> dict:
    return {
        **_stream(formatter, level),
        "class": "logging.handlers.RotatingFileHandler",
        "filename": str(Path(settings.LOG_DIR) / filename),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
    }


def _configured_formatter(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    return _stream(_configured_formatter(settings), settings.LOG_LEVEL)


def get_error_console_handler(settings: Settings) -> dict:
    return _stream("json", "ERROR")


def get_file_handler(settings: Settings) -> dict:
    return _rotating(settings, APP_LOG, _configured_formatter(settings), settings.LOG_LEVEL)


def get_error_file_handler(settings: Settings) -> dict:
    # errors.log is always JSON, whatever LOG_FORMAT says
    return _rotating(settings, ERROR_LOG, "json", "ERROR")
