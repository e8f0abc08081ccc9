from pathlib import Path
from types import SimpleNamespace


def make_log_settings(log_dir: Path | None = None, **overrides) -> SimpleNamespace:
    """Duck-typed settings carrying only what the logging builder reads."""
    values = {
        "ENV": "testing",
        "LOG_LEVEL": "INFO",
        "LOG_FORMAT": "json",
        "LOG_TO_STDOUT": False,
        "LOG_DIR": log_dir,
        "LOG_MAX_BYTES": 1_000_000,
        "LOG_BACKUP_COUNT": 1,
        "ENABLE_SQL_LOGGING": False,
        "LOG_USE_QUEUE": False,
        "LOG_QUEUE_MAX_SIZE": 0,
        "LOG_QUEUE_BLOCKING": False,
        "LOG_QUEUE_DROP_WARNING_THRESHOLD": 100,
    }
    values.update(overrides)
    return SimpleNamespace(**values)
