import logging

from icms.core.logging.builder import make_dict_config, setup_logging

from icms.tests.test_fixtures.logging_fixtures import make_log_settings


def test_file_logging_adds_rotating_handlers(tmp_path):
    cfg = make_dict_config(make_log_settings(tmp_path))

    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert cfg["handlers"]["file"]["filename"].endswith("app.log")
    assert cfg["handlers"]["error_file"]["level"] == "ERROR"
    assert "json" in cfg["formatters"]
    assert set(cfg["filters"]) == {"request_id", "redact"}


def test_stdout_logging_uses_error_console_instead_of_files(tmp_path):
    cfg = make_dict_config(make_log_settings(tmp_path, LOG_TO_STDOUT=True))

    assert set(cfg["handlers"]) == {"console", "error_console"}


def test_sql_logger_level_follows_flag(tmp_path):
    quiet = make_dict_config(make_log_settings(tmp_path))
    loud = make_dict_config(make_log_settings(tmp_path, ENABLE_SQL_LOGGING=True))

    assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    assert loud["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(tmp_path):
    settings = make_log_settings(tmp_path / "logs")
    assert not settings.LOG_DIR.exists()

    setup_logging(settings)

    assert settings.LOG_DIR.exists()
    assert logging.getLogger().handlers
