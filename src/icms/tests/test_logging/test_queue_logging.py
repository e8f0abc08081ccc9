import logging
from pathlib import Path

from icms.core.logging.builder import get_queue_stats, setup_logging, stop_queue_logging
from icms.core.logging.filters import set_request_id

from icms.tests.test_fixtures.logging_fixtures import make_log_settings


def test_queue_listener_writes_file(tmp_path):
    stop_queue_logging()
    settings = make_log_settings(tmp_path, LOG_LEVEL="DEBUG", LOG_USE_QUEUE=True)
    setup_logging(settings)
    logger = logging.getLogger("test.queue")

    set_request_id("test-req-1")
    for i in range(10):
        logger.info("test message %d", i, extra={"iteration": i})
    set_request_id(None)

    assert get_queue_stats()["queue_present"] is True
    stop_queue_logging()

    text = (Path(settings.LOG_DIR) / "app.log").read_text()
    assert "test message 0" in text
    assert "iteration" in text
    assert "test-req-1" in text


def test_stop_without_queue_is_a_no_op():
    stop_queue_logging()
    stop_queue_logging()
    assert get_queue_stats()["queue_present"] is False
