import pytest

from icms.config import get_settings
from icms.core.logging.builder import setup_logging, stop_queue_logging


@pytest.fixture(autouse=True)
def restore_app_logging():
    """Tests here reconfigure logging; put the suite's configuration back afterwards."""
    yield
    stop_queue_logging()
    setup_logging(get_settings())
