import pytest

from qa_service.config.settings import get_settings
from qa_service.core.logging.builder import setup_logging, stop_queue_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Tests here reconfigure logging; put the session configuration back afterwards."""
    yield
    stop_queue_logging()
    setup_logging(get_settings())
