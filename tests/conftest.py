import logging

import pytest

from retroboy_backup.core.storage import InMemoryStore
from retroboy_backup.logging_config import LOGGER_NAME


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def app_logger():
    """Yield the application logger and drop any handlers a test attached."""
    logger = logging.getLogger(LOGGER_NAME)
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
