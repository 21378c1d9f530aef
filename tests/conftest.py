import pytest

from vertex_chat.core.types.content import Content, Part, Role
from vertex_chat.utils.logging import get_logger


@pytest.fixture(scope="session", autouse=True)
def setup_logging():
    """Fixture to set up logging for all tests.

    We want to propagate to the root logger so that
    pytest caplog can capture logs, and we can test
    logging for the default vertex_chat logger.
    """
    logger = get_logger("vertex_chat")
    logger.propagate = True
    return logger


@pytest.fixture(autouse=True)
def retain_logging_level():
    """Fixture to preserve the logging level between tests."""
    logger = get_logger("vertex_chat")
    log_level = logger.level
    yield
    logger.setLevel(log_level)


@pytest.fixture
def single_turn_history():
    return [
        Content(role=Role.USER, parts=[Part(text="Hello")]),
        Content(role=Role.MODEL, parts=[Part(text="Hi there!")]),
    ]
