import logging

import pytest

FACTORY = "0x1234567890123456789012345678901234567890"
GAME_TOKEN = "0xabcdef0123456789abcdef0123456789abcdef01"


@pytest.fixture
def factory_address():
    return FACTORY


@pytest.fixture
def game_token_address():
    return GAME_TOKEN


@pytest.fixture
def sdk():
    """A facade over the default catalog registry."""
    from gametoken.sdk import GameTokenSdk

    return GameTokenSdk()


@pytest.fixture
def generator():
    from gametoken.core.calldata import CallDataGenerator

    return CallDataGenerator()


@pytest.fixture
def split_words():
    """Split 0x calldata into [selector, word0, word1, ...] as hex strings."""

    def _split(calldata: str) -> list[str]:
        body = calldata[10:]
        assert len(body) % 64 == 0, "argument block is not word aligned"
        return [calldata[2:10]] + [body[i:i + 64] for i in range(0, len(body), 64)]

    return _split


@pytest.fixture(autouse=True)
def restore_package_logger():
    """setup_logging() replaces handlers on the package logger; undo it per test."""
    logger = logging.getLogger("gametoken")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
