"""Shared test fixtures for the AuroScope bot."""

import pytest

from auroscope.access.policy import AllowListPolicy
from auroscope.config import BotConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's real environment out of the tests."""
    monkeypatch.delenv("ALLOWED_USER_IDS", raising=False)
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)


@pytest.fixture
def policy():
    return AllowListPolicy.from_config("111, 222")


@pytest.fixture
def empty_policy():
    return AllowListPolicy.from_config(None)


@pytest.fixture
def bot_config(tmp_path):
    """BotConfig with a test token and no real .env file."""
    return BotConfig(
        telegram={"token": "test-token"},
        env_file=str(tmp_path / ".env"),
    )
