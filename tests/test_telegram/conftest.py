"""Shared fixtures for Telegram bot tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from auroscope.models import Posture


@pytest.fixture
def bot_data(bot_config, policy):
    """bot_data dict as stored on the Telegram Application."""
    return {
        "config": bot_config,
        "policy": policy,
        "posture": Posture.DENY_ALL,
    }


@pytest.fixture
def make_context(bot_data):
    """Factory for mock ContextTypes.DEFAULT_TYPE."""
    def _make():
        ctx = MagicMock()
        ctx.bot_data = bot_data
        ctx.bot = AsyncMock()
        return ctx
    return _make


@pytest.fixture
def make_command_update():
    """Factory for mock Update from a /command message."""
    def _make(text: str = "/start", user_id: int = 111):
        message = AsyncMock()
        message.text = text
        message.chat_id = 12345
        message.from_user = MagicMock()
        message.from_user.id = user_id

        update = MagicMock()
        update.message = message
        update.callback_query = None
        update.effective_message = message
        update.effective_user = message.from_user
        return update
    return _make
