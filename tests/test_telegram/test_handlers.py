"""Tests for command handlers."""

import pytest

from auroscope.access.policy import AllowListPolicy
from auroscope.models import Posture
from auroscope.telegram.handlers import WELCOME_TEXT, help_command, start_command


@pytest.mark.asyncio
class TestStartCommand:
    async def test_replies_welcome(self, make_command_update, make_context):
        update = make_command_update("/start")
        await start_command(update, make_context())
        update.message.reply_text.assert_awaited_once_with(WELCOME_TEXT, parse_mode="HTML")


@pytest.mark.asyncio
class TestHelpCommand:
    async def test_includes_access_summary(self, make_command_update, make_context):
        update = make_command_update("/help")
        await help_command(update, make_context())
        text = update.message.reply_text.await_args.args[0]
        assert text.startswith(WELCOME_TEXT)
        assert "restricted to 2 identifier(s)" in text

    async def test_open_bot(self, make_command_update, make_context):
        ctx = make_context()
        ctx.bot_data["policy"] = AllowListPolicy.from_config(None)
        ctx.bot_data["posture"] = Posture.ALLOW_ALL
        update = make_command_update("/help")
        await help_command(update, ctx)
        text = update.message.reply_text.await_args.args[0]
        assert "open to everyone" in text
