"""Register Telegram bot handlers behind the allow-list gate."""

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler

from auroscope.access.decision import gate_is_open
from auroscope.access.diagnostics import describe_posture
from auroscope.access.policy import AllowListPolicy
from auroscope.models import Posture
from auroscope.telegram.middleware import build_user_filter, unauthorized_handler

WELCOME_TEXT = (
    "<b>AuroScope report bot</b>\n\n"
    "You are on the allow-list for this bot.\n\n"
    "Commands:\n"
    "/help \u2014 Show this help"
)


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(WELCOME_TEXT, parse_mode="HTML")


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    policy = context.bot_data["policy"]
    posture = context.bot_data["posture"]
    text = f"{WELCOME_TEXT}\n\nAccess: {describe_posture(policy, posture)}"
    await update.message.reply_text(text, parse_mode="HTML")


def register_handlers(app: Application, policy: AllowListPolicy, posture: Posture = Posture.DENY_ALL) -> None:
    """Add command handlers and the catch-all for rejected users."""
    user_filter = build_user_filter(policy, posture)

    app.add_handler(CommandHandler("start", start_command, filters=user_filter))
    app.add_handler(CommandHandler("help", help_command, filters=user_filter))

    # Catch-all for unauthorized users (must be last)
    if not gate_is_open(policy, posture):
        app.add_handler(MessageHandler(~user_filter, unauthorized_handler))
