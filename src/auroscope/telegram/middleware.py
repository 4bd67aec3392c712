"""Access control for Telegram bot."""

import logging

from telegram import Update
from telegram.ext import filters

from auroscope.access.decision import gate_is_open
from auroscope.access.policy import AllowListPolicy
from auroscope.models import IdScheme, Posture

logger = logging.getLogger(__name__)

ACCESS_RESTRICTED = "Access restricted."


def build_user_filter(policy: AllowListPolicy, posture: Posture = Posture.DENY_ALL) -> filters.BaseFilter:
    """Build a filter that restricts access to the allow-list.

    An empty allow-list admits everyone under ALLOW_ALL and nobody under
    DENY_ALL (a User filter with no entries never matches).
    """
    if gate_is_open(policy, posture):
        return filters.ALL
    if policy.scheme is IdScheme.TOKEN:
        return filters.User(username=list(policy.ordered_ids))
    return filters.User(user_id=list(policy.ordered_ids))


async def unauthorized_handler(update: Update, context) -> None:
    """Reply to unauthorized users."""
    user = update.effective_user
    logger.info("Rejected update from user %s", user.id if user else None)
    if update.effective_message:
        await update.effective_message.reply_text(ACCESS_RESTRICTED)
