"""Authorization decision combining the allow-list with the empty-list posture."""

from auroscope.access.policy import AllowListPolicy
from auroscope.models import Posture


def is_permitted(policy: AllowListPolicy, user_id, posture: Posture = Posture.DENY_ALL) -> bool:
    """Decide whether ``user_id`` may use the bot.

    A non-empty allow-list always decides by membership. The posture only
    applies when no identifier was accepted (absent, empty or all malformed).
    """
    if policy.is_empty:
        return posture is Posture.ALLOW_ALL
    return policy.is_allowed(user_id)


def gate_is_open(policy: AllowListPolicy, posture: Posture) -> bool:
    """True when everyone is admitted and no gate needs to be installed."""
    return policy.is_empty and posture is Posture.ALLOW_ALL
