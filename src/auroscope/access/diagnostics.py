"""Startup log lines describing how the allow-list was interpreted."""

import logging

from auroscope.access.policy import AllowListPolicy
from auroscope.models import Posture, Provenance

logger = logging.getLogger(__name__)


def describe_posture(policy: AllowListPolicy, posture: Posture) -> str:
    if not policy.is_empty:
        return f"restricted to {len(policy)} identifier(s)"
    if posture is Posture.ALLOW_ALL:
        return "open to everyone (allow-list is empty)"
    return "closed to everyone (allow-list is empty)"


def log_policy(
    policy: AllowListPolicy,
    posture: Posture = Posture.DENY_ALL,
    log: logging.Logger | None = None,
) -> None:
    """Report the raw value, provenance, accepted count and malformed entries."""
    log = log or logger

    if policy.provenance is Provenance.ABSENT:
        log.info("Allow-list variable is not set")
    else:
        log.info("Allow-list raw value: %r", policy.raw)

    log.info(
        "Allow-list provenance=%s accepted=%d ids=%s",
        policy.provenance.value,
        len(policy),
        list(policy.ordered_ids),
    )

    for entry in policy.malformed:
        log.warning(
            "Skipping malformed allow-list entry #%d %r: %s",
            entry.position,
            entry.token,
            entry.reason,
        )

    if policy.is_empty:
        log.warning("Bot access is %s", describe_posture(policy, posture))
