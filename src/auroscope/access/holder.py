"""Hold the live policy and publish replacements atomically."""

import logging
import threading

from auroscope.access.policy import AllowListPolicy
from auroscope.models import IdScheme

logger = logging.getLogger(__name__)


class PolicyHolder:
    """Reference to the current AllowListPolicy.

    Readers fetch ``current`` without locking; the policy itself is immutable,
    so a reader always sees either the old set or the new one, never a mix.
    The Telegram gate is built once from a policy, so a swap only reaches the
    bot after its handlers are registered again.
    """

    def __init__(self, policy: AllowListPolicy):
        self._policy = policy
        self._lock = threading.Lock()

    @property
    def current(self) -> AllowListPolicy:
        return self._policy

    def swap(self, policy: AllowListPolicy) -> AllowListPolicy:
        """Publish a new policy and return the one it replaced."""
        with self._lock:
            previous, self._policy = self._policy, policy
        logger.info(
            "Allow-list replaced: %d -> %d identifiers", len(previous), len(policy)
        )
        return previous

    def reload(self, raw: str | None, scheme: IdScheme | None = None) -> AllowListPolicy:
        """Re-parse a raw value and swap the result in."""
        if scheme is None:
            scheme = self._policy.scheme
        policy = AllowListPolicy.from_config(raw, scheme)
        self.swap(policy)
        return policy

    def is_allowed(self, candidate) -> bool:
        return self._policy.is_allowed(candidate)
