"""Allow-list policy: parse a delimited config string into authorized principals.

The policy is built once from the raw ``ALLOWED_USER_IDS`` value and never
changes afterwards. Parsing is fail-soft per entry: a malformed token is skipped
and reported, the remaining tokens still make it into the list.
"""

import os
import re
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, PrivateAttr

from auroscope.models import IdScheme, MalformedEntry, PolicyDiagnostics, Provenance

DEFAULT_ENV_VAR = "ALLOWED_USER_IDS"
DELIMITER = ","

# Telegram ids are signed 64-bit integers
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_NUMERIC_RE = re.compile(r"[+-]?[0-9]+")
_TOKEN_RE = re.compile(r"[^\s,]+")

PrincipalId = int | str


class InvalidPrincipalId(ValueError):
    """Raised when a value does not match the identifier scheme."""


def normalize_id(value, scheme: IdScheme = IdScheme.NUMERIC) -> PrincipalId:
    """Canonicalize an identifier, or raise InvalidPrincipalId.

    Numeric ids come back as ``int`` (so ``" +007"`` and ``7`` are equal),
    token ids as the trimmed ``str`` without a leading ``@``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidPrincipalId(f"unsupported identifier type: {type(value).__name__}")

    if isinstance(value, int):
        if scheme is IdScheme.TOKEN:
            return str(value)
        return _check_range(value)

    token = value.strip()
    if not token:
        raise InvalidPrincipalId("empty identifier")

    if scheme is IdScheme.TOKEN:
        # Telegram usernames are written with or without a leading "@"
        if token.startswith("@"):
            token = token[1:]
        if not _TOKEN_RE.fullmatch(token):
            raise InvalidPrincipalId("identifier contains whitespace or a delimiter")
        return token

    if not _NUMERIC_RE.fullmatch(token):
        raise InvalidPrincipalId("not a decimal integer")
    return _check_range(int(token))


def _check_range(number: int) -> int:
    if not INT64_MIN <= number <= INT64_MAX:
        raise InvalidPrincipalId("outside the signed 64-bit range")
    return number


class AllowListPolicy(BaseModel):
    """Immutable set of principals allowed to use the bot."""

    model_config = ConfigDict(frozen=True)

    raw: str | None = None
    provenance: Provenance = Provenance.ABSENT
    scheme: IdScheme = IdScheme.NUMERIC
    ordered_ids: tuple[PrincipalId, ...] = ()
    malformed: tuple[MalformedEntry, ...] = ()

    _ids: frozenset = PrivateAttr(default_factory=frozenset)

    @classmethod
    def from_config(cls, raw: str | None, scheme: IdScheme = IdScheme.NUMERIC) -> "AllowListPolicy":
        """Parse a comma-separated allow-list. Never raises for string input."""
        if raw is None:
            return cls(raw=None, provenance=Provenance.ABSENT, scheme=scheme)
        if not raw.strip():
            return cls(raw=raw, provenance=Provenance.EMPTY, scheme=scheme)

        accepted: dict[PrincipalId, None] = {}
        malformed = []
        for position, token in enumerate(raw.split(DELIMITER)):
            token = token.strip()
            if not token:
                continue
            try:
                principal = normalize_id(token, scheme)
            except InvalidPrincipalId as e:
                malformed.append(MalformedEntry(position=position, token=token, reason=str(e)))
                continue
            accepted.setdefault(principal, None)

        return cls(
            raw=raw,
            provenance=Provenance.PRESENT,
            scheme=scheme,
            ordered_ids=tuple(accepted),
            malformed=tuple(malformed),
        )

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        var: str = DEFAULT_ENV_VAR,
        scheme: IdScheme = IdScheme.NUMERIC,
    ) -> "AllowListPolicy":
        """Build the policy from an environment mapping (``os.environ`` by default)."""
        if environ is None:
            environ = os.environ
        return cls.from_config(environ.get(var), scheme)

    def model_post_init(self, __context) -> None:
        self._ids = frozenset(self.ordered_ids)

    @property
    def ids(self) -> frozenset[PrincipalId]:
        return self._ids

    @property
    def is_empty(self) -> bool:
        return not self.ordered_ids

    def is_allowed(self, candidate) -> bool:
        """True iff the normalized candidate is in the allow-list."""
        try:
            principal = normalize_id(candidate, self.scheme)
        except InvalidPrincipalId:
            return False
        return principal in self.ids

    def diagnostics(self) -> PolicyDiagnostics:
        return PolicyDiagnostics(
            raw=self.raw,
            provenance=self.provenance,
            accepted_count=len(self.ordered_ids),
            malformed=list(self.malformed),
        )

    def __contains__(self, candidate) -> bool:
        return self.is_allowed(candidate)

    def __len__(self) -> int:
        return len(self.ordered_ids)
