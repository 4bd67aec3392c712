"""Pydantic data models for the access allow-list."""

from enum import Enum

from pydantic import BaseModel, Field


class Provenance(str, Enum):
    """Whether the allow-list value was supplied at all."""
    ABSENT = "absent"
    EMPTY = "empty"
    PRESENT = "present"


class IdScheme(str, Enum):
    NUMERIC = "numeric"
    TOKEN = "token"


class Posture(str, Enum):
    """What an allow-list with no accepted identifiers means."""
    DENY_ALL = "deny_all"
    ALLOW_ALL = "allow_all"


class MalformedEntry(BaseModel):
    """A token that was skipped while parsing the allow-list."""
    position: int
    token: str
    reason: str


class PolicyDiagnostics(BaseModel):
    raw: str | None = None
    provenance: Provenance
    accepted_count: int = 0
    malformed: list[MalformedEntry] = Field(default_factory=list)
