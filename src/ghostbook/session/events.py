"""Interaction events delivered to a journal session."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..journal import Evidence


@dataclass(frozen=True)
class Actor:
    """The user behind an interaction."""

    id: str
    username: str | None = None

    def identities(self) -> set[str]:
        """Keys this actor can be matched against in an allow-list."""
        keys = {self.id}
        if self.username:
            keys.add(normalize_user_key(self.username, is_username=True))
        return keys


def normalize_user_key(value: str | int, *, is_username: bool = False) -> str:
    """Normalize a user id or ``@username`` for allow-list lookups."""
    key = str(value).strip()
    if is_username or key.startswith("@"):
        return "@" + key.lstrip("@").lower()
    return key


@dataclass(frozen=True)
class ToggleEvidence:
    """Move one evidence to its next state."""

    actor: Actor
    evidence: Evidence
    interaction: Any = field(default=None, compare=False)

    kind = "toggle"


@dataclass(frozen=True)
class SetCeiling:
    """Change the difficulty's evidence count."""

    actor: Actor
    ceiling: int
    interaction: Any = field(default=None, compare=False)

    kind = "set_ceiling"


JournalEvent = ToggleEvidence | SetCeiling


class EventOutcome(Enum):
    """What a session did with an event."""

    APPLIED = "applied"
    DENIED = "denied"
    REJECTED = "rejected"
    DISCARDED = "discarded"
    FAILED = "failed"
