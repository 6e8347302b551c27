"""Journal sessions and their lifecycle."""

from .controller import (
    JournalSession,
    SessionConfig,
    SessionState,
    TerminationReason,
)
from .events import Actor, EventOutcome, JournalEvent, SetCeiling, ToggleEvidence
from .manager import SessionManager
from .render import RenderPayload, build_payload, format_journal
from .surface import JournalSurface

__all__ = [
    "Actor",
    "EventOutcome",
    "JournalEvent",
    "JournalSession",
    "JournalSurface",
    "RenderPayload",
    "SessionConfig",
    "SessionManager",
    "SessionState",
    "SetCeiling",
    "TerminationReason",
    "ToggleEvidence",
    "build_payload",
    "format_journal",
]
