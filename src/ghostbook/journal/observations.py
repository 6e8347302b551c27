"""Per-session evidence observations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import InvalidCeilingValue
from .catalog import MAX_EVIDENCES, Evidence

CEILING_VALUES = (3, 2, 1)


class EvidenceState(Enum):
    """What is known about one evidence."""

    PRESENT = "present"
    UNKNOWN = "unknown"
    ABSENT = "absent"


# Each toggle moves an evidence one step along this rotation.
_NEXT_STATE = {
    EvidenceState.ABSENT: EvidenceState.UNKNOWN,
    EvidenceState.UNKNOWN: EvidenceState.PRESENT,
    EvidenceState.PRESENT: EvidenceState.ABSENT,
}


def validate_ceiling(value: Any) -> int:
    """Return value as an evidence count, or raise InvalidCeilingValue."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCeilingValue(value)
    if value not in CEILING_VALUES:
        raise InvalidCeilingValue(value)
    return value


def _default_states() -> dict[Evidence, EvidenceState]:
    return {evidence: EvidenceState.UNKNOWN for evidence in Evidence}


@dataclass
class ObservationSet:
    """Evidence states found so far plus the difficulty's evidence count.

    Evidences missing from ``states`` start as UNKNOWN.
    """

    states: dict[Evidence, EvidenceState] = field(default_factory=_default_states)
    ceiling: int = MAX_EVIDENCES

    def __post_init__(self) -> None:
        states = _default_states()
        states.update(self.states)
        self.states = states
        self.ceiling = validate_ceiling(self.ceiling)

    def state(self, evidence: Evidence) -> EvidenceState:
        return self.states[evidence]

    def toggle(self, evidence: Evidence) -> EvidenceState:
        """Advance an evidence to its next state and return it."""
        new_state = _NEXT_STATE[self.states[evidence]]
        self.states[evidence] = new_state
        return new_state

    def set_ceiling(self, value: Any) -> None:
        self.ceiling = validate_ceiling(value)

    def present(self) -> set[Evidence]:
        return {e for e, s in self.states.items() if s is EvidenceState.PRESENT}

    def absent(self) -> set[Evidence]:
        return {e for e, s in self.states.items() if s is EvidenceState.ABSENT}

    def copy(self) -> "ObservationSet":
        return ObservationSet(states=dict(self.states), ceiling=self.ceiling)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict for logging."""
        return {
            "states": {e.value: s.value for e, s in self.states.items()},
            "ceiling": self.ceiling,
        }
