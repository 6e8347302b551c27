"""Evidence catalog, observations and deduction."""

from .catalog import EVIDENCE_LABELS, GHOSTS, MAX_EVIDENCES, Evidence, GhostDefinition
from .deduction import is_possible, possible_ghosts
from .observations import CEILING_VALUES, EvidenceState, ObservationSet

__all__ = [
    "CEILING_VALUES",
    "EVIDENCE_LABELS",
    "Evidence",
    "EvidenceState",
    "GHOSTS",
    "GhostDefinition",
    "MAX_EVIDENCES",
    "ObservationSet",
    "is_possible",
    "possible_ghosts",
]
