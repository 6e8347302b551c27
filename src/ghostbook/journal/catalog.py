"""Static catalog of evidences and ghosts."""

from dataclasses import dataclass
from enum import Enum


class Evidence(Enum):
    """Evidence types that can be found during an investigation."""

    DOTS = "dots"
    EMF = "emf"
    FREEZING = "freezing"
    ORB = "orb"
    WRITING = "writing"
    BOX = "box"
    UV = "uv"


EVIDENCE_LABELS: dict[Evidence, str] = {
    Evidence.DOTS: "D.O.T.S Projector",
    Evidence.EMF: "EMF Level 5",
    Evidence.FREEZING: "Freezing Temperatures",
    Evidence.ORB: "Ghost Orb",
    Evidence.WRITING: "Ghost Writing",
    Evidence.BOX: "Spirit Box",
    Evidence.UV: "Ultraviolet",
}

# Evidences a ghost has, before difficulty or fake evidences are considered.
MAX_EVIDENCES = 3


@dataclass(frozen=True)
class GhostDefinition:
    """A ghost and the evidences it can leave behind.

    Attributes:
        name: Display name of the ghost.
        evidences: The three evidences the ghost has.
        guaranteed: Evidence that is always present, whatever the difficulty.
        fake: Evidence that is always present but does not count towards the
            difficulty's evidence count.
    """

    name: str
    evidences: frozenset[Evidence]
    guaranteed: Evidence | None = None
    fake: Evidence | None = None

    def __post_init__(self) -> None:
        if len(self.evidences) != MAX_EVIDENCES:
            raise ValueError(
                f"Ghost '{self.name}' must have exactly {MAX_EVIDENCES} evidences"
            )
        if self.guaranteed is not None and self.guaranteed not in self.evidences:
            raise ValueError(
                f"Guaranteed evidence of '{self.name}' is not one of its evidences"
            )


def _ghost(
    name: str,
    *evidences: Evidence,
    guaranteed: Evidence | None = None,
    fake: Evidence | None = None,
) -> GhostDefinition:
    return GhostDefinition(name, frozenset(evidences), guaranteed, fake)


E = Evidence

GHOSTS: tuple[GhostDefinition, ...] = (
    _ghost("Spirit", E.EMF, E.BOX, E.WRITING),
    _ghost("Wraith", E.EMF, E.BOX, E.DOTS),
    _ghost("Phantom", E.BOX, E.UV, E.DOTS),
    _ghost("Poltergeist", E.BOX, E.UV, E.WRITING),
    _ghost("Banshee", E.UV, E.ORB, E.DOTS),
    _ghost("Jinn", E.EMF, E.UV, E.FREEZING),
    _ghost("Mare", E.BOX, E.ORB, E.WRITING),
    _ghost("Revenant", E.ORB, E.WRITING, E.FREEZING),
    _ghost("Shade", E.EMF, E.WRITING, E.FREEZING),
    _ghost("Demon", E.UV, E.WRITING, E.FREEZING),
    _ghost("Yurei", E.ORB, E.FREEZING, E.DOTS),
    _ghost("Oni", E.EMF, E.FREEZING, E.DOTS),
    _ghost("Yokai", E.BOX, E.ORB, E.DOTS),
    _ghost("Hantu", E.UV, E.ORB, E.FREEZING, guaranteed=E.FREEZING),
    _ghost("Goryo", E.EMF, E.UV, E.DOTS, guaranteed=E.DOTS),
    _ghost("Myling", E.EMF, E.UV, E.WRITING),
    _ghost("Onryo", E.BOX, E.ORB, E.FREEZING),
    _ghost("The Twins", E.EMF, E.BOX, E.FREEZING),
    _ghost("Raiju", E.EMF, E.ORB, E.DOTS),
    _ghost("Obake", E.EMF, E.UV, E.ORB, guaranteed=E.UV),
    _ghost("The Mimic", E.BOX, E.UV, E.FREEZING, fake=E.ORB),
    _ghost("Moroi", E.BOX, E.WRITING, E.FREEZING, guaranteed=E.BOX),
    _ghost("Deogen", E.BOX, E.WRITING, E.DOTS, guaranteed=E.BOX),
    _ghost("Thaye", E.ORB, E.WRITING, E.DOTS),
)

del E


def get_ghost(name: str) -> GhostDefinition | None:
    """Look up a ghost by name (case-insensitive)."""
    wanted = name.strip().lower()
    for ghost in GHOSTS:
        if ghost.name.lower() == wanted:
            return ghost
    return None
