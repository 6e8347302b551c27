"""Deduce which ghosts are still possible given the observed evidences."""

from collections.abc import Iterable

from .catalog import GHOSTS, MAX_EVIDENCES, GhostDefinition
from .observations import EvidenceState, ObservationSet


def is_possible(ghost: GhostDefinition, observation: ObservationSet) -> bool:
    """Check whether a single ghost is consistent with the observation."""
    present = observation.present()
    absent = observation.absent()
    ceiling = observation.ceiling

    # Fake evidence never counts towards the difficulty's evidence count.
    present_real = present - {ghost.fake}

    # Found an evidence the ghost doesn't have.
    if not present_real <= ghost.evidences:
        return False

    # Found more evidences than the difficulty allows.
    if len(present_real) > ceiling:
        return False

    # More of the ghost's evidences ruled out than the difficulty disables.
    if len(ghost.evidences & absent) > MAX_EVIDENCES - ceiling:
        return False

    if ghost.guaranteed is not None:
        state = observation.state(ghost.guaranteed)
        if state is EvidenceState.ABSENT:
            return False
        if state is not EvidenceState.PRESENT and ceiling - len(present_real) < 1:
            return False

    if ghost.fake is not None and ghost.fake in absent:
        return False

    return True


def possible_ghosts(
    observation: ObservationSet,
    catalog: Iterable[GhostDefinition] = GHOSTS,
) -> list[str]:
    """Return the names of the possible ghosts, in catalog order."""
    return [ghost.name for ghost in catalog if is_possible(ghost, observation)]
