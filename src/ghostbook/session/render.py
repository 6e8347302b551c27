"""Render payloads and their text form."""

from dataclasses import dataclass

from ..journal import EVIDENCE_LABELS, Evidence, EvidenceState, ObservationSet, possible_ghosts

JOURNAL_TITLE = "Ghost hunting journal"
NO_POSSIBLE_GHOSTS = "No possible ghosts"

STATE_MARKERS = {
    EvidenceState.PRESENT: "✅",
    EvidenceState.UNKNOWN: "▫️",
    EvidenceState.ABSENT: "❌",
}


@dataclass(frozen=True)
class RenderPayload:
    """Everything needed to display a journal."""

    possible: tuple[str, ...]
    states: dict[Evidence, EvidenceState]
    ceiling: int
    idle_seconds: float

    @property
    def none_possible(self) -> bool:
        """No ghost matches the evidences."""
        return not self.possible


def build_payload(observation: ObservationSet, idle_seconds: float) -> RenderPayload:
    return RenderPayload(
        possible=tuple(possible_ghosts(observation)),
        states=dict(observation.states),
        ceiling=observation.ceiling,
        idle_seconds=idle_seconds,
    )


def idle_notice(idle_seconds: float) -> str:
    """Describe how long the journal stays open without interactions."""
    hours = idle_seconds / 3600
    return f"(Disabled after ~{hours:.1f} hour{'' if hours == 1 else 's'} of inactivity)"


def evidence_count_label(count: int) -> str:
    return f"{count} evidence{'' if count == 1 else 's'}"


def format_journal(payload: RenderPayload, *, with_states: bool = False) -> str:
    """Format a journal as plain text."""
    lines = [JOURNAL_TITLE, idle_notice(payload.idle_seconds), ""]

    if payload.none_possible:
        lines.append(NO_POSSIBLE_GHOSTS)
    else:
        lines.append("Possible ghosts:")
        lines.append(", ".join(payload.possible))

    if with_states:
        lines.append("")
        lines.append(f"Evidence count: {evidence_count_label(payload.ceiling)}")
        for evidence, label in EVIDENCE_LABELS.items():
            marker = STATE_MARKERS[payload.states[evidence]]
            lines.append(f"{marker} {label} [{evidence.value}]")

    return "\n".join(lines)
