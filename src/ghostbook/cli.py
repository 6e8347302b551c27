"""CLI interface for Ghostbook."""

import asyncio
import getpass
from typing import Any

from .journal import CEILING_VALUES, EVIDENCE_LABELS, Evidence
from .logging import configure_logger, get_logger
from .session import (
    Actor,
    EventOutcome,
    JournalEvent,
    JournalSession,
    JournalSurface,
    RenderPayload,
    SessionConfig,
    SetCeiling,
    TerminationReason,
    ToggleEvidence,
    format_journal,
)

BANNER = """
╔══════════════════════════════════════════╗
║         👻 Ghostbook v0.1.0              ║
║      Ghost hunting journal               ║
╚══════════════════════════════════════════╝

Commands:
  <evidence>     - Cycle an evidence (dots, emf, freezing, orb,
                   writing, box, uv): unknown → found → ruled out
  1, 2, 3        - Set the difficulty's evidence count
  /help          - Show this help
  /exit, /quit   - Close the journal
"""


class ConsoleSurface(JournalSurface):
    """Shows a journal on standard output."""

    def __init__(self) -> None:
        self.visible = False

    async def can_render(self) -> bool:
        return True

    async def render(self, payload: RenderPayload, interaction: Any = None) -> None:
        self.visible = True
        print("\n" + "─" * 40)
        print(format_journal(payload, with_states=True))
        print("─" * 40)

    async def notify(
        self,
        actor_id: str,
        message: str,
        *,
        ephemeral: bool = True,
        interaction: Any = None,
    ) -> None:
        print(f"\n⚠ {message}")

    async def delete_surface(self) -> None:
        if self.visible:
            print("\n📕 Journal closed.")
        self.visible = False


def _evidence_aliases() -> dict[str, Evidence]:
    aliases: dict[str, Evidence] = {}
    for evidence, label in EVIDENCE_LABELS.items():
        aliases[evidence.value] = evidence
        aliases[label.lower()] = evidence
    return aliases


EVIDENCE_ALIASES = _evidence_aliases()


def parse_input(text: str, actor: Actor) -> JournalEvent | None:
    """Turn a line of input into a journal event, or None if unrecognised."""
    value = text.strip().lower()

    if value.isdigit():
        return SetCeiling(actor, int(value))

    evidence = EVIDENCE_ALIASES.get(value)
    if evidence is not None:
        return ToggleEvidence(actor, evidence)

    return None


class ConsoleJournal:
    """Interactive journal in the terminal for a single local user."""

    def __init__(
        self,
        config: SessionConfig | None = None,
        surface: ConsoleSurface | None = None,
        user: str | None = None,
    ) -> None:
        self.config = config or SessionConfig.from_env()
        self.surface = surface or ConsoleSurface()
        self.actor = Actor(user or getpass.getuser())
        self.logger = get_logger()
        self.session = JournalSession(
            self.surface,
            self.actor,
            config=self.config,
            session_id=f"cli-{self.actor.id}",
            json_logger=self.logger,
        )

    async def _handle_command(self, command: str) -> bool:
        """Handle a special command. Returns True if should continue, False to exit."""
        cmd = command.lower().strip()

        if cmd in ("/exit", "/quit", "exit", "quit"):
            return False

        if cmd == "/help":
            print(BANNER)
            return True

        print(f"Unknown command: {command}")
        return True

    async def _process_input(self, text: str) -> bool:
        """Apply a line of input. Returns False once the journal is closed."""
        event = parse_input(text, self.actor)
        if event is None:
            print(f"Unknown evidence: {text} (type /help)")
            return True

        outcome = await self.session.handle(event)
        if outcome is EventOutcome.REJECTED:
            counts = ", ".join(str(count) for count in sorted(CEILING_VALUES))
            print(f"Evidence count must be one of {counts}")
        return not self.session.terminated

    async def run(self) -> None:
        """Run the interactive journal."""
        print(BANNER)

        if not await self.session.start():
            print("\n❌ Could not open the journal")
            return

        try:
            while not self.session.terminated:
                try:
                    user_input = (await asyncio.to_thread(input, "journal> ")).strip()
                except (KeyboardInterrupt, EOFError):
                    print("\n👋 Goodbye!")
                    break

                if not user_input:
                    continue

                if user_input.startswith("/") or user_input.lower() in ("exit", "quit"):
                    if not await self._handle_command(user_input):
                        print("\n👋 Goodbye!")
                        break
                    continue

                if not await self._process_input(user_input):
                    break
        finally:
            await self.session.terminate(TerminationReason.CLOSED)

        if self.session.termination_reason is TerminationReason.IDLE:
            print("\n⏰ Journal closed after being idle.")


async def run_cli() -> None:
    """Run the console journal with default configuration."""
    configure_logger()

    journal = ConsoleJournal()
    await journal.run()
