"""Journal session: one interactive deduction and its lifecycle."""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import InvalidCeilingValue, StateUsedBeforeInit
from ..journal import ObservationSet
from ..journal.observations import validate_ceiling
from ..logging import JSONLLogger, get_logger
from .events import Actor, EventOutcome, JournalEvent, SetCeiling, ToggleEvidence, normalize_user_key
from .render import RenderPayload, build_payload
from .surface import JournalSurface

logger = logging.getLogger(__name__)

NOT_INVITED_MESSAGE = "You were not invited to use this journal."
NO_PERMISSION_MESSAGE = "I don't have permission to post in this chat."


class SessionState(Enum):
    """Lifecycle of a journal session."""

    INITIALIZING = "initializing"
    ACTIVE = "active"
    TERMINATED = "terminated"


class TerminationReason(Enum):
    """Why a journal session ended."""

    CLOSED = "closed"
    IDLE = "idle"
    PERMISSION_DENIED = "permission_denied"
    RENDER_FAILED = "render_failed"
    INVARIANT_VIOLATION = "invariant_violation"
    SHUTDOWN = "shutdown"


@dataclass
class SessionConfig:
    """Configuration for journal sessions."""

    idle_seconds: float = 3600  # 1 hour
    max_invites: int = 3

    @classmethod
    def from_env(cls) -> SessionConfig:
        """Load configuration from environment variables."""
        return cls(
            idle_seconds=float(os.getenv("JOURNAL_IDLE_SECONDS", "3600")),
            max_invites=int(os.getenv("JOURNAL_MAX_INVITES", "3")),
        )


class JournalSession:
    """A journal shared by its owner and the users they invited.

    Call ``start()`` once to show the journal, then feed interactions to
    ``handle()``. Events are processed one at a time. The session ends on
    idle expiry, on a failed render, or when ``terminate()`` is called, and
    never starts again.
    """

    def __init__(
        self,
        surface: JournalSurface,
        owner: Actor,
        invited: Iterable[str] = (),
        config: SessionConfig | None = None,
        session_id: str | None = None,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        self.surface = surface
        self.owner = owner
        self.config = config or SessionConfig()
        self.session_id = session_id or f"journal-{uuid.uuid4().hex[:8]}"
        self.json_logger = json_logger or get_logger()

        self._invited = _normalize_invites(invited, self.config.max_invites)
        self.allowed_users: frozenset[str] | None = None
        self.observation: ObservationSet | None = None
        self.state = SessionState.INITIALIZING
        self.termination_reason: TerminationReason | None = None
        self.idle_deadline: float | None = None

        self._lock = asyncio.Lock()
        self._idle_task: asyncio.Task | None = None
        self._surface_requested = False
        self._terminate_listeners: list[Callable[[JournalSession], Any]] = []

    @property
    def active(self) -> bool:
        return self.state is SessionState.ACTIVE

    @property
    def terminated(self) -> bool:
        """Whether the session ended. A terminated session never restarts."""
        return self.state is SessionState.TERMINATED

    def on_terminate(self, listener: Callable[[JournalSession], Any]) -> None:
        """Call listener once the session is terminated."""
        if self.terminated:
            listener(self)
            return
        self._terminate_listeners.append(listener)

    async def start(self) -> bool:
        """Check permissions and show the journal.

        Returns True if the session is now active.
        """
        if self.state is not SessionState.INITIALIZING:
            raise RuntimeError(f"Session {self.session_id} was already started")

        try:
            can_render = await self.surface.can_render()
        except Exception:
            logger.exception("Capability check failed for %s", self.session_id)
            can_render = False

        if not can_render:
            await self._notify(self.owner.id, NO_PERMISSION_MESSAGE)
            await self.terminate(TerminationReason.PERMISSION_DENIED)
            return False

        self.allowed_users = frozenset(self.owner.identities() | set(self._invited))
        self.observation = ObservationSet()

        try:
            await self.surface.render(self.render_payload())
        except Exception as e:
            logger.warning("Could not show journal %s: %s", self.session_id, e)
            await self.terminate(TerminationReason.RENDER_FAILED, error=str(e))
            return False

        if self.terminated:
            # Terminated while the journal was being sent; it exists now.
            await self._delete_surface()
            return False
        self._surface_requested = True

        self.state = SessionState.ACTIVE
        self._refresh_deadline()
        self._idle_task = asyncio.create_task(self._idle_watch())

        try:
            self.json_logger.log_session_start(
                self.session_id,
                owner_id=self.owner.id,
                allowed_users=sorted(self.allowed_users),
            )
        except Exception:
            logger.exception("Failed to log start of %s", self.session_id)
        return True

    def is_allowed(self, actor: Actor) -> bool:
        """Check if an actor can interact with the journal."""
        if self.allowed_users is None:
            self._fail_invariant("is_allowed called before the allow-list was set")
        return bool(actor.identities() & self.allowed_users)

    def render_payload(self) -> RenderPayload:
        """Build the payload for the current observations."""
        if self.observation is None:
            self._fail_invariant("render_payload called before observations were set")
        return build_payload(self.observation, self.config.idle_seconds)

    async def handle(self, event: JournalEvent) -> EventOutcome:
        """Apply an interaction to the journal and re-render it."""
        if not self.active:
            return EventOutcome.DISCARDED

        if not self.is_allowed(event.actor):
            await self._notify(
                event.actor.id, NOT_INVITED_MESSAGE, interaction=event.interaction
            )
            self._log_event(event, EventOutcome.DENIED)
            return EventOutcome.DENIED

        if isinstance(event, SetCeiling):
            try:
                validate_ceiling(event.ceiling)
            except InvalidCeilingValue as e:
                logger.info("Rejected evidence count for %s: %s", self.session_id, e)
                self._log_event(event, EventOutcome.REJECTED)
                return EventOutcome.REJECTED

        async with self._lock:
            if not self.active:
                return EventOutcome.DISCARDED
            if self.observation is None:
                self._fail_invariant("handle called before observations were set")

            self._refresh_deadline()

            observation = self.observation.copy()
            _apply(observation, event)
            payload = build_payload(observation, self.config.idle_seconds)

            try:
                await self.surface.render(payload, event.interaction)
            except Exception as e:
                if self.terminated:
                    return EventOutcome.DISCARDED
                logger.warning("Could not update journal %s: %s", self.session_id, e)
                await self.terminate(TerminationReason.RENDER_FAILED, error=str(e))
                self._log_event(event, EventOutcome.FAILED)
                return EventOutcome.FAILED

            if not self.active:
                return EventOutcome.DISCARDED

            self.observation = observation

        self._log_event(event, EventOutcome.APPLIED, possible=len(payload.possible))
        return EventOutcome.APPLIED

    async def terminate(
        self,
        reason: TerminationReason = TerminationReason.CLOSED,
        *,
        error: str | None = None,
    ) -> bool:
        """Stop accepting interactions and delete the journal.

        Safe to call more than once; only the first call does anything.
        Returns True if this call terminated the session.
        """
        if not self._mark_terminated(reason, error=error):
            return False

        if self._surface_requested:
            await self._delete_surface()
        return True

    def _mark_terminated(self, reason: TerminationReason, *, error: str | None = None) -> bool:
        if self.terminated:
            return False

        self.state = SessionState.TERMINATED
        self.termination_reason = reason
        self.idle_deadline = None

        task, self._idle_task = self._idle_task, None
        if task is not None and task is not _current_task():
            task.cancel()

        listeners, self._terminate_listeners = self._terminate_listeners, []
        for listener in listeners:
            try:
                listener(self)
            except Exception:
                logger.exception("Termination listener failed for %s", self.session_id)

        try:
            self.json_logger.log_session_end(self.session_id, reason.value, error=error)
        except Exception:
            logger.exception("Failed to log end of %s", self.session_id)
        return True

    def _fail_invariant(self, message: str) -> None:
        self._mark_terminated(TerminationReason.INVARIANT_VIOLATION, error=message)
        raise StateUsedBeforeInit(message)

    async def _delete_surface(self) -> None:
        try:
            await self.surface.delete_surface()
        except Exception:
            logger.warning("Failed to delete journal %s", self.session_id, exc_info=True)

    async def _notify(self, actor_id: str, message: str, interaction: Any = None) -> None:
        try:
            await self.surface.notify(
                actor_id, message, ephemeral=True, interaction=interaction
            )
        except Exception:
            logger.warning("Failed to notify %s", actor_id, exc_info=True)

    def _refresh_deadline(self) -> None:
        self.idle_deadline = asyncio.get_running_loop().time() + self.config.idle_seconds

    async def _idle_watch(self) -> None:
        """Terminate the session once the idle deadline passes."""
        loop = asyncio.get_running_loop()
        while self.active and self.idle_deadline is not None:
            delay = self.idle_deadline - loop.time()
            if delay <= 0:
                await self.terminate(TerminationReason.IDLE)
                return
            await asyncio.sleep(delay)

    def _log_event(
        self, event: JournalEvent, outcome: EventOutcome, possible: int | None = None
    ) -> None:
        try:
            self.json_logger.log_session_event(
                self.session_id,
                event.kind,
                outcome.value,
                actor_id=event.actor.id,
                possible=possible,
            )
        except Exception:
            logger.exception("Failed to log %s event for %s", event.kind, self.session_id)


def _apply(observation: ObservationSet, event: JournalEvent) -> None:
    if isinstance(event, ToggleEvidence):
        observation.toggle(event.evidence)
    elif isinstance(event, SetCeiling):
        observation.set_ceiling(event.ceiling)
    else:
        raise TypeError(f"Unknown journal event: {event!r}")


def _normalize_invites(invited: Iterable[str], limit: int) -> list[str]:
    keys: list[str] = []
    for user in invited:
        key = normalize_user_key(user)
        if key and key not in keys:
            keys.append(key)
    return keys[:limit]


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
