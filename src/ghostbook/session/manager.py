"""Routing table from displayed journals to their sessions."""

import asyncio
import logging
from collections.abc import Hashable

from .controller import JournalSession, TerminationReason

logger = logging.getLogger(__name__)


class SessionManager:
    """Tracks live sessions so interactions can reach them.

    Sessions are forgotten as soon as they terminate. Each session serializes
    its own events, so the manager holds no locks.
    """

    def __init__(self) -> None:
        self._sessions: dict[Hashable, JournalSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._sessions

    def register(self, key: Hashable, session: JournalSession) -> None:
        """Route interactions for key to session."""
        if session.terminated:
            return
        existing = self._sessions.get(key)
        if existing is not None and existing is not session:
            raise ValueError(f"A journal is already registered for {key!r}")

        self._sessions[key] = session
        session.on_terminate(lambda s: self._forget(key, s))

    def get(self, key: Hashable) -> JournalSession | None:
        """Get the live session for key."""
        return self._sessions.get(key)

    def _forget(self, key: Hashable, session: JournalSession) -> None:
        if self._sessions.get(key) is session:
            del self._sessions[key]

    async def terminate_all(
        self, reason: TerminationReason = TerminationReason.SHUTDOWN
    ) -> int:
        """Terminate every live session. Returns how many were terminated."""
        sessions = list(self._sessions.values())
        results = await asyncio.gather(
            *(session.terminate(reason) for session in sessions),
            return_exceptions=True,
        )
        count = 0
        for session, result in zip(sessions, results):
            if isinstance(result, BaseException):
                logger.error("Failed to terminate %s: %s", session.session_id, result)
            elif result:
                count += 1
        return count
