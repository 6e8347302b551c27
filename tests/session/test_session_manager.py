"""Tests for the session routing table."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ghostbook.logging import JSONLLogger
from ghostbook.session import (
    Actor,
    JournalSession,
    JournalSurface,
    SessionManager,
    TerminationReason,
)


def make_session() -> JournalSession:
    surface = MagicMock(spec=JournalSurface)
    surface.can_render = AsyncMock(return_value=True)
    surface.render = AsyncMock()
    surface.notify = AsyncMock()
    surface.delete_surface = AsyncMock()
    return JournalSession(surface, Actor("1"), json_logger=MagicMock(spec=JSONLLogger))


@pytest.mark.asyncio
class TestSessionManager:
    async def test_register_and_get(self):
        manager = SessionManager()
        session = make_session()
        await session.start()

        manager.register((1, 10), session)

        assert manager.get((1, 10)) is session
        assert (1, 10) in manager
        assert len(manager) == 1
        await session.terminate()

    async def test_forgets_terminated_sessions(self):
        manager = SessionManager()
        session = make_session()
        await session.start()
        manager.register("journal", session)

        await session.terminate()

        assert manager.get("journal") is None
        assert len(manager) == 0

    async def test_ignores_already_terminated(self):
        manager = SessionManager()
        session = make_session()
        await session.terminate()

        manager.register("journal", session)

        assert "journal" not in manager

    async def test_duplicate_key_raises(self):
        manager = SessionManager()
        first, second = make_session(), make_session()
        await first.start()
        await second.start()
        manager.register("journal", first)

        with pytest.raises(ValueError, match="already registered"):
            manager.register("journal", second)

        await manager.terminate_all()
        await second.terminate()

    async def test_terminate_all(self):
        manager = SessionManager()
        sessions = [make_session() for _ in range(3)]
        for i, session in enumerate(sessions):
            await session.start()
            manager.register(i, session)
        await sessions[0].terminate()

        count = await manager.terminate_all()

        assert count == 2
        assert len(manager) == 0
        assert all(s.termination_reason is TerminationReason.SHUTDOWN for s in sessions[1:])
        for session in sessions:
            session.surface.delete_surface.assert_awaited_once()
