"""Interface between a journal session and the place it is displayed."""

from abc import ABC, abstractmethod
from typing import Any

from .render import RenderPayload


class JournalSurface(ABC):
    """Where a session shows its journal and talks to users."""

    @abstractmethod
    async def can_render(self) -> bool:
        """Whether the journal can be shown (and later deleted) here."""
        ...

    @abstractmethod
    async def render(self, payload: RenderPayload, interaction: Any = None) -> None:
        """Show or update the journal. Raises on failure."""
        ...

    @abstractmethod
    async def notify(
        self,
        actor_id: str,
        message: str,
        *,
        ephemeral: bool = True,
        interaction: Any = None,
    ) -> None:
        """Send a notice to a single user."""
        ...

    @abstractmethod
    async def delete_surface(self) -> None:
        """Remove the displayed journal."""
        ...
