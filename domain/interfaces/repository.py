"""Interfaces for the collaborators a check talks to."""
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..entities import (
    HeroInfo, ItemCatalog, MatchDetail, MatchNotification, MatchSummary,
    PersistedState, PlayerPerformance,
)


class IMatchRepository(ABC):
    """Interface for the upstream match source.

    Implementations raise the errors from `domain.errors` instead of
    returning sentinels.
    """

    @abstractmethod
    async def get_recent_matches(self, player_id: str, limit: int = 1) -> list[MatchSummary]:
        """Get the player's most recent matches, newest first."""

    @abstractmethod
    async def get_match(self, match_id: str) -> MatchDetail:
        """Get a single match with its player rows."""

    @abstractmethod
    async def get_heroes(self) -> dict[int, HeroInfo]:
        """Get the hero constant table keyed by hero id."""

    @abstractmethod
    async def get_item_catalog(self) -> ItemCatalog:
        """Get the joined item id / item info tables."""

    @abstractmethod
    async def get_upstream_health(self) -> dict[str, Any]:
        """Get the upstream service's own health document."""


class IStateStore(ABC):
    """Interface for the durable state record."""

    @abstractmethod
    def load(self) -> PersistedState:
        """Load state; never raises."""

    @abstractmethod
    def save(self, state: PersistedState) -> bool:
        """Persist state; never raises, returns success."""


class INotificationChannel(ABC):
    """Interface for the chat channel that receives match announcements."""

    @property
    def ready(self) -> bool:
        return True

    @abstractmethod
    async def send(self, notification: MatchNotification) -> bool:
        """Deliver a notification; never raises, returns success."""


class IItemImageRenderer(ABC):
    """Interface for rendering a player's item grid to PNG bytes."""

    @abstractmethod
    async def render(self, player: PlayerPerformance, catalog: ItemCatalog) -> Optional[bytes]:
        """Return PNG bytes, or None when there is nothing to draw."""
