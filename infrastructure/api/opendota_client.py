"""OpenDota API client."""
from typing import Optional

from config import settings
from .fetch_client import FetchClient
from .models import FetchOutcome


class OpenDotaClient:
    """Endpoint map over the shared fetch client; returns raw outcomes."""

    def __init__(self, fetch: FetchClient, base_url: Optional[str] = None):
        self.fetch = fetch
        self.base_url = (base_url or settings.OPENDOTA_BASE_URL).rstrip('/')

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    # ── Players ───────────────────────────────────────────────────────

    async def get_player_matches(self, player_id: str, limit: int = 1) -> FetchOutcome:
        return await self.fetch.fetch_json(
            self._url(f"/players/{player_id}/matches"),
            params={"limit": max(1, limit)},
        )

    # ── Matches ───────────────────────────────────────────────────────

    async def get_match(self, match_id: str) -> FetchOutcome:
        return await self.fetch.fetch_json(self._url(f"/matches/{match_id}"))

    # ── Constants ─────────────────────────────────────────────────────

    async def get_heroes(self) -> FetchOutcome:
        return await self.fetch.fetch_json(self._url("/constants/heroes"))

    async def get_item_ids(self) -> FetchOutcome:
        return await self.fetch.fetch_json(self._url("/constants/item_ids"))

    async def get_items(self) -> FetchOutcome:
        return await self.fetch.fetch_json(self._url("/constants/items"))

    # ── Service health ────────────────────────────────────────────────

    async def get_health(self) -> FetchOutcome:
        return await self.fetch.fetch_json(
            self._url("/health"),
            retries=1,
            timeout_ms=self.fetch.timeout.status_timeout_ms,
        )
