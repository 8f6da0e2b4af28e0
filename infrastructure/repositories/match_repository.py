"""Match repository implementation."""
import asyncio
from typing import Any, Callable, Optional

from domain.entities import (
    HeroInfo, ItemCatalog, ItemInfo, MatchDetail, MatchSummary, PlayerPerformance,
)
from domain.entities.player import BACKPACK_SLOTS, INVENTORY_SLOTS
from domain.errors import DataError, HttpError, NetworkError, RateLimitError
from domain.interfaces import IMatchRepository
from infrastructure.api import (
    FetchHttpError, FetchOutcome, FetchSuccess, OpenDotaClient, ResponseMetadata,
    is_rate_limit_response,
)

MetadataHook = Callable[[ResponseMetadata], None]


def _require_int(data: dict, key: str, what: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DataError(f"{what}: field '{key}' missing or not an integer (got {value!r})")
    return value


def _optional_int(data: dict, key: str) -> Optional[int]:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


class MatchRepository(IMatchRepository):
    """Repository for match data using the OpenDota API.

    Turns raw fetch outcomes into validated entities, and failed outcomes
    into the errors from `domain.errors`.
    """

    def __init__(self, api_client: OpenDotaClient, metadata_hook: Optional[MetadataHook] = None):
        """
        Initialize match repository.

        Args:
            api_client: OpenDota client instance
            metadata_hook: called with the quota counters of each player-list response
        """
        self.api_client = api_client
        self.metadata_hook = metadata_hook

    # ── Outcome handling ───────────────────────────────────────────────

    def _unwrap(self, outcome: FetchOutcome, what: str) -> Any:
        if isinstance(outcome, FetchSuccess):
            return outcome.payload
        if isinstance(outcome, FetchHttpError):
            if is_rate_limit_response(outcome.status_code, outcome.body):
                raise RateLimitError(outcome.status_code, outcome.body, outcome.url)
            raise HttpError(outcome.status_code, outcome.body, outcome.url)
        raise NetworkError(f"{what}: {outcome.message}")

    def _observe(self, outcome: FetchOutcome) -> None:
        metadata = getattr(outcome, "metadata", None)
        if self.metadata_hook and metadata is not None:
            self.metadata_hook(metadata)

    # ── Queries ────────────────────────────────────────────────────────

    async def get_recent_matches(self, player_id: str, limit: int = 1) -> list[MatchSummary]:
        """Get the player's most recent matches, newest first."""
        outcome = await self.api_client.get_player_matches(player_id, limit=limit)
        self._observe(outcome)
        payload = self._unwrap(outcome, "recent matches")
        if not isinstance(payload, list):
            raise DataError(f"recent matches: expected a list, got {type(payload).__name__}")
        return [self._parse_summary(row) for row in payload]

    async def get_match(self, match_id: str) -> MatchDetail:
        """Get a single match by ID."""
        payload = self._unwrap(await self.api_client.get_match(match_id), f"match {match_id}")
        return self._parse_match_data(payload)

    async def get_heroes(self) -> dict[int, HeroInfo]:
        payload = self._unwrap(await self.api_client.get_heroes(), "heroes")
        if not isinstance(payload, dict):
            raise DataError("heroes: expected an object")
        heroes: dict[int, HeroInfo] = {}
        for key, raw in payload.items():
            if not isinstance(raw, dict):
                continue
            hero_id = raw.get("id", key)
            try:
                hero_id = int(hero_id)
            except (TypeError, ValueError):
                continue
            heroes[hero_id] = HeroInfo(
                hero_id=hero_id,
                localized_name=str(raw.get("localized_name") or raw.get("name") or ""),
                img=raw.get("img"),
            )
        return heroes

    async def get_item_catalog(self) -> ItemCatalog:
        """Fetch both item tables concurrently and join them."""
        ids_outcome, items_outcome = await asyncio.gather(
            self.api_client.get_item_ids(),
            self.api_client.get_items(),
        )
        raw_ids = self._unwrap(ids_outcome, "item ids")
        raw_items = self._unwrap(items_outcome, "items")
        if not isinstance(raw_ids, dict) or not isinstance(raw_items, dict):
            raise DataError("item constants: expected objects")

        item_ids: dict[int, str] = {}
        for key, name in raw_ids.items():
            try:
                item_ids[int(key)] = str(name)
            except (TypeError, ValueError):
                continue
        items = {
            key: ItemInfo(key=key, dname=raw.get("dname"), img=raw.get("img"))
            for key, raw in raw_items.items()
            if isinstance(raw, dict)
        }
        return ItemCatalog(item_ids=item_ids, items=items)

    async def get_upstream_health(self) -> dict[str, Any]:
        payload = self._unwrap(await self.api_client.get_health(), "health")
        return payload if isinstance(payload, dict) else {"status": payload}

    # ── Parsing ────────────────────────────────────────────────────────

    def _parse_summary(self, row: Any) -> MatchSummary:
        if not isinstance(row, dict) or row.get("match_id") is None:
            raise DataError(f"recent matches: row without match_id: {row!r}")
        return MatchSummary(
            match_id=str(row["match_id"]),
            game_mode=_optional_int(row, "game_mode"),
            start_time=_optional_int(row, "start_time"),
        )

    def _parse_match_data(self, data: Any) -> MatchDetail:
        """Parse raw API match data into a MatchDetail entity."""
        if not isinstance(data, dict):
            raise DataError("match: expected an object")
        if data.get("match_id") is None:
            raise DataError("match: field 'match_id' missing")
        match_id = str(data["match_id"])
        what = f"match {match_id}"

        players_raw = data.get("players")
        if not isinstance(players_raw, list):
            raise DataError(f"{what}: player list missing")

        radiant_win = data.get("radiant_win")
        radiant_win = radiant_win if isinstance(radiant_win, bool) else None

        return MatchDetail(
            match_id=match_id,
            duration=_require_int(data, "duration", what),
            start_time=_require_int(data, "start_time", what),
            game_mode=_require_int(data, "game_mode", what),
            radiant_win=radiant_win,
            players=[self._parse_player_data(p, radiant_win, what) for p in players_raw if isinstance(p, dict)],
        )

    def _parse_player_data(self, p_data: dict, radiant_win: Optional[bool], what: str) -> PlayerPerformance:
        """Parse one raw player row."""
        account_id = _optional_int(p_data, "account_id")
        who = f"{what} player {account_id if account_id is not None else '?'}"
        return PlayerPerformance(
            account_id=account_id,
            hero_id=_require_int(p_data, "hero_id", who),
            win=self._parse_win(p_data, radiant_win, who),
            kills=_require_int(p_data, "kills", who),
            deaths=_require_int(p_data, "deaths", who),
            assists=_require_int(p_data, "assists", who),
            gold_per_min=_optional_int(p_data, "gold_per_min"),
            xp_per_min=_optional_int(p_data, "xp_per_min"),
            items=tuple(_optional_int(p_data, f"item_{i}") or 0 for i in range(INVENTORY_SLOTS)),
            backpack=tuple(_optional_int(p_data, f"backpack_{i}") or 0 for i in range(BACKPACK_SLOTS)),
        )

    @staticmethod
    def _parse_win(p_data: dict, radiant_win: Optional[bool], who: str) -> bool:
        win = p_data.get("win")
        if isinstance(win, (bool, int)):
            return bool(win)
        # older parses lack `win`; derive it from the side and the match result
        is_radiant = p_data.get("isRadiant")
        if not isinstance(is_radiant, bool) and isinstance(p_data.get("player_slot"), int):
            is_radiant = p_data["player_slot"] < 128
        if isinstance(is_radiant, bool) and radiant_win is not None:
            return is_radiant == radiant_win
        raise DataError(f"{who}: cannot determine match result")
