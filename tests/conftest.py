# Ensure the project root is at sys.path[0] when pytest runs
import asyncio
import sys
from pathlib import Path
from typing import Optional

_tests_dir = Path(__file__).resolve().parent
_root = _tests_dir.parent
_str_root = str(_root)
if sys.path[0:1] != [_str_root]:
    sys.path.insert(0, _str_root)

import pytest

from domain.entities import (
    HeroInfo, ItemCatalog, ItemInfo, MatchDetail, MatchNotification, MatchSummary,
    PersistedState, PlayerPerformance,
)
from domain.interfaces import IMatchRepository, INotificationChannel, IStateStore

PLAYER_ID = "86745912"


def make_match(
    match_id: str,
    game_mode: int,
    *,
    account_id: Optional[int] = int(PLAYER_ID),
    win: bool = True,
    items: tuple = (1, 0, 0, 0, 0, 0),
    backpack: tuple = (0, 0, 0),
) -> MatchDetail:
    player = PlayerPerformance(
        account_id=account_id,
        hero_id=1,
        win=win,
        kills=10,
        deaths=2,
        assists=7,
        gold_per_min=612,
        xp_per_min=701,
        items=items,
        backpack=backpack,
    )
    other = PlayerPerformance(account_id=None, hero_id=2, win=not win, kills=1, deaths=9, assists=3)
    return MatchDetail(
        match_id=match_id,
        duration=2345,
        start_time=1_700_000_000,
        game_mode=game_mode,
        radiant_win=win,
        players=[player, other],
    )


class FakeRepository(IMatchRepository):
    """In-memory match source; `errors` maps a method name to the exception it raises."""

    def __init__(self) -> None:
        self.latest: Optional[str] = None
        self.matches: dict[str, MatchDetail] = {}
        self.errors: dict[str, Exception] = {}
        self.calls: list[str] = []
        self.gate: Optional[asyncio.Event] = None
        self.health: dict = {"status": "ok"}

    def publish(self, match: MatchDetail) -> None:
        self.matches[match.match_id] = match
        self.latest = match.match_id

    def _maybe_raise(self, name: str) -> None:
        self.calls.append(name)
        if name in self.errors:
            raise self.errors[name]

    async def get_recent_matches(self, player_id: str, limit: int = 1) -> list[MatchSummary]:
        if self.gate is not None:
            await self.gate.wait()
        self._maybe_raise("get_recent_matches")
        return [] if self.latest is None else [MatchSummary(self.latest)]

    async def get_match(self, match_id: str) -> MatchDetail:
        self._maybe_raise("get_match")
        return self.matches[match_id]

    async def get_heroes(self) -> dict[int, HeroInfo]:
        self._maybe_raise("get_heroes")
        return {
            1: HeroInfo(1, "Anti-Mage", "/apps/dota2/images/dota_react/heroes/antimage.png?"),
            2: HeroInfo(2, "Axe", None),
        }

    async def get_item_catalog(self) -> ItemCatalog:
        self._maybe_raise("get_item_catalog")
        return ItemCatalog(
            item_ids={1: "blink", 2: "tango"},
            items={"blink": ItemInfo("blink", "Blink Dagger", "/blink.png"), "tango": ItemInfo("tango", "Tango")},
        )

    async def get_upstream_health(self) -> dict:
        self._maybe_raise("get_upstream_health")
        return self.health


class MemoryStore(IStateStore):
    def __init__(self, state: Optional[PersistedState] = None) -> None:
        self.state = state or PersistedState()
        self.saved: list[PersistedState] = []

    def load(self) -> PersistedState:
        return self.state.copy()

    def save(self, state: PersistedState) -> bool:
        self.saved.append(state.copy())
        return True


class RecordingChannel(INotificationChannel):
    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.sent: list[MatchNotification] = []

    async def send(self, notification: MatchNotification) -> bool:
        self.sent.append(notification)
        return self.result


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()
