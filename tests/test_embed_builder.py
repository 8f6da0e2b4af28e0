"""
Tests for the match announcement layout.
"""

from __future__ import annotations

import pytest

from application.services import EmbedBuilder
from application.services.streak_tracker import NEW_RECORD, STATUS_ENTERED, STATUS_EXITED
from domain.entities import CheckResult, PersistedState
from domain.interfaces import IItemImageRenderer

from conftest import PLAYER_ID, FakeRepository, make_match


class PngRenderer(IItemImageRenderer):
    def __init__(self, data=b"\x89PNG", fail=False) -> None:
        self.data = data
        self.fail = fail

    async def render(self, player, catalog):
        if self.fail:
            raise RuntimeError("no fonts")
        return self.data


async def _build(match, result=CheckResult(new_match_found=True), state=None, renderer=None):
    repo = FakeRepository()
    builder = EmbedBuilder(player_name="Alda", renderer=renderer, cdn_base="https://cdn.example")
    return await builder.build(
        match,
        match.find_player(PLAYER_ID),
        await repo.get_heroes(),
        await repo.get_item_catalog(),
        result,
        state or PersistedState(),
    )


def _fields(notification) -> dict:
    return {f.name: f.value for f in notification.fields}


@pytest.mark.asyncio
async def test_core_fields_for_a_win() -> None:
    notification = await _build(make_match("7412345678", 22))
    assert notification.title == "🎮 New match for Alda!"
    assert notification.color == 0x00FF00
    assert notification.url == "https://www.opendota.com/matches/7412345678"
    assert notification.footer == "Match ID: 7412345678"
    assert notification.timestamp.timestamp() == 1_700_000_000
    assert notification.thumbnail_url == "https://cdn.example/apps/dota2/images/dota_react/heroes/antimage.png?"
    fields = _fields(notification)
    assert fields["🏆 Result"] == "✅ Victory"
    assert fields["⚔️ Hero"] == "Anti-Mage"
    assert fields["📊 KDA"] == "10/2/7"
    assert fields["⏱️ Duration"] == "39:05"
    assert fields["💰 GPM"] == "612"
    assert fields["Inventory"] == "Blink Dagger"
    assert "Backpack" not in fields
    assert all(f.inline for f in notification.fields[:6])


@pytest.mark.asyncio
async def test_loss_is_red_and_missing_stats_show_placeholder() -> None:
    match = make_match("1", 22, win=False)
    match.players[0].xp_per_min = None
    notification = await _build(match)
    assert notification.color == 0xFF0000
    assert _fields(notification)["📈 XPM"] == "N/A"
    assert _fields(notification)["🏆 Result"] == "❌ Defeat"


@pytest.mark.asyncio
async def test_entering_with_record_shows_status_and_counters() -> None:
    result = CheckResult(True, STATUS_ENTERED, NEW_RECORD, 0, True)
    notification = await _build(make_match("1", 4), result, PersistedState(None, None, 1, 1))
    fields = _fields(notification)
    assert fields["⚠️ Low Priority"] == f"{STATUS_ENTERED}\n{NEW_RECORD}"
    names = notification.field_names()
    assert "Best low streak: 1" in names
    assert "Current low streak: 1" in names
    assert NEW_RECORD in names


@pytest.mark.asyncio
async def test_continuation_shows_bare_header() -> None:
    result = CheckResult(True, None, None, 0, True)
    notification = await _build(make_match("1", 4), result, PersistedState(None, None, 5, 3))
    assert _fields(notification)["⚠️ Low Priority"] == "\u200b"
    assert "Current low streak: 3" in notification.field_names()


@pytest.mark.asyncio
async def test_exit_reports_matches_played() -> None:
    result = CheckResult(True, STATUS_EXITED, None, 4, False)
    notification = await _build(make_match("1", 22), result, PersistedState(None, None, 4, 0))
    fields = _fields(notification)
    assert fields[STATUS_EXITED] == "Matches played to leave: 4"
    assert not any(name.startswith("Best low streak") for name in fields)


@pytest.mark.asyncio
async def test_empty_inventory_gets_its_own_field() -> None:
    notification = await _build(make_match("1", 22, items=(0,) * 6))
    assert "😂" in notification.field_names()
    assert notification.image is None


@pytest.mark.asyncio
async def test_renderer_output_becomes_attachment() -> None:
    notification = await _build(make_match("1", 22, backpack=(2, 0, 0)), renderer=PngRenderer())
    assert notification.image.filename == "items.png"
    assert notification.to_embed()["image"] == {"url": "attachment://items.png"}
    assert "Inventory" not in notification.field_names()


@pytest.mark.asyncio
async def test_renderer_failure_falls_back_to_text() -> None:
    notification = await _build(make_match("1", 22, backpack=(2, 0, 0)), renderer=PngRenderer(fail=True))
    assert notification.image is None
    assert _fields(notification)["Backpack"] == "Tango"


@pytest.mark.asyncio
async def test_zero_gpm_and_xpm_are_shown_as_zero() -> None:
    match = make_match("1", 22)
    match.players[0].gold_per_min = 0
    match.players[0].xp_per_min = 0
    fields = _fields(await _build(match))
    assert fields["💰 GPM"] == "0"
    assert fields["📈 XPM"] == "0"

    match.players[0].gold_per_min = None
    assert _fields(await _build(match))["💰 GPM"] == "N/A"
