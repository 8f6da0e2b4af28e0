"""
Tests for replaying a single match: preview, optional delivery, no state changes.
"""

from __future__ import annotations

import pytest

from application.use_cases import ReplayMatchUseCase
from domain.entities import PersistedState
from domain.errors import DataError

from conftest import PLAYER_ID, RecordingChannel, make_match


@pytest.mark.asyncio
async def test_preview_only_does_not_deliver_or_mutate(repository) -> None:
    repository.publish(make_match("300", 4))
    state = PersistedState("100", 4, 6, 2)
    preview, channel = RecordingChannel(), RecordingChannel()

    notification = await ReplayMatchUseCase(
        repository, state, preview, channel=channel, player_id=PLAYER_ID,
    ).execute("300")

    assert notification is not None
    assert preview.sent == [notification]
    assert channel.sent == []
    assert state == PersistedState("100", 4, 6, 2)
    assert "Current low streak: 3" in notification.field_names()


@pytest.mark.asyncio
async def test_send_delivers_to_the_real_channel(repository) -> None:
    repository.publish(make_match("300", 22))
    state = PersistedState("100", 22)
    preview, channel = RecordingChannel(), RecordingChannel()

    notification = await ReplayMatchUseCase(
        repository, state, preview, channel=channel, player_id=PLAYER_ID,
    ).execute("300", send=True)

    assert channel.sent == [notification]
    assert state.last_match_id == "100"


@pytest.mark.asyncio
async def test_missing_player_raises_data_error(repository) -> None:
    repository.publish(make_match("300", 22, account_id=5))
    with pytest.raises(DataError):
        await ReplayMatchUseCase(
            repository, PersistedState(), RecordingChannel(), player_id=PLAYER_ID,
        ).execute("300")
