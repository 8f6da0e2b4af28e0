"""Use case for re-running the notification pipeline on a chosen match."""
from __future__ import annotations

import asyncio
from typing import Optional

from config import settings
from core.logging import log_context
from core.logging.logger import get_logger
from domain.entities import MatchNotification, PersistedState
from domain.errors import DataError
from domain.interfaces import IMatchRepository, INotificationChannel
from application.services.embed_builder import EmbedBuilder
from application.services.streak_tracker import derive_streak

logger = get_logger(__name__, service="replay")


class ReplayMatchUseCase:
    """
    Builds (and optionally sends) the announcement for an arbitrary match.

    Works on a copy of the tracking state: `last_match_id` and the streak
    counters are never changed and nothing is saved, so a replay can be
    run against a live state file.
    """

    def __init__(
        self,
        repository: IMatchRepository,
        state: PersistedState,
        preview: INotificationChannel,
        channel: Optional[INotificationChannel] = None,
        player_id: Optional[str] = None,
        embed_builder: Optional[EmbedBuilder] = None,
    ):
        self.repository = repository
        self.state = state
        self.preview = preview
        self.channel = channel
        self.player_id = str(player_id or settings.PLAYER_ID)
        self.embed_builder = embed_builder or EmbedBuilder()

    async def execute(self, match_id: str, *, send: bool = False) -> Optional[MatchNotification]:
        match_id = str(match_id).strip()
        with log_context(match_id=match_id, replay=True):
            logger.info(lambda: f"replaying match {match_id} ({'send' if send else 'preview only'})")
            match, heroes, catalog = await asyncio.gather(
                self.repository.get_match(match_id),
                self.repository.get_heroes(),
                self.repository.get_item_catalog(),
            )
            player = match.find_player(self.player_id)
            if player is None:
                raise DataError(f"player {self.player_id} not found in match {match_id}")

            scratch = self.state.copy()
            result = derive_streak(
                match.game_mode, scratch.last_game_mode, scratch,
                low_priority_mode=settings.LOW_PRIORITY_GAME_MODE,
            )
            notification = await self.embed_builder.build(match, player, heroes, catalog, result, scratch)

            await self.preview.send(notification)
            if send:
                if self.channel is None:
                    logger.error("no delivery channel configured, preview only")
                elif await self.channel.send(notification):
                    logger.success(lambda: f"match {match_id} sent")
                else:
                    logger.error(lambda: f"match {match_id} could not be sent")

            logger.info(lambda: f"OpenDota: https://www.opendota.com/matches/{match_id}")
            logger.info(lambda: f"Dotabuff: https://www.dotabuff.com/matches/{match_id}")
            return notification
