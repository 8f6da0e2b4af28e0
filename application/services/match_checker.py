"""Periodic check for the tracked player's newest match."""
from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from config import settings
from core.logging import log_context
from core.logging.logger import get_logger
from domain.entities import CheckResult, MatchSummary
from domain.errors import DataError, HttpError, NetworkError, RateLimitError
from domain.interfaces import IMatchRepository, INotificationChannel, IStateStore

from .check_context import CheckContext
from .embed_builder import EmbedBuilder
from .rate_limit_governor import RateLimitGovernor
from .streak_tracker import derive_streak
from .timers import RepeatingTimer

logger = get_logger(__name__, service="checker")


class MatchChecker:
    """
    Owns the check cycle: fetch the newest match, update streaks, notify, persist.

    Single-flight
    ─────────────────────────────────────────────────────────────────
    `context.checking` is the only lock. A tick that finds it held is
    dropped, never queued. After the daily limit the flag stays held
    until the governor's resume timer fires.
    ─────────────────────────────────────────────────────────────────
    """

    def __init__(
        self,
        repository: IMatchRepository,
        store: IStateStore,
        channel: INotificationChannel,
        player_id: str,
        governor: Optional[RateLimitGovernor] = None,
        context: Optional[CheckContext] = None,
        embed_builder: Optional[EmbedBuilder] = None,
        low_priority_mode: Optional[int] = None,
    ):
        self.repository = repository
        self.store = store
        self.channel = channel
        self.player_id = str(player_id)
        self.governor = governor or RateLimitGovernor()
        self.context = context or CheckContext(state=store.load())
        self.embed_builder = embed_builder or EmbedBuilder()
        self.low_priority_mode = settings.LOW_PRIORITY_GAME_MODE if low_priority_mode is None else low_priority_mode

        self._timer: Optional[RepeatingTimer] = None
        self._tasks: set[asyncio.Task] = set()

    # ── Scheduling ─────────────────────────────────────────────────────

    def trigger(self) -> None:
        """Run a check in the background."""
        task = asyncio.get_running_loop().create_task(self.run_check())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def start(self, interval_s: float) -> None:
        """Check now, then every `interval_s` seconds."""
        if self._timer is not None:
            return
        self._timer = RepeatingTimer(interval_s, self.trigger, run_immediately=True)
        self._timer.start()
        logger.info(lambda: f"checking player {self.player_id} every {interval_s / 60:g} minutes")

    async def shutdown(self) -> None:
        if self._timer is not None:
            await self._timer.stop()
            self._timer = None
        self.governor.cancel(self.context)
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        logger.info("checker stopped")

    # ── Check cycle ────────────────────────────────────────────────────

    async def run_check(self) -> Optional[CheckResult]:
        """One check cycle; returns None when nothing was processed."""
        ctx = self.context
        if not ctx.try_acquire():
            if ctx.waiting_for_rate_limit:
                logger.debug("waiting for the daily quota to reset, tick skipped")
            else:
                logger.info("previous check still running, tick skipped")
            return None

        ctx.last_check_at = datetime.now(timezone.utc)
        with log_context(check=ctx.check_count):
            try:
                return await self._check()
            except RateLimitError as exc:
                logger.warning(lambda: f"rate limited by upstream: {exc}")
                self.governor.schedule_resume(ctx, self.trigger)
            except (NetworkError, HttpError, DataError) as exc:
                logger.error(lambda: f"check failed: {exc}")
            except Exception:
                logger.exception("unexpected error during check")
            finally:
                if not ctx.waiting_for_rate_limit:
                    ctx.release()
        return None

    async def _check(self) -> Optional[CheckResult]:
        matches = await self.repository.get_recent_matches(self.player_id, limit=1)
        if not matches:
            logger.info("no match found")
            return None

        latest: MatchSummary = matches[0]
        state = self.context.state

        if state.last_match_id is None:
            state.last_match_id = latest.match_id
            self.store.save(state)
            logger.info(lambda: f"baseline set to match {latest.match_id}, nothing sent")
            return None

        if latest.match_id == state.last_match_id:
            logger.info("no new match")
            return None

        with log_context(match_id=latest.match_id):
            return await self._process(latest.match_id)

    async def _process(self, match_id: str) -> CheckResult:
        logger.info(lambda: f"new match {match_id}")
        match, heroes, catalog = await asyncio.gather(
            self.repository.get_match(match_id),
            self.repository.get_heroes(),
            self.repository.get_item_catalog(),
        )
        player = match.find_player(self.player_id)
        if player is None:
            raise DataError(f"player {self.player_id} not found in match {match_id}")

        working = self.context.state.copy()
        result = derive_streak(
            match.game_mode, working.last_game_mode, working,
            low_priority_mode=self.low_priority_mode,
        )
        result = replace(result, new_match_found=True)

        notification = await self.embed_builder.build(match, player, heroes, catalog, result, working)
        if not await self.channel.send(notification):
            logger.warning(lambda: f"match {match_id} was not delivered, marking it seen anyway")

        working.last_match_id = match.match_id
        working.last_game_mode = match.game_mode
        self.context.state.update_from(working)
        self.store.save(self.context.state)
        logger.success(
            lambda: f"match {match_id} processed ({match.game_mode_label}), "
                    f"low streak {working.current_low_priority_streak}/{working.best_low_priority_streak}"
        )
        return result
