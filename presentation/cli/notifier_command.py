from __future__ import annotations

import asyncio
import signal
from typing import Optional

from application.services import CheckContext, MatchChecker, RateLimitGovernor
from config import settings
from core.logging.logger import StructuredLogger, get_logger
from domain.errors import NotifierError, RateLimitError
from infrastructure import (
    DiscordChannel, FetchClient, JsonStateStore, MatchRepository, OpenDotaClient,
)
from presentation.http import StatusServer, create_status_app


class NotifierCommand:
    """Long-running daemon: status endpoint plus the periodic match check."""

    def __init__(self) -> None:
        self.logger: StructuredLogger = get_logger(__name__, service="notifier")
        self._stop = asyncio.Event()

    def _install_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self._request_stop, sig)
            except (NotImplementedError, RuntimeError):
                # Windows event loops have no add_signal_handler
                signal.signal(sig, lambda s, _f: loop.call_soon_threadsafe(self._request_stop, s))

    def _request_stop(self, sig: Optional[int] = None) -> None:
        name = signal.Signals(sig).name if sig else "stop"
        self.logger.info(lambda: f"{name} received, shutting down")
        self._stop.set()

    async def _check_api_access(self, repository: MatchRepository) -> None:
        self.logger.info("checking OpenDota API access")
        try:
            await repository.get_recent_matches(settings.PLAYER_ID, limit=1)
        except RateLimitError:
            self.logger.error("rate limit active at startup; checks will wait for the reset")
        except NotifierError as exc:
            self.logger.error(lambda: f"API unreachable at startup, continuing anyway: {exc}")
        except Exception:
            self.logger.exception("unexpected error checking the API, continuing anyway")
        else:
            self.logger.success("API reachable")

    async def run(self) -> int:
        settings.validate()
        settings.create_directories()

        governor = RateLimitGovernor()
        store = JsonStateStore(settings.STATE_FILE)
        context = CheckContext(state=store.load())
        state = context.state
        self.logger.info(
            lambda: f"initial state: last game_mode {state.last_game_mode}, "
                    f"best streak {state.best_low_priority_streak}, current streak {state.current_low_priority_streak}"
        )

        async with FetchClient() as fetch, DiscordChannel(settings.DISCORD_TOKEN, settings.CHANNEL_ID) as channel:
            repository = MatchRepository(OpenDotaClient(fetch), metadata_hook=governor.observe)
            await channel.connect()

            status = StatusServer(
                create_status_app(context, channel, repository.get_upstream_health),
                settings.HEALTH_CHECK_PORT,
            )
            status.start()

            checker = MatchChecker(
                repository, store, channel, settings.PLAYER_ID,
                governor=governor, context=context,
            )
            self._install_signal_handlers()
            self.logger.info(lambda: f"tracking player {settings.PLAYER_ID}")
            await self._check_api_access(repository)
            checker.start(settings.CHECK_INTERVAL / 1000)
            try:
                await self._stop.wait()
            finally:
                await checker.shutdown()
                await status.stop()
        self.logger.info("notifier stopped")
        return 0
