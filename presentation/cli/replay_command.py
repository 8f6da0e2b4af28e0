from __future__ import annotations

from typing import Optional

from application.use_cases import ReplayMatchUseCase
from config import settings
from core.logging.logger import StructuredLogger, get_logger
from domain.errors import NotifierError
from infrastructure import (
    DiscordChannel, FetchClient, JsonStateStore, MatchRepository, OpenDotaClient, PreviewChannel,
)


class ReplayCommand:
    """One-shot replay of a chosen match; previews always, sends on request."""

    def __init__(self, match_id: str, send: bool = False) -> None:
        self.match_id = match_id
        self.send = send
        self.logger: StructuredLogger = get_logger(__name__, service="replay")

    @classmethod
    def from_settings(cls) -> Optional["ReplayCommand"]:
        """Build from TEST_MATCH_ID / FORCE_SEND_TEST_MATCH, if either is set."""
        match_id = settings.replay_match_id()
        if not match_id:
            return None
        return cls(match_id, send=bool(settings.FORCE_SEND_TEST_MATCH))

    async def run(self) -> int:
        settings.validate(require_discord=self.send)
        state = JsonStateStore(settings.STATE_FILE).load()

        async with FetchClient() as fetch:
            repository = MatchRepository(OpenDotaClient(fetch))
            channel: Optional[DiscordChannel] = None
            if self.send:
                channel = DiscordChannel(settings.DISCORD_TOKEN, settings.CHANNEL_ID)
                await channel.connect()
            try:
                use_case = ReplayMatchUseCase(repository, state, PreviewChannel(), channel=channel)
                await use_case.execute(self.match_id, send=self.send)
            except NotifierError as exc:
                self.logger.error(lambda: f"replay of match {self.match_id} failed: {exc}")
                return 1
            finally:
                if channel is not None:
                    await channel.aclose()
        return 0
