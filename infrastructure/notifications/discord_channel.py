"""Discord channel delivery over the REST API."""
from __future__ import annotations

import json
from typing import Optional

import httpx

from config import settings
from core.logging.logger import get_logger
from domain.entities import MatchNotification
from domain.interfaces import INotificationChannel


class DiscordChannel(INotificationChannel):
    """Posts embeds to one text channel with a bot token over the REST API.

    No gateway connection is opened. `connect()` only checks the token with
    `GET /users/@me`, so `ready` means "the token was accepted once", not a
    live session. Delivery failures are logged and reported through the
    return value of `send()`; nothing is retried here.
    """

    def __init__(
        self,
        token: str,
        channel_id: str,
        *,
        api_base: Optional[str] = None,
        timeout_s: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.channel_id = channel_id
        self.api_base = (api_base or settings.DISCORD_API_BASE).rstrip("/")
        self.session = httpx.AsyncClient(
            timeout=timeout_s,
            headers={"Authorization": f"Bot {token}"},
            transport=transport,
        )
        self.bot_name: Optional[str] = None
        self._ready = False
        self.logger = get_logger(__name__, service="discord")

    @property
    def ready(self) -> bool:
        """True after a successful token check; later send failures do not reset it."""
        return self._ready

    async def __aenter__(self) -> "DiscordChannel":
        return self

    async def __aexit__(self, *_) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.session.aclose()
        self._ready = False

    async def connect(self) -> bool:
        """Confirm the token works; marks the channel ready."""
        try:
            response = await self.session.get(f"{self.api_base}/users/@me")
        except httpx.HTTPError as exc:
            self.logger.error(lambda: f"discord unreachable: {exc}")
            return False
        if response.status_code == 401:
            self.logger.error("401 Unauthorized, check DISCORD_TOKEN")
            return False
        if not response.is_success:
            self.logger.error(lambda: f"discord login failed: http {response.status_code}")
            return False
        try:
            user = response.json()
        except ValueError:
            user = {}
        self.bot_name = str(user.get("username", "?"))
        self._ready = True
        self.logger.success(lambda: f"connected as {self.bot_name}")
        return True

    async def send(self, notification: MatchNotification) -> bool:
        url = f"{self.api_base}/channels/{self.channel_id}/messages"
        payload = {"embeds": [notification.to_embed()]}
        try:
            if notification.image is not None:
                image = notification.image
                payload["attachments"] = [{"id": 0, "filename": image.filename}]
                response = await self.session.post(
                    url,
                    data={"payload_json": json.dumps(payload)},
                    files={"files[0]": (image.filename, image.data, image.content_type)},
                )
            else:
                response = await self.session.post(url, json=payload)
        except httpx.HTTPError as exc:
            self.logger.error(lambda: f"could not send message to Discord: {exc}")
            return False

        if not response.is_success:
            self.logger.error(
                lambda: f"Discord rejected message: http {response.status_code}",
                extra={"body": response.text[:500]},
            )
            return False
        self.logger.success(lambda: f"message delivered to channel {self.channel_id}")
        return True
