"""
HTTP status endpoint
====================

Endpoints:
    GET  /status    - Checker state plus OpenDota's own health document

Served by uvicorn inside the notifier's event loop, next to the poll loop.
"""
from __future__ import annotations

import asyncio
import contextlib
from typing import Any, Awaitable, Callable, Iterator, Optional

import uvicorn
from fastapi import FastAPI

from application.services import CheckContext
from core.logging.logger import get_logger
from domain.interfaces import INotificationChannel

UpstreamHealth = Callable[[], Awaitable[dict[str, Any]]]

logger = get_logger(__name__, service="status")


def create_status_app(
    context: CheckContext,
    channel: Optional[INotificationChannel],
    upstream_health: UpstreamHealth,
) -> FastAPI:
    app = FastAPI(title="Dota match notifier", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/status")
    async def status() -> dict[str, Any]:
        """Bot state and upstream availability"""
        try:
            opendota = await upstream_health()
        except Exception as exc:
            logger.warning(lambda: f"upstream health check failed: {exc}")
            opendota = {"status": "error", "error": str(exc)}
        return {
            "bot": context.snapshot(connected=bool(channel and channel.ready)),
            "opendota": opendota,
        }

    return app


class _EmbeddedServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to the host process."""

    def install_signal_handlers(self) -> None:
        pass

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


class StatusServer:
    """Runs the status app as a task; `port == 0` disables it."""

    def __init__(self, app: FastAPI, port: int, host: str = "0.0.0.0"):
        self.port = port
        self._server = _EmbeddedServer(
            uvicorn.Config(app, host=host, port=port, log_level="warning", access_log=False)
        )
        self._task: Optional[asyncio.Task] = None

    @property
    def enabled(self) -> bool:
        return self.port > 0

    def start(self) -> None:
        if not self.enabled:
            logger.info("status endpoint disabled")
            return
        self._task = asyncio.get_running_loop().create_task(self._serve())
        logger.info(lambda: f"status endpoint on http://localhost:{self.port}/status")

    async def _serve(self) -> None:
        # uvicorn exits the process when it cannot bind
        try:
            await self._server.serve()
        except (SystemExit, OSError) as exc:
            logger.error(lambda: f"status endpoint disabled: cannot serve on port {self.port} ({exc!r})")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._server.should_exit = True
        try:
            await self._task
        except Exception as exc:
            logger.error(lambda: f"status server stopped with an error: {exc}")
        self._task = None
