"""
Tests for the /status endpoint.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from datetime import datetime, timezone

import pytest

from fastapi.testclient import TestClient

from application.services import CheckContext
from domain.entities import PersistedState
from domain.errors import NetworkError
from presentation.http import StatusServer, create_status_app

from conftest import FakeRepository, RecordingChannel


def _context() -> CheckContext:
    context = CheckContext(state=PersistedState("7412345678", 4, 5, 2))
    context.last_check_at = datetime(2024, 3, 10, 12, tzinfo=timezone.utc)
    return context


def test_status_reports_bot_state_and_upstream_health() -> None:
    repo = FakeRepository()
    repo.health = {"status": "ok", "postgresUsage": {"healthy": True}}
    app = create_status_app(_context(), RecordingChannel(), repo.get_upstream_health)

    with TestClient(app) as client:
        response = client.get("/status")

    assert response.status_code == 200
    body = response.json()
    assert body["bot"] == {
        "status": "running",
        "connected": True,
        "lastCheck": "2024-03-10T12:00:00+00:00",
        "lastMatchId": "7412345678",
        "lastGameMode": 4,
        "bestLowPriorityStreak": 5,
        "currentLowPriorityStreak": 2,
        "isChecking": False,
        "waitingForRateLimit": False,
    }
    assert body["opendota"] == repo.health


def test_upstream_failure_is_reported_inline() -> None:
    repo = FakeRepository()
    repo.errors["get_upstream_health"] = NetworkError("timed out after 5000ms")
    app = create_status_app(_context(), None, repo.get_upstream_health)

    with TestClient(app) as client:
        body = client.get("/status").json()

    assert body["opendota"] == {"status": "error", "error": "timed out after 5000ms"}
    assert body["bot"]["connected"] is False


def test_unknown_path_is_not_found() -> None:
    app = create_status_app(_context(), None, FakeRepository().get_upstream_health)
    with TestClient(app) as client:
        assert client.get("/").status_code == 404


def test_port_zero_disables_the_server() -> None:
    app = create_status_app(_context(), None, FakeRepository().get_upstream_health)
    assert StatusServer(app, 0).enabled is False
    assert StatusServer(app, 3001).enabled is True


@pytest.mark.asyncio
async def test_port_in_use_disables_endpoint_without_exiting(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    app = create_status_app(_context(), None, FakeRepository().get_upstream_health)
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as taken:
        taken.bind(("127.0.0.1", 0))
        taken.listen(1)
        port = taken.getsockname()[1]

        server = StatusServer(app, port, host="127.0.0.1")
        server.start()
        await asyncio.sleep(0.2)
        await asyncio.wait_for(server.stop(), timeout=5)

    assert any("status endpoint disabled" in r.getMessage() for r in caplog.records)
