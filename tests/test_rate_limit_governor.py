"""
Tests for quota handling: reset arithmetic, classification and the resume timer.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import pytest

from application.services import CheckContext, DeferredTimer, RateLimitGovernor, RepeatingTimer
from infrastructure.api import RateLimitInfo, ResponseMetadata


def test_seconds_until_next_utc_midnight() -> None:
    now = datetime(2024, 3, 10, 22, 30, tzinfo=timezone.utc)
    assert RateLimitGovernor.seconds_until_reset(now) == 90 * 60


def test_exactly_midnight_waits_a_full_day() -> None:
    now = datetime(2024, 3, 10, tzinfo=timezone.utc)
    assert RateLimitGovernor.next_reset(now) == datetime(2024, 3, 11, tzinfo=timezone.utc)
    assert RateLimitGovernor.seconds_until_reset(now) == 24 * 3600


def test_reset_is_computed_in_utc() -> None:
    local = timezone(timedelta(hours=-5))
    now = datetime(2024, 3, 10, 21, 0, tzinfo=local)  # 02:00 UTC on the 11th
    assert RateLimitGovernor.next_reset(now) == datetime(2024, 3, 12, tzinfo=timezone.utc)
    assert RateLimitGovernor.seconds_until_reset(now) == 22 * 3600


@pytest.mark.parametrize(
    "status, body, expected",
    [
        (429, None, True),
        (429, {"error": "slow down"}, True),
        (403, {"error": "daily api limit exceeded"}, True),
        (500, "Daily API limit exceeded for key", True),
        (500, {"error": "internal"}, False),
        (404, "not found", False),
    ],
)
def test_rate_limit_classification(status, body, expected) -> None:
    assert RateLimitGovernor.is_rate_limited(status, body) is expected


def test_observe_warns_only_when_daily_quota_is_low(caplog: pytest.LogCaptureFixture) -> None:
    governor = RateLimitGovernor(warn_threshold=100)
    caplog.set_level(logging.DEBUG)

    governor.observe(ResponseMetadata(200, RateLimitInfo(remaining_minute=50, remaining_day=1500)))
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    governor.observe(ResponseMetadata(200, RateLimitInfo(remaining_minute=50, remaining_day=40)))
    assert any("40 requests left" in r.getMessage() for r in caplog.records if r.levelno == logging.WARNING)

    caplog.clear()
    governor.observe(ResponseMetadata(200, RateLimitInfo(remaining_minute=0, remaining_day=0)))
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


@pytest.mark.asyncio
async def test_schedule_resume_holds_flag_until_the_reset() -> None:
    governor = RateLimitGovernor(clock=lambda: datetime(2024, 3, 10, 23, 59, 59, 950000, tzinfo=timezone.utc))
    context = CheckContext()
    assert context.try_acquire()
    resumed = asyncio.Event()

    timer = governor.schedule_resume(context, resumed.set)
    assert timer.delay_s == pytest.approx(0.05)
    assert context.waiting_for_rate_limit
    assert context.checking
    assert not context.try_acquire()

    await asyncio.wait_for(resumed.wait(), timeout=2)
    assert context.resume_timer is None
    assert not context.checking
    assert not context.waiting_for_rate_limit


@pytest.mark.asyncio
async def test_rescheduling_replaces_the_pending_timer() -> None:
    governor = RateLimitGovernor(clock=lambda: datetime(2024, 3, 10, 12, tzinfo=timezone.utc))
    context = CheckContext()
    context.try_acquire()
    first = governor.schedule_resume(context, lambda: None)
    second = governor.schedule_resume(context, lambda: None)
    assert context.resume_timer is second
    assert not first.pending
    assert second.pending

    governor.cancel(context)
    assert context.resume_timer is None
    assert not second.pending


@pytest.mark.asyncio
async def test_deferred_timer_can_be_cancelled() -> None:
    fired = []
    timer = DeferredTimer(0.01, lambda: fired.append(True))
    timer.cancel()
    await asyncio.sleep(0.05)
    assert fired == []
    assert not timer.pending


@pytest.mark.asyncio
async def test_repeating_timer_runs_immediately_then_periodically() -> None:
    ticks = []
    timer = RepeatingTimer(0.01, lambda: ticks.append(True))
    timer.start()
    await asyncio.sleep(0.055)
    await timer.stop()
    count = len(ticks)
    assert count >= 3
    await asyncio.sleep(0.03)
    assert len(ticks) == count
    assert not timer.running
