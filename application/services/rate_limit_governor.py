"""Upstream quota tracking and the deferred resume after the daily limit."""
from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from typing import Any, Awaitable, Callable, Optional, Union

from config import settings
from core.logging.logger import get_logger
from infrastructure.api import ResponseMetadata, is_rate_limit_response

from .check_context import CheckContext
from .timers import DeferredTimer

Clock = Callable[[], datetime]
ResumeCallback = Callable[[], Union[Any, Awaitable[Any]]]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RateLimitGovernor:
    """
    Watches OpenDota's quota headers and parks the checker until the quota resets.

    The free tier resets at UTC midnight. While a resume is pending the
    context's single-flight flag stays held, so periodic ticks are no-ops;
    the resume itself releases the flag and starts a fresh check.
    """

    def __init__(self, warn_threshold: Optional[int] = None, clock: Clock = _utc_now):
        self.warn_threshold = settings.DAILY_QUOTA_WARN_THRESHOLD if warn_threshold is None else warn_threshold
        self.clock = clock
        self.logger = get_logger(__name__, service="governor")

    def observe(self, metadata: ResponseMetadata) -> None:
        """Log the remaining quota; warn when the daily allowance runs low."""
        info = metadata.rate_limit
        if not info.present:
            return
        self.logger.debug(
            lambda: f"rate limit remaining: minute={info.remaining_minute} day={info.remaining_day}"
        )
        day = info.remaining_day
        if day is not None and 0 < day < self.warn_threshold:
            self.logger.warning(lambda: f"daily API quota running low: {day} requests left")

    @staticmethod
    def is_rate_limited(status_code: int, body: Any) -> bool:
        return is_rate_limit_response(status_code, body)

    @staticmethod
    def next_reset(now: datetime) -> datetime:
        """The first UTC midnight strictly after `now`."""
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        day = now.astimezone(timezone.utc).date() + timedelta(days=1)
        return datetime.combine(day, time.min, tzinfo=timezone.utc)

    @classmethod
    def seconds_until_reset(cls, now: datetime) -> float:
        return (cls.next_reset(now) - now).total_seconds()

    def schedule_resume(self, context: CheckContext, on_resume: ResumeCallback) -> DeferredTimer:
        """Arm (or re-arm) the resume timer; the caller keeps the flag held."""
        self.cancel(context)
        now = self.clock()
        delay = self.seconds_until_reset(now)

        def _resume() -> Any:
            context.resume_timer = None
            context.release()
            self.logger.info("quota window reset, resuming checks")
            return on_resume()

        context.resume_timer = DeferredTimer(delay, _resume)
        self.logger.warning(
            lambda: f"daily API limit reached, pausing checks until "
                    f"{self.next_reset(now).isoformat()} ({delay / 3600:.1f}h)"
        )
        return context.resume_timer

    def cancel(self, context: CheckContext) -> None:
        timer = context.resume_timer
        if timer is not None:
            timer.cancel()
            context.resume_timer = None
