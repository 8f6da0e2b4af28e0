"""Failure taxonomy for a single check cycle.

Every error below is contained within the check that raised it; none of
them is allowed to stop the poll loop.
"""
from typing import Any, Optional


class NotifierError(Exception):
    """Base class for every failure the notifier knows how to contain."""


class ConfigurationError(NotifierError, ValueError):
    """Required settings are missing; the only failure that stops the process."""


class NetworkError(NotifierError):
    """Timeout, DNS or connection failure that survived all retries."""


class HttpError(NotifierError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, body: Any = None, url: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.url = url
        detail = body.get("error") if isinstance(body, dict) else None
        message = f"http {status_code}" + (f" for {url}" if url else "")
        super().__init__(f"{message}: {detail}" if detail else message)


class RateLimitError(HttpError):
    """429 or a daily-quota message: resume only after the quota resets."""


class DataError(NotifierError):
    """Upstream payload is missing or has malformed required fields."""


class PersistenceError(NotifierError):
    """State file could not be read or written."""
