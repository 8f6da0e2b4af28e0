from __future__ import annotations

from dataclasses import dataclass

from config import settings


@dataclass(slots=True)
class RetryPolicy:
    """Bounded retry with linear backoff: attempt N waits backoff_ms * N."""

    retries: int = 3
    backoff_ms: int = 1000

    @classmethod
    def from_env(cls) -> "RetryPolicy":
        """Create policy from FETCH_RETRIES / FETCH_BACKOFF_MS in settings."""
        return cls(
            retries=max(1, settings.FETCH_RETRIES),
            backoff_ms=max(0, settings.FETCH_BACKOFF_MS),
        )

    def delay_ms(self, attempt: int, backoff_ms: int | None = None) -> int:
        base = self.backoff_ms if backoff_ms is None else backoff_ms
        return base * attempt
