from __future__ import annotations

from dataclasses import dataclass

from config import settings


@dataclass(slots=True)
class TimeoutConfig:
    """Per-request timeouts with env overrides."""

    request_timeout_ms: int = 10_000
    status_timeout_ms: int = 5_000

    @classmethod
    def from_env(cls) -> "TimeoutConfig":
        """Build TimeoutConfig from FETCH_TIMEOUT_MS / STATUS_TIMEOUT_MS in settings."""
        return cls(
            request_timeout_ms=max(1, settings.FETCH_TIMEOUT_MS),
            status_timeout_ms=max(1, settings.STATUS_TIMEOUT_MS),
        )

    @property
    def request_timeout_s(self) -> float:
        return self.request_timeout_ms / 1000.0
