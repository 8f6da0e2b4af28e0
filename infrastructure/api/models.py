from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

REMAINING_MINUTE_HEADER = "x-rate-limit-remaining-minute"
REMAINING_DAY_HEADER = "x-rate-limit-remaining-day"


def _header_int(headers: Mapping[str, str], name: str) -> Optional[int]:
    raw = headers.get(name)
    if raw is None:
        return None
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return None


@dataclass(slots=True, frozen=True)
class RateLimitInfo:
    """Quota counters the upstream reports on each response."""
    remaining_minute: Optional[int] = None
    remaining_day: Optional[int] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitInfo":
        return cls(
            remaining_minute=_header_int(headers, REMAINING_MINUTE_HEADER),
            remaining_day=_header_int(headers, REMAINING_DAY_HEADER),
        )

    @property
    def present(self) -> bool:
        return self.remaining_minute is not None or self.remaining_day is not None


@dataclass(slots=True, frozen=True)
class ResponseMetadata:
    status_code: int
    rate_limit: RateLimitInfo = RateLimitInfo()


@dataclass(slots=True, frozen=True)
class FetchSuccess:
    payload: Any
    metadata: ResponseMetadata
    ok = True


@dataclass(slots=True, frozen=True)
class FetchHttpError:
    """Well-formed non-2xx response; never retried."""
    status_code: int
    body: Any
    metadata: Optional[ResponseMetadata] = None
    url: Optional[str] = None
    ok = False


@dataclass(slots=True, frozen=True)
class FetchNetworkError:
    """Transport failure that outlived every retry."""
    message: str
    url: Optional[str] = None
    ok = False


FetchOutcome = Union[FetchSuccess, FetchHttpError, FetchNetworkError]
