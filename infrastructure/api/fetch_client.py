"""Resilient JSON fetch client shared by every outbound call."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from core.logging.logger import get_logger
from .models import (
    FetchHttpError, FetchNetworkError, FetchOutcome, FetchSuccess,
    RateLimitInfo, ResponseMetadata,
)
from .retry_policy import RetryPolicy
from .timeout_config import TimeoutConfig

Sleeper = Callable[[float], Awaitable[Any]]


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class FetchClient:
    """GET + JSON with a per-attempt timeout and linear retry on network failures.

    HTTP error responses are handed back untouched as `FetchHttpError` so the
    caller can recognise rate limiting; only transport-level failures are
    retried. Nothing here raises for a failed request.
    """

    def __init__(
        self,
        *,
        timeout: Optional[TimeoutConfig] = None,
        retry: Optional[RetryPolicy] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self.timeout = timeout or TimeoutConfig.from_env()
        self.retry = retry or RetryPolicy.from_env()
        self.headers = {"Accept": "application/json", **(headers or {})}
        self.session: Optional[httpx.AsyncClient] = None
        self._transport = transport
        self._sleep = sleep
        self.logger = get_logger(__name__, service="fetch")

    async def __aenter__(self) -> "FetchClient":
        self._ensure_session()
        return self

    async def __aexit__(self, *_) -> None:
        await self.aclose()

    def _ensure_session(self) -> httpx.AsyncClient:
        if self.session is None or self.session.is_closed:
            self.session = httpx.AsyncClient(
                timeout=self.timeout.request_timeout_s,
                headers=self.headers,
                transport=self._transport,
                follow_redirects=True,
            )
        return self.session

    async def aclose(self) -> None:
        if self.session is not None:
            await self.session.aclose()
            self.session = None

    async def fetch_json(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        retries: Optional[int] = None,
        backoff_ms: Optional[int] = None,
        timeout_ms: Optional[int] = None,
    ) -> FetchOutcome:
        attempts = max(1, retries if retries is not None else self.retry.retries)
        timeout_ms = timeout_ms or self.timeout.request_timeout_ms
        session = self._ensure_session()
        last_error = "no attempt made"

        for attempt in range(1, attempts + 1):
            try:
                response = await session.get(url, params=params, timeout=timeout_ms / 1000.0)
                metadata = ResponseMetadata(
                    status_code=response.status_code,
                    rate_limit=RateLimitInfo.from_headers(response.headers),
                )
                if not response.is_success:
                    return FetchHttpError(response.status_code, _decode_body(response), metadata, url)
                return FetchSuccess(response.json(), metadata)
            except httpx.TimeoutException:
                last_error = f"timed out after {timeout_ms}ms"
            except httpx.RequestError as exc:
                last_error = str(exc) or exc.__class__.__name__
            except ValueError as exc:
                last_error = f"invalid JSON body: {exc}"

            self.logger.warning(
                lambda: f"request failed ({attempt}/{attempts}): {last_error}",
                extra={"url": url},
            )
            if attempt < attempts:
                await self._sleep(self.retry.delay_ms(attempt, backoff_ms) / 1000.0)

        self.logger.error(lambda: "persistent failure reaching the API", extra={"url": url})
        return FetchNetworkError(last_error, url)
