"""httpx async transport that retries throttled and transient directory calls."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

import httpx

_LOG = logging.getLogger(__name__)

# Throttling and gateway failures; everything else is returned as-is.
RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})

Sleep = Callable[[float], Awaitable[None]]


def parse_retry_after(response: httpx.Response, *, default: float = 1.0) -> float:
    """Seconds to wait from ``Retry-After``; accepts delta-seconds or an HTTP date."""
    raw = response.headers.get("Retry-After")
    if raw is None:
        return default
    try:
        return max(0.0, float(raw))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(raw)
    except (TypeError, ValueError):
        return default
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)
    return max(0.0, (when - datetime.now(UTC)).total_seconds())


class RetryingTransport(httpx.AsyncBaseTransport):
    """Wraps a transport with bounded retries.

    Transport errors and ``RETRYABLE_STATUS_CODES`` are retried up to
    *max_retries* times. The wait before each retry is the larger of the
    server's ``Retry-After`` and an exponential backoff with jitter, capped at
    *max_backoff* seconds. The final response is returned unchanged once the
    retries are spent.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 3,
        max_backoff: float = 8.0,
        sleep: Sleep | None = None,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._max_retries = max_retries
        self._max_backoff = max_backoff
        self._sleep = sleep or asyncio.sleep

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            try:
                response = await self._transport.handle_async_request(request)
            except httpx.TransportError as exc:
                if attempt >= self._max_retries:
                    raise
                _LOG.warning("Directory request to %s failed (%s); retrying", request.url.path, exc)
                await self._sleep(self._backoff(attempt))
                attempt += 1
                continue

            if response.status_code not in RETRYABLE_STATUS_CODES or attempt >= self._max_retries:
                return response

            delay = max(parse_retry_after(response, default=0.0), self._backoff(attempt))
            await response.aread()
            await response.aclose()
            _LOG.warning(
                "Directory request to %s returned %d; retrying in %.1fs (attempt %d/%d)",
                request.url.path,
                response.status_code,
                delay,
                attempt + 1,
                self._max_retries,
            )
            await self._sleep(delay)
            attempt += 1

    async def aclose(self) -> None:
        await self._transport.aclose()

    def _backoff(self, attempt: int) -> float:
        return min(self._max_backoff, float(2**attempt)) + random.uniform(0.0, 0.25)
