"""Tests for RetryingTransport - retry, backoff, and Retry-After handling."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from email.utils import format_datetime
from unittest.mock import AsyncMock

import httpx
import pytest

from rostersync.providers.graph._retrying_transport import RetryingTransport, parse_retry_after


def _make_response(status_code: int = 200, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(status_code=status_code, headers=headers or {})


def _make_request() -> httpx.Request:
    return httpx.Request("GET", "https://graph.example.test/v1.0/users")


def _transport(inner: AsyncMock, *, max_retries: int = 3) -> tuple[RetryingTransport, AsyncMock]:
    sleep = AsyncMock()
    return RetryingTransport(transport=inner, max_retries=max_retries, sleep=sleep), sleep


class TestSuccessfulRequests:
    @pytest.mark.asyncio
    async def test_returns_successful_response_without_sleeping(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.return_value = _make_response(200)
        transport, sleep = _transport(inner)

        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_retryable_error_status_returned_immediately(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.return_value = _make_response(404)
        transport, sleep = _transport(inner)

        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 404
        sleep.assert_not_awaited()


class TestTransportErrors:
    @pytest.mark.asyncio
    async def test_retries_on_transport_error_then_succeeds(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [httpx.TransportError("connection reset"), _make_response(200)]
        transport, sleep = _transport(inner, max_retries=2)

        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 2
        assert sleep.await_count == 1

    @pytest.mark.asyncio
    async def test_raises_after_retries_exhausted(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = httpx.TransportError("down")
        transport, sleep = _transport(inner, max_retries=2)

        with pytest.raises(httpx.TransportError):
            await transport.handle_async_request(_make_request())

        assert inner.handle_async_request.call_count == 3
        assert sleep.await_count == 2


class TestRetryableStatus:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [429, 502, 503, 504])
    async def test_retries_transient_status(self, status: int) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [_make_response(status), _make_response(200)]
        transport, sleep = _transport(inner)

        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        assert sleep.await_count == 1

    @pytest.mark.asyncio
    async def test_honours_retry_after_when_longer_than_backoff(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [
            _make_response(429, headers={"Retry-After": "30"}),
            _make_response(200),
        ]
        transport, sleep = _transport(inner)

        await transport.handle_async_request(_make_request())

        sleep.assert_awaited_once_with(30.0)

    @pytest.mark.asyncio
    async def test_returns_last_response_when_retries_exhausted(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [_make_response(503), _make_response(503)]
        transport, sleep = _transport(inner, max_retries=1)

        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 503
        assert sleep.await_count == 1


class TestParseRetryAfter:
    def test_delta_seconds(self) -> None:
        assert parse_retry_after(_make_response(429, headers={"Retry-After": "5"})) == 5.0

    def test_missing_header_uses_default(self) -> None:
        assert parse_retry_after(_make_response(429), default=2.5) == 2.5

    def test_garbage_uses_default(self) -> None:
        assert parse_retry_after(_make_response(429, headers={"Retry-After": "soon"})) == 1.0

    def test_http_date(self) -> None:
        when = datetime.now(UTC) + timedelta(seconds=60)
        wait = parse_retry_after(_make_response(429, headers={"Retry-After": format_datetime(when, usegmt=True)}))

        assert 50.0 < wait <= 60.0

    def test_past_http_date_is_zero(self) -> None:
        when = datetime.now(UTC) - timedelta(seconds=60)

        assert parse_retry_after(_make_response(503, headers={"Retry-After": format_datetime(when, usegmt=True)})) == 0.0


@pytest.mark.asyncio
async def test_aclose_closes_inner_transport() -> None:
    inner = AsyncMock(spec=httpx.AsyncBaseTransport)
    transport, _ = _transport(inner)

    await transport.aclose()

    inner.aclose.assert_awaited_once()
