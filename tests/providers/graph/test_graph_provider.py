"""GraphDirectoryProvider against an httpx.MockTransport."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from rostersync.auth.resolvers.static import StaticTokenResolver
from rostersync.contracts.exceptions import AuthenticationError, ProviderError
from rostersync.providers.graph.provider import DIRECTORY_ROLE_TYPE, GraphDirectoryProvider

BASE_URL = "https://graph.example.test/v1.0"


def _provider(handler: Callable[[httpx.Request], httpx.Response]) -> GraphDirectoryProvider:
    return GraphDirectoryProvider(
        token_resolver=StaticTokenResolver(token="tok_123"),
        base_url=BASE_URL,
        select=["jobTitle"],
        page_size=2,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_fetch_snapshot_follows_next_link() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.params.get("$skiptoken") == "page2":
            return httpx.Response(200, json={"value": [{"id": "3", "userPrincipalName": "c@x.com"}]})
        return httpx.Response(
            200,
            json={
                "value": [
                    {"id": "1", "userPrincipalName": "a@x.com", "jobTitle": "CEO"},
                    {"id": "2", "userPrincipalName": None},
                ],
                "@odata.nextLink": f"{BASE_URL}/users?$skiptoken=page2",
            },
        )

    async with _provider(handler) as provider:
        snapshot = await provider.fetch_snapshot()

    assert list(snapshot) == ["a@x.com", "c@x.com"]
    assert snapshot["a@x.com"].remote_id == "1"
    assert snapshot["a@x.com"].get("jobTitle") == "CEO"
    assert seen[0].headers["Authorization"] == "Bearer tok_123"
    assert seen[0].url.params["$select"] == "id,userPrincipalName,jobTitle"
    assert seen[0].url.params["$top"] == "2"
    assert len(seen) == 2


@pytest.mark.asyncio
async def test_get_role_names_keeps_directory_roles_only() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1.0/users/abc/memberOf"
        return httpx.Response(
            200,
            json={
                "value": [
                    {"@odata.type": DIRECTORY_ROLE_TYPE, "displayName": "Global Administrator"},
                    {"@odata.type": "#microsoft.graph.group", "displayName": "All Staff"},
                ]
            },
        )

    async with _provider(handler) as provider:
        assert await provider.get_role_names("abc") == ["Global Administrator"]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_auth_failures_raise_authentication_error(status: int) -> None:
    async with _provider(lambda request: httpx.Response(status, json={})) as provider:
        with pytest.raises(AuthenticationError):
            await provider.fetch_snapshot()


@pytest.mark.asyncio
async def test_server_error_raises_provider_error() -> None:
    async with _provider(lambda request: httpx.Response(500, json={})) as provider:
        with pytest.raises(ProviderError):
            await provider.fetch_snapshot()


@pytest.mark.asyncio
async def test_missing_value_array_raises_provider_error() -> None:
    async with _provider(lambda request: httpx.Response(200, json={"items": []})) as provider:
        with pytest.raises(ProviderError, match="missing 'value'"):
            await provider.fetch_snapshot()


@pytest.mark.asyncio
async def test_transport_failure_raises_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    provider = GraphDirectoryProvider(
        token_resolver=StaticTokenResolver(token="tok_123"),
        base_url=BASE_URL,
        max_retries=0,
        transport=httpx.MockTransport(handler),
    )
    async with provider:
        with pytest.raises(ProviderError, match="Directory request failed"):
            await provider.fetch_snapshot()


@pytest.mark.asyncio
async def test_use_outside_context_manager_raises() -> None:
    provider = _provider(lambda request: httpx.Response(200, json={"value": []}))

    with pytest.raises(ProviderError, match="not initialized"):
        await provider.fetch_snapshot()
