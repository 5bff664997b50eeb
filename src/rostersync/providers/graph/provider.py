"""Directory provider backed by the Microsoft Graph REST API."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from rostersync.auth.base import TokenResolver
from rostersync.contracts.exceptions import AuthenticationError, ProviderError
from rostersync.contracts.provider import DirectoryProvider
from rostersync.contracts.records import RemoteRecord
from rostersync.providers.graph._retrying_transport import RetryingTransport

_LOG = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://graph.microsoft.com/v1.0"
DIRECTORY_ROLE_TYPE = "#microsoft.graph.directoryRole"
_REQUIRED_FIELDS = ("id", "userPrincipalName")


class GraphDirectoryProvider(DirectoryProvider):
    """Reads users and their directory roles.

    Users are keyed by ``userPrincipalName``; entries without one are
    skipped. Paging follows ``@odata.nextLink`` until exhausted so the
    snapshot is complete.
    """

    def __init__(
        self,
        *,
        token_resolver: TokenResolver,
        base_url: str = DEFAULT_BASE_URL,
        select: Sequence[str] = (),
        page_size: int = 999,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token_resolver = token_resolver
        self._base_url = base_url.rstrip("/")
        self._select = list(dict.fromkeys([*_REQUIRED_FIELDS, *select]))
        self._page_size = page_size
        self._max_retries = max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GraphDirectoryProvider:
        token = await self._token_resolver.resolve()
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
            transport=RetryingTransport(transport=self._transport, max_retries=self._max_retries),
            timeout=30.0,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_snapshot(self) -> dict[str, RemoteRecord]:
        params = {"$select": ",".join(self._select), "$top": str(self._page_size)}
        snapshot: dict[str, RemoteRecord] = {}
        for user in await self._get_all("/users", params):
            principal = user.get("userPrincipalName")
            remote_id = user.get("id")
            if not isinstance(principal, str) or not principal or not isinstance(remote_id, str):
                _LOG.debug("Skipping directory entry without userPrincipalName: %s", remote_id)
                continue
            if principal in snapshot:
                _LOG.warning("Duplicate userPrincipalName %s in directory; keeping first", principal)
                continue
            snapshot[principal] = RemoteRecord(principal_key=principal, remote_id=remote_id, attributes=user)
        _LOG.debug("Fetched %d directory users", len(snapshot))
        return snapshot

    async def get_role_names(self, remote_id: str) -> list[str]:
        path = f"/users/{quote(remote_id, safe='')}/memberOf"
        entries = await self._get_all(path, {"$select": "displayName,roleTemplateId"})
        return [
            str(entry["displayName"])
            for entry in entries
            if entry.get("@odata.type") == DIRECTORY_ROLE_TYPE and entry.get("displayName")
        ]

    async def _get_all(self, path: str, params: dict[str, str]) -> list[dict[str, Any]]:
        results: list[dict[str, Any]] = []
        payload = await self._get_json(path, params)
        while True:
            values = payload.get("value")
            if not isinstance(values, list):
                raise ProviderError(f"Directory response for {path} is missing 'value'")
            results.extend(v for v in values if isinstance(v, dict))
            next_link = payload.get("@odata.nextLink")
            if not isinstance(next_link, str) or not next_link:
                return results
            payload = await self._get_json(next_link, None)

    async def _get_json(self, url: str, params: dict[str, str] | None) -> dict[str, Any]:
        if self._client is None:
            raise ProviderError("Provider is not initialized. Use 'async with'.")
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise ProviderError(f"Directory request failed: {exc}") from exc

        if response.status_code in {401, 403}:
            raise AuthenticationError(f"Directory rejected credentials ({response.status_code}) for {url}")
        if response.is_error:
            raise ProviderError(f"Directory request {url} failed with status {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError(f"Directory response for {url} is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise ProviderError(f"Directory response for {url} is not an object")
        return payload
