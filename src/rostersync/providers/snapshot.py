"""Directory provider backed by an exported JSON snapshot."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import TracebackType
from typing import Any

from rostersync.contracts.exceptions import ProviderError
from rostersync.contracts.provider import DirectoryProvider
from rostersync.contracts.records import RemoteRecord

_LOG = logging.getLogger(__name__)


class SnapshotDirectoryProvider(DirectoryProvider):
    """Serves users and roles from a file shaped like::

        {"users": [{"id": "...", "userPrincipalName": "...", ...}],
         "roles": {"<id>": ["Global Administrator"]}}

    The file is read once on enter.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._users: list[dict[str, Any]] = []
        self._roles: dict[str, list[str]] = {}

    async def __aenter__(self) -> SnapshotDirectoryProvider:
        try:
            payload: Any = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ProviderError(f"failed to read directory snapshot: {self._path}") from exc
        if not isinstance(payload, dict):
            raise ProviderError(f"directory snapshot must be a JSON object: {self._path}")

        users = payload.get("users", [])
        roles = payload.get("roles", {})
        if not isinstance(users, list) or not isinstance(roles, dict):
            raise ProviderError(f"directory snapshot has malformed 'users' or 'roles': {self._path}")
        self._users = [user for user in users if isinstance(user, dict)]
        self._roles = {str(key): [str(name) for name in names] for key, names in roles.items() if isinstance(names, list)}
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    async def fetch_snapshot(self) -> dict[str, RemoteRecord]:
        snapshot: dict[str, RemoteRecord] = {}
        for index, user in enumerate(self._users):
            principal = user.get("userPrincipalName")
            if not isinstance(principal, str) or not principal:
                _LOG.debug("Skipping snapshot user %d without userPrincipalName", index)
                continue
            remote_id = str(user.get("id") or principal)
            snapshot[principal] = RemoteRecord(principal_key=principal, remote_id=remote_id, attributes=dict(user))
        return snapshot

    async def get_role_names(self, remote_id: str) -> list[str]:
        return list(self._roles.get(remote_id, []))
