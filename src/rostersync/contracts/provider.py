"""Directory provider contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from rostersync.contracts.records import RemoteRecord


class DirectoryProvider(ABC):
    """Read-only access to the remote identity directory.

    ``fetch_snapshot`` must return the complete key set: DELETE detection
    treats any key missing from the snapshot as absent remotely.
    """

    @abstractmethod
    async def __aenter__(self) -> DirectoryProvider: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def fetch_snapshot(self) -> dict[str, RemoteRecord]: ...  # pragma: no cover

    @abstractmethod
    async def get_role_names(self, remote_id: str) -> list[str]: ...  # pragma: no cover
