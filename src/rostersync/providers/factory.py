"""Directory provider factory."""

from __future__ import annotations

from rostersync.auth.factory import create_token_resolver
from rostersync.contracts.config import RosterSyncConfig
from rostersync.contracts.exceptions import ConfigError
from rostersync.contracts.provider import DirectoryProvider
from rostersync.providers.graph.provider import GraphDirectoryProvider
from rostersync.providers.snapshot import SnapshotDirectoryProvider
from rostersync.schema.registry import SchemaRegistry

# Write-only attributes the directory refuses to return on read.
_UNREADABLE_ATTRIBUTES = frozenset({"passwordProfile"})


def create_provider(config: RosterSyncConfig, registry: SchemaRegistry) -> DirectoryProvider:
    if config.provider == "snapshot":
        if config.snapshot_path is None:
            raise ConfigError("snapshot provider requires snapshot_path")
        return SnapshotDirectoryProvider(config.snapshot_path)
    if config.provider == "graph":
        select = [d.remote_key for d in registry.primary() if d.remote_key not in _UNREADABLE_ATTRIBUTES]
        return GraphDirectoryProvider(
            token_resolver=create_token_resolver(config),
            base_url=config.graph_base_url,
            select=select,
        )
    raise ConfigError(f"Unknown provider: {config.provider}")
