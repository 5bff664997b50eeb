from pathlib import Path

import pytest

from rostersync.contracts.config import RosterSyncConfig
from rostersync.contracts.exceptions import ConfigError
from rostersync.providers.factory import create_provider
from rostersync.providers.graph.provider import GraphDirectoryProvider
from rostersync.providers.snapshot import SnapshotDirectoryProvider
from rostersync.schema.registry import SchemaRegistry


def test_snapshot_provider(registry: SchemaRegistry) -> None:
    config = RosterSyncConfig(roster_path=Path("r.csv"), snapshot_path=Path("dir.json"))

    assert isinstance(create_provider(config, registry), SnapshotDirectoryProvider)


def test_graph_provider_selects_readable_primary_attributes(registry: SchemaRegistry) -> None:
    config = RosterSyncConfig(roster_path=Path("r.csv"), provider="graph")

    provider = create_provider(config, registry)

    assert isinstance(provider, GraphDirectoryProvider)
    assert "jobTitle" in provider._select
    assert "passwordProfile" not in provider._select
    assert provider._select[:2] == ["id", "userPrincipalName"]


def test_unknown_provider_raises(registry: SchemaRegistry) -> None:
    config = RosterSyncConfig.model_construct(roster_path=Path("r.csv"), provider="ldap", snapshot_path=None)

    with pytest.raises(ConfigError):
        create_provider(config, registry)
