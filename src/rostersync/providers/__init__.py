"""Directory provider implementations and factory."""

from rostersync.providers.factory import create_provider
from rostersync.providers.graph.provider import GraphDirectoryProvider
from rostersync.providers.snapshot import SnapshotDirectoryProvider

__all__ = ["GraphDirectoryProvider", "SnapshotDirectoryProvider", "create_provider"]
