"""Microsoft Graph directory provider."""

from rostersync.providers.graph.provider import GraphDirectoryProvider

__all__ = ["GraphDirectoryProvider"]
