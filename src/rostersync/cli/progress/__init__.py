"""CLI progress displays."""

from rostersync.cli.progress.rich import RichSyncProgress

__all__ = ["RichSyncProgress"]
