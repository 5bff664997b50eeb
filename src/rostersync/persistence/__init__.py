"""Persistence helpers shared by SDK and CLI."""

from rostersync.persistence.item_state import ItemStateStore, find_orphans

__all__ = ["ItemStateStore", "find_orphans"]
