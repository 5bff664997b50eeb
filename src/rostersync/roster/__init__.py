"""Roster loading exports."""

from rostersync.roster.loader import RosterLoader

__all__ = ["RosterLoader"]
