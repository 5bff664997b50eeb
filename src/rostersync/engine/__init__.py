"""Reconciliation engine exports."""

from rostersync.engine.comparison import values_equal
from rostersync.engine.progress import NullSyncProgress, SyncProgress
from rostersync.engine.reconciler import Reconciler

__all__ = ["NullSyncProgress", "Reconciler", "SyncProgress", "values_equal"]
