"""Synchronization module for staticsync.

Philosophy: THE NEWEST FILE WINS.

This module provides:
- Reconciler: Decide and apply the sync action for one file pair
- Scheduler: Run reconcile passes over all pairs, once or on an interval
"""

from staticsync.sync.reconciler import (
    FileSnapshot,
    Reconciler,
    SyncAction,
    SyncDecision,
)
from staticsync.sync.scheduler import PassStats, Scheduler

__all__ = [
    "FileSnapshot",
    "Reconciler",
    "SyncAction",
    "SyncDecision",
    "PassStats",
    "Scheduler",
]
