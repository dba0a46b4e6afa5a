"""Sync of local entries to Notion."""

from .driver import BatchState, EntrySyncState, SyncDriver, SyncOutcome, SyncResult

__all__ = ["BatchState", "EntrySyncState", "SyncDriver", "SyncOutcome", "SyncResult"]
