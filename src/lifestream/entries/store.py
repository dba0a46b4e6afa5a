"""Local entry store persisted to key-value storage."""

import logging
from collections.abc import Iterable

from ..storage import LocalStorage
from .models import TimeEntry

logger = logging.getLogger(__name__)

ENTRIES_KEY = "lifestream_entries"


class EntryStore:
    """Authoritative, ordered list of time entries.

    Entries keep insertion order. Every mutation is written through to
    storage immediately.
    """

    def __init__(self, storage: LocalStorage) -> None:
        self.storage = storage
        self._entries: list[TimeEntry] = []

    def load(self) -> None:
        """Load entries from storage, starting empty if none are stored."""
        raw = self.storage.get(ENTRIES_KEY)
        if raw is None:
            self._entries = []
            return

        if not isinstance(raw, list):
            logger.error("Stored entries are not a list, starting empty")
            self._entries = []
            return

        entries = []
        for item in raw:
            if not isinstance(item, dict):
                logger.warning("Skipping stored entry that is not an object: %r", item)
                continue
            try:
                entries.append(TimeEntry.from_dict(item))
            except (KeyError, TypeError, ValueError, OverflowError) as e:
                logger.warning("Skipping unreadable stored entry %r: %s", item, e)
        self._entries = entries

    def flush(self) -> None:
        """Write the current entry list to storage."""
        self.storage.set(ENTRIES_KEY, [entry.to_dict() for entry in self._entries])

    def all(self) -> list[TimeEntry]:
        """Return a snapshot of all entries in insertion order."""
        return list(self._entries)

    def get(self, entry_id: str) -> TimeEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def find_by_prefix(self, prefix: str) -> list[TimeEntry]:
        """Return entries whose id starts with prefix."""
        return [entry for entry in self._entries if entry.id.startswith(prefix)]

    def unsynced(self) -> list[TimeEntry]:
        """Return entries without a Notion page, in insertion order."""
        return [entry for entry in self._entries if not entry.is_synced]

    def append(self, entries: Iterable[TimeEntry]) -> None:
        """Append entries in the given order."""
        self._entries.extend(entries)
        self.flush()

    def delete(self, entry_id: str) -> bool:
        """Remove one entry. Returns False if no entry has that id."""
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        self.flush()
        return True

    def clear(self) -> None:
        """Remove every entry, including synced ones."""
        self._entries = []
        self.storage.remove(ENTRIES_KEY)

    def replace(self, entries: list[TimeEntry]) -> None:
        """Atomically replace the whole entry list."""
        self._entries = list(entries)
        self.flush()

    def __len__(self) -> int:
        return len(self._entries)
