"""Push unsynced entries to Notion, one at a time."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..entries.store import EntryStore
from ..errors import NotionError, NotionTransportError
from ..notion.client import NotionClient
from ..notion.config import NotionConfig

if TYPE_CHECKING:
    from ..logging import JSONLLogger

logger = logging.getLogger(__name__)

# Pause after each successful page creation; Notion allows ~3 requests/s.
DEFAULT_SYNC_DELAY = 0.4


class EntrySyncState(Enum):
    """Sync state of a single entry within a batch."""

    UNSYNCED = "unsynced"
    SYNCED = "synced"
    FAILED = "failed"


class BatchState(Enum):
    """Lifecycle of the driver's current batch."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class SyncOutcome(Enum):
    """How a sync request ended."""

    NOT_CONFIGURED = "not_configured"
    NOTHING_TO_DO = "nothing_to_do"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class SyncResult:
    """Result of one sync request."""

    outcome: SyncOutcome
    succeeded: int = 0
    failed: int = 0
    states: dict[str, EntrySyncState] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def message(self) -> str:
        """One-line summary for the user."""
        if self.outcome is SyncOutcome.NOT_CONFIGURED:
            return f"Notion is not configured (missing: {', '.join(self.missing)})"
        if self.outcome is SyncOutcome.NOTHING_TO_DO:
            return "All entries are already synced to Notion"
        if self.outcome is SyncOutcome.ABORTED:
            return (
                f"Sync aborted after {self.succeeded} succeeded, {self.failed} failed: "
                f"{self.error}"
            )
        if self.failed:
            return f"{self.succeeded} succeeded, {self.failed} failed"
        return f"Synced {self.succeeded} entries to Notion"


class SyncDriver:
    """Sequential, rate-limited sync of local entries to Notion.

    Only entries without a Notion page are submitted, in store order.
    Page ids are collected on a working copy and committed to the store
    in one replacement when the batch stops for any reason: completion,
    a transport failure, cancellation, or an unexpected error. Rejected
    entries are counted and skipped.
    """

    def __init__(
        self,
        client: NotionClient,
        store: EntryStore,
        delay: float = DEFAULT_SYNC_DELAY,
        event_logger: JSONLLogger | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.client = client
        self.store = store
        self.delay = delay
        self.event_logger = event_logger
        self._sleep = sleep
        self.state = BatchState.IDLE

    def _commit(self, page_ids: dict[str, str]) -> None:
        """Apply collected page ids to the store as one replacement."""
        if not page_ids:
            return
        updated = [
            dataclasses.replace(entry, notion_page_id=page_ids[entry.id])
            if entry.id in page_ids and not entry.is_synced
            else entry
            for entry in self.store.all()
        ]
        self.store.replace(updated)

    def _finish(self, result: SyncResult) -> SyncResult:
        if self.event_logger:
            self.event_logger.log_sync_end(result.outcome.value, result.succeeded, result.failed)
        return result

    async def run(self, config: NotionConfig | None) -> SyncResult:
        """Sync every unsynced entry.

        Args:
            config: The Notion settings; None counts as unconfigured.

        Returns:
            The SyncResult describing what happened.
        """
        config = config or NotionConfig()
        missing = config.missing_for_sync()
        if missing:
            logger.error("Notion configuration incomplete: %s", missing)
            return SyncResult(outcome=SyncOutcome.NOT_CONFIGURED, missing=missing)

        pending = self.store.unsynced()
        logger.info("Found %d unsynced entries", len(pending))
        if not pending:
            return SyncResult(outcome=SyncOutcome.NOTHING_TO_DO)

        self.state = BatchState.RUNNING
        result = SyncResult(
            outcome=SyncOutcome.COMPLETED,
            states={entry.id: EntrySyncState.UNSYNCED for entry in pending},
        )
        page_ids: dict[str, str] = {}
        if self.event_logger:
            self.event_logger.log("sync_start", count=len(pending))

        try:
            for entry in pending:
                logger.info("Syncing entry %s: %s", entry.id, entry.task)
                started = time.monotonic()
                try:
                    page_id = await self.client.create_page(config, entry)
                except NotionError as e:
                    duration_ms = (time.monotonic() - started) * 1000
                    result.failed += 1
                    result.states[entry.id] = EntrySyncState.FAILED
                    logger.error("Failed to sync entry %r: %s", entry.task, e)
                    if self.event_logger:
                        self.event_logger.log_sync_entry(
                            entry.id, False, duration_ms=duration_ms, error=str(e)
                        )

                    if isinstance(e, NotionTransportError):
                        result.outcome = SyncOutcome.ABORTED
                        result.error = str(e)
                        return self._finish(result)
                    continue

                duration_ms = (time.monotonic() - started) * 1000
                page_ids[entry.id] = page_id
                result.succeeded += 1
                result.states[entry.id] = EntrySyncState.SYNCED
                if self.event_logger:
                    self.event_logger.log_sync_entry(
                        entry.id, True, page_id=page_id, duration_ms=duration_ms
                    )
                await self._sleep(self.delay)
            self.state = BatchState.COMPLETED
        finally:
            # pages already created remotely must never be submitted twice
            self._commit(page_ids)
            if self.state is not BatchState.COMPLETED:
                self.state = BatchState.ABORTED

        return self._finish(result)
