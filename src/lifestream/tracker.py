"""The LifeStream application context."""

from __future__ import annotations

import logging
from datetime import datetime

from groq import AsyncGroq

from .config import AppConfig
from .entries.extractor import EntryExtractor
from .entries.models import Period, TimeEntry
from .entries.store import EntryStore
from .errors import ReportError
from .goals.service import enrich_entries
from .logging import JSONLLogger
from .notion.client import NotionClient
from .notion.config import (
    NotionConfig,
    clear_notion_config,
    load_notion_config,
    save_notion_config,
)
from .report.generator import ReportGenerator
from .report.stats import ReportData, entries_in_period, summarize
from .storage import LocalStorage
from .sync.driver import SyncDriver, SyncResult

logger = logging.getLogger(__name__)


class TimeTracker:
    """Owns the entry store, Notion settings, and external clients.

    Every user-facing operation goes through this object. Call ``open()``
    before use and ``close()`` when done.
    """

    def __init__(
        self,
        config: AppConfig,
        llm_client: AsyncGroq,
        notion_client: NotionClient | None = None,
        event_logger: JSONLLogger | None = None,
    ) -> None:
        self.config = config
        self.storage = LocalStorage(config.data_dir)
        self.store = EntryStore(self.storage)
        self.notion_config: NotionConfig | None = None
        self.notion = notion_client or NotionClient(
            timeout=config.http_timeout, default_proxy_url=config.proxy_url
        )
        self.extractor = EntryExtractor(llm_client, model=config.model)
        self.reporter = ReportGenerator(llm_client, model=config.model)
        self.event_logger = event_logger
        self.sync_driver = SyncDriver(
            self.notion, self.store, delay=config.sync_delay, event_logger=event_logger
        )

    def open(self) -> None:
        """Load entries and Notion settings from storage."""
        self.store.load()
        self.notion_config = load_notion_config(self.storage)
        logger.info("Loaded %d entries from %s", len(self.store), self.storage.data_dir)

    async def close(self) -> None:
        """Flush entries and release the HTTP client."""
        self.store.flush()
        await self.notion.close()

    def _log(self, event: str, **kwargs) -> None:
        if self.event_logger:
            self.event_logger.log(event, **kwargs)

    def log_error(self, operation: str, error: Exception) -> None:
        """Record a failed user-facing operation in the event log."""
        logger.error("%s failed: %s", operation, error)
        if self.event_logger:
            self.event_logger.log_error(operation, str(error))

    async def add_from_text(self, text: str, now: datetime | None = None) -> list[TimeEntry]:
        """Extract entries from free text, enrich them, and store them.

        Raises:
            ExtractionError: If the text could not be turned into entries.
        """
        entries = await self.extractor.extract(text, now=now)
        if not entries:
            return []

        if self.notion_config and self.notion_config.has_goals:
            entries = await enrich_entries(self.notion, self.notion_config, entries)

        self.store.append(entries)
        self._log("entries_added", count=len(entries))
        return entries

    def entries(self) -> list[TimeEntry]:
        return self.store.all()

    def delete(self, entry_id: str) -> bool:
        """Delete one entry by id."""
        deleted = self.store.delete(entry_id)
        if deleted:
            self._log("entry_deleted", entry_id=entry_id)
        return deleted

    def clear(self) -> None:
        """Remove every entry, synced or not."""
        count = len(self.store)
        self.store.clear()
        self._log("entries_cleared", count=count)

    def stats(self) -> ReportData:
        return summarize(self.store.all())

    async def sync(self) -> SyncResult:
        """Push unsynced entries to Notion."""
        return await self.sync_driver.run(self.notion_config)

    async def report(self, period: Period, now: datetime | None = None) -> str:
        """Generate the Markdown analysis for one period.

        Raises:
            ReportError: If there is no data in the window or the LLM fails.
        """
        all_entries = self.store.all()
        if not all_entries:
            raise ReportError("Not enough data to generate a report")

        window = entries_in_period(all_entries, period, now=now)
        if not window:
            raise ReportError(f"No entries in the last {period.value.lower()}")

        report = await self.reporter.generate(window, period)
        self._log("report", count=len(window), period=period.value)
        return report

    def save_notion_config(self, config: NotionConfig) -> None:
        self.notion_config = config
        save_notion_config(self.storage, config)

    def clear_notion_config(self) -> None:
        self.notion_config = None
        clear_notion_config(self.storage)
