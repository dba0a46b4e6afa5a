"""Notion connection settings and their persistence."""

import logging
from dataclasses import asdict, dataclass
from typing import Any

from ..storage import LocalStorage

logger = logging.getLogger(__name__)

NOTION_CONFIG_KEY = "lifestream_notion_config"


@dataclass
class NotionConfig:
    """Credentials and database ids for the Notion workspace.

    Attributes:
        api_key: Notion integration token.
        records_database_id: Database receiving one page per time entry.
        goals_database_id: Database holding goals; empty disables matching.
        proxy_url: Optional relay address in front of api.notion.com.
    """

    api_key: str = ""
    records_database_id: str = ""
    goals_database_id: str = ""
    proxy_url: str | None = None

    def missing_for_sync(self) -> list[str]:
        """Names of the fields sync needs but that are empty."""
        missing = []
        if not self.api_key:
            missing.append("api_key")
        if not self.records_database_id:
            missing.append("records_database_id")
        return missing

    @property
    def can_sync(self) -> bool:
        return not self.missing_for_sync()

    @property
    def has_goals(self) -> bool:
        return bool(self.goals_database_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape."""
        data = {
            "apiKey": self.api_key,
            "recordsDatabaseId": self.records_database_id,
            "goalsDatabaseId": self.goals_database_id,
        }
        if self.proxy_url is not None:
            data["proxyUrl"] = self.proxy_url
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NotionConfig":
        """Create from the persisted JSON shape, defaulting missing fields."""
        proxy_url = data.get("proxyUrl")
        return cls(
            api_key=str(data.get("apiKey") or ""),
            records_database_id=str(data.get("recordsDatabaseId") or ""),
            goals_database_id=str(data.get("goalsDatabaseId") or ""),
            proxy_url=str(proxy_url) if proxy_url is not None else None,
        )

    def masked(self) -> dict[str, Any]:
        """Settings for display, with the API key hidden."""
        data = asdict(self)
        if self.api_key:
            data["api_key"] = f"{self.api_key[:6]}...{self.api_key[-4:]}"
        return data


def load_notion_config(storage: LocalStorage) -> NotionConfig | None:
    """Load the saved Notion settings, None if never configured."""
    raw = storage.get(NOTION_CONFIG_KEY)
    if raw is None:
        return None
    if not isinstance(raw, dict):
        logger.error("Stored Notion config is not an object, ignoring it")
        return None
    return NotionConfig.from_dict(raw)


def save_notion_config(storage: LocalStorage, config: NotionConfig) -> None:
    """Persist the Notion settings."""
    storage.set(NOTION_CONFIG_KEY, config.to_dict())


def clear_notion_config(storage: LocalStorage) -> None:
    """Forget the saved Notion settings."""
    storage.remove(NOTION_CONFIG_KEY)
