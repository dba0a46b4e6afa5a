"""Notion API access and settings."""

from .client import NotionClient, build_url
from .config import NotionConfig, load_notion_config, save_notion_config

__all__ = [
    "NotionClient",
    "NotionConfig",
    "build_url",
    "load_notion_config",
    "save_notion_config",
]
