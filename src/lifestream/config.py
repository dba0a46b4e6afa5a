"""Application settings loaded from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

from .sync.driver import DEFAULT_SYNC_DELAY

DEFAULT_DATA_DIR = Path.home() / ".lifestream"
DEFAULT_MODEL = "llama-3.1-70b-versatile"


@dataclass
class AppConfig:
    """Runtime settings for LifeStream.

    Attributes:
        data_dir: Where entries and Notion settings are stored.
        model: Groq model used for extraction and reports.
        sync_delay: Seconds to wait after each page created in Notion.
        http_timeout: Per-request timeout for Notion calls, in seconds.
        proxy_url: Relay used when the Notion settings name none.
        log_dir: Where the JSONL event log goes (data_dir/logs if None).
    """

    data_dir: Path = DEFAULT_DATA_DIR
    model: str = DEFAULT_MODEL
    sync_delay: float = DEFAULT_SYNC_DELAY
    http_timeout: float = 30.0
    proxy_url: str | None = None
    log_dir: Path | None = None

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir).expanduser()
        if self.log_dir is None:
            self.log_dir = self.data_dir / "logs"
        if self.sync_delay < 0:
            raise ValueError("sync_delay must not be negative")


def config_from_env() -> AppConfig:
    """Load configuration from environment variables."""
    return AppConfig(
        data_dir=Path(os.getenv("LIFESTREAM_HOME", str(DEFAULT_DATA_DIR))),
        model=os.getenv("GROQ_MODEL", DEFAULT_MODEL),
        sync_delay=float(os.getenv("LIFESTREAM_SYNC_DELAY", str(DEFAULT_SYNC_DELAY))),
        http_timeout=float(os.getenv("LIFESTREAM_HTTP_TIMEOUT", "30")),
        proxy_url=os.getenv("NOTION_PROXY_URL") or None,
    )
