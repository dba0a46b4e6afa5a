"""Shared fixtures."""

import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from lifestream.entries.models import Category, TimeEntry
from lifestream.storage import LocalStorage


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    """LocalStorage in a temporary directory."""
    return LocalStorage(tmp_path / "data")


@pytest.fixture
def make_entry() -> Callable[..., TimeEntry]:
    """Factory for TimeEntry objects with sensible defaults."""

    def _make(**overrides: Any) -> TimeEntry:
        start = overrides.pop("start", datetime(2025, 12, 2, 9, 0, tzinfo=timezone.utc))
        duration = overrides.get("duration_minutes", 60)
        end = start + timedelta(minutes=duration)
        values: dict[str, Any] = {
            "id": str(uuid.uuid4()),
            "task": "学习编程",
            "activity": "学习",
            "category": Category.INVESTMENT,
            "duration_minutes": duration,
            "start_time": start.isoformat().replace("+00:00", "Z"),
            "end_time": end.isoformat().replace("+00:00", "Z"),
            "timestamp": int(start.timestamp() * 1000),
            "date_str": start.strftime("%Y-%m-%d"),
            "keywords": ["学习", "编程"],
        }
        values.update(overrides)
        return TimeEntry(**values)

    return _make
