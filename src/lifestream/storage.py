"""Durable key-value storage backed by JSON files."""

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class LocalStorage:
    """Stores one JSON blob per key under a data directory.

    Each key maps to ``<data_dir>/<key>.json``. Writes go through a
    temporary file and a rename so a crash never leaves a half-written blob.
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> Any | None:
        """Load the value stored under key.

        Returns:
            The decoded JSON value, or None if absent or unreadable.
        """
        path = self._path(key)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Failed to decode %s: %s", path, e)
            return None
        except OSError as e:
            logger.error("Cannot read %s: %s", path, e)
            return None

    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(value, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)

    def remove(self, key: str) -> None:
        """Delete the value stored under key, if any."""
        path = self._path(key)
        if path.exists():
            path.unlink()
