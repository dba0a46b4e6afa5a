"""JSONL event logging for user-facing operations."""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


@dataclass
class LogEntry:
    """One tracker event.

    Sync events carry the entry, its page and the batch tallies as
    first-class fields. ``extra`` holds operation details such as the
    report period.
    """

    timestamp: str
    event: str
    entry_id: str | None = None
    page_id: str | None = None
    success: bool | None = None
    count: int | None = None
    succeeded: int | None = None
    failed: int | None = None
    duration_ms: float | None = None
    outcome: str | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None values."""
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None and v != {} and v != []}


class JSONLLogger:
    """Logger that writes structured events in JSONL format."""

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "events.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = Path.home() / ".lifestream" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size."""
        if not self.log_path.exists():
            return

        if self.log_path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            rotated_name = f"{self.log_path.stem}_{timestamp}.jsonl"
            self.log_path.rename(self.log_dir / rotated_name)

    def _write(self, entry: LogEntry) -> None:
        """Write a log entry to the file."""
        self._rotate_if_needed()

        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")

    def log(
        self,
        event: str,
        *,
        entry_id: str | None = None,
        page_id: str | None = None,
        success: bool | None = None,
        count: int | None = None,
        succeeded: int | None = None,
        failed: int | None = None,
        duration_ms: float | None = None,
        outcome: str | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        extra = {k: v for k, v in extra.items() if v is not None}
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            entry_id=entry_id,
            page_id=page_id,
            success=success,
            count=count,
            succeeded=succeeded,
            failed=failed,
            duration_ms=duration_ms,
            outcome=outcome,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def log_sync_entry(
        self,
        entry_id: str,
        success: bool,
        *,
        page_id: str | None = None,
        duration_ms: float | None = None,
        error: str | None = None,
    ) -> None:
        """Log one entry's submission to Notion."""
        self.log(
            "sync_entry",
            entry_id=entry_id,
            duration_ms=duration_ms,
            error=error if not success else None,
            success=success,
            page_id=page_id,
        )

    def log_sync_end(self, outcome: str, succeeded: int, failed: int) -> None:
        """Log when a sync batch stops."""
        self.log(
            "sync_end",
            outcome=outcome,
            succeeded=succeeded,
            failed=failed,
        )

    def log_error(self, operation: str, error: str) -> None:
        """Log a user-facing operation that failed."""
        self.log("error", error=error, operation=operation)


# Global logger instance
_logger: JSONLLogger | None = None


def get_logger() -> JSONLLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = JSONLLogger()
    return _logger


def configure_logger(log_dir: str | Path | None = None, max_size_mb: float = 10.0) -> JSONLLogger:
    """Configure and return the global logger."""
    global _logger
    _logger = JSONLLogger(log_dir=log_dir, max_size_mb=max_size_mb)
    return _logger
