"""Tests for JSONL logging."""

import json
import tempfile
from pathlib import Path

import pytest

from lifestream.logging import JSONLLogger, LogEntry, configure_logger, get_logger


@pytest.fixture
def temp_log_dir():
    """Create a temporary directory for logs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def logger(temp_log_dir: Path) -> JSONLLogger:
    return JSONLLogger(log_dir=temp_log_dir)


def read_events(logger: JSONLLogger) -> list[dict]:
    with open(logger.log_path, encoding="utf-8") as f:
        return [json.loads(line) for line in f]


def test_log_entry_to_dict():
    """LogEntry excludes None values."""
    entry = LogEntry(timestamp="2024-01-01T00:00:00Z", event="test")
    data = entry.to_dict()

    assert "timestamp" in data
    assert "event" in data
    assert "entry_id" not in data
    assert "extra" not in data


def test_log_creates_file(logger: JSONLLogger):
    logger.log("test_event")
    assert logger.log_path.exists()


def test_log_writes_jsonl(logger: JSONLLogger):
    logger.log("entries_added", count=2)
    logger.log("entry_deleted", entry_id="abc")

    events = read_events(logger)
    assert len(events) == 2
    assert events[0]["event"] == "entries_added"
    assert events[0]["count"] == 2
    assert events[1]["entry_id"] == "abc"


def test_non_ascii_kept_readable(logger: JSONLLogger):
    logger.log("error", error="同步失败")
    assert "同步失败" in logger.log_path.read_text(encoding="utf-8")


def test_none_extra_dropped(logger: JSONLLogger):
    logger.log("report", period="WEEK", note=None)
    assert read_events(logger)[0]["extra"] == {"period": "WEEK"}


def test_log_sync_entry_failure(logger: JSONLLogger):
    logger.log_sync_entry("e1", False, duration_ms=12.5, error="HTTP 400")
    event = read_events(logger)[0]
    assert event["event"] == "sync_entry"
    assert event["error"] == "HTTP 400"
    assert event["success"] is False
    assert event["duration_ms"] == 12.5
    assert "extra" not in event


def test_log_sync_entry_success_hides_error(logger: JSONLLogger):
    logger.log_sync_entry("e1", True, page_id="p1", error="ignored")
    event = read_events(logger)[0]
    assert "error" not in event
    assert event["success"] is True
    assert event["page_id"] == "p1"


def test_log_sync_end_tallies(logger: JSONLLogger):
    logger.log_sync_end("aborted", 0, 1)
    event = read_events(logger)[0]
    assert event["outcome"] == "aborted"
    assert event["succeeded"] == 0
    assert event["failed"] == 1


def test_log_error(logger: JSONLLogger):
    logger.log_error("extract", "bad JSON")
    event = read_events(logger)[0]
    assert event["event"] == "error"
    assert event["error"] == "bad JSON"
    assert event["extra"] == {"operation": "extract"}


def test_rotation(temp_log_dir: Path):
    logger = JSONLLogger(log_dir=temp_log_dir, max_size_mb=0.0001)
    for i in range(20):
        logger.log("event", count=i)

    rotated = list(temp_log_dir.glob("events_*.jsonl"))
    assert rotated


def test_configure_logger(temp_log_dir: Path):
    configured = configure_logger(temp_log_dir)
    assert get_logger() is configured
    assert configured.log_dir == temp_log_dir
