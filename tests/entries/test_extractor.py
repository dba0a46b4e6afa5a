"""Tests for EntryExtractor."""

import json
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from lifestream.entries import EntryExtractor
from lifestream.entries.extractor import parse_instant
from lifestream.entries.models import Category
from lifestream.errors import ExtractionError

NOW = datetime(2025, 12, 2, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_client() -> AsyncMock:
    """Create a mock Groq client."""
    return AsyncMock()


@pytest.fixture
def extractor(mock_client: AsyncMock) -> EntryExtractor:
    return EntryExtractor(mock_client)


def make_response(content: str) -> Mock:
    """Create a mock LLM response."""
    response = Mock()
    response.choices = [Mock()]
    response.choices[0].message.content = content
    return response


def raw_item(**overrides) -> dict:
    item = {
        "task": "学习Rust",
        "activity": "学习",
        "category": "INVESTMENT",
        "startTime": "2025-12-02T09:00:00.000Z",
        "endTime": "2025-12-02T10:00:00.000Z",
        "durationMinutes": 60,
        "dateStr": "2025-12-02",
        "keywords": ["学习", "Rust"],
    }
    item.update(overrides)
    return item


class TestExtractorInit:
    def test_default_model(self, mock_client: AsyncMock):
        assert EntryExtractor(mock_client).model == "llama-3.1-70b-versatile"

    def test_custom_model(self, mock_client: AsyncMock):
        assert EntryExtractor(mock_client, model="custom").model == "custom"


class TestExtract:
    @pytest.mark.asyncio
    async def test_blank_text_returns_empty(self, extractor: EntryExtractor, mock_client):
        assert await extractor.extract("   ") == []
        mock_client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_valid_extraction(self, extractor: EntryExtractor, mock_client: AsyncMock):
        mock_client.chat.completions.create = AsyncMock(
            return_value=make_response(
                json.dumps({"entries": [raw_item(), raw_item(task="吃饭", activity="吃饭",
                                                              category="EXPENSE")]})
            )
        )

        entries = await extractor.extract("9点到10点学习Rust，然后吃饭", now=NOW)

        assert len(entries) == 2
        first = entries[0]
        assert first.task == "学习Rust"
        assert first.category is Category.INVESTMENT
        assert first.duration_minutes == 60
        assert first.keywords == ["学习", "Rust"]
        assert first.timestamp == int(datetime(2025, 12, 2, 9, tzinfo=timezone.utc).timestamp() * 1000)
        uuid.UUID(first.id)
        assert entries[1].category is Category.EXPENSE
        assert entries[0].id != entries[1].id

    @pytest.mark.asyncio
    async def test_prompt_contains_input_and_time(
        self, extractor: EntryExtractor, mock_client: AsyncMock
    ):
        mock_client.chat.completions.create = AsyncMock(
            return_value=make_response('{"entries": []}')
        )
        await extractor.extract("跑步半小时", now=NOW)

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        prompt = kwargs["messages"][0]["content"]
        assert "跑步半小时" in prompt
        assert NOW.isoformat() in prompt
        assert kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_llm_error_raises(self, extractor: EntryExtractor, mock_client: AsyncMock):
        mock_client.chat.completions.create = AsyncMock(side_effect=Exception("API error"))
        with pytest.raises(ExtractionError, match="API error"):
            await extractor.extract("test", now=NOW)


class TestParseResponse:
    def test_empty_entries(self, extractor: EntryExtractor):
        assert extractor.parse_response('{"entries": []}') == []

    def test_bare_list_accepted(self, extractor: EntryExtractor):
        entries = extractor.parse_response(json.dumps([raw_item()]))
        assert len(entries) == 1

    def test_markdown_code_block_stripped(self, extractor: EntryExtractor):
        content = "```json\n" + json.dumps({"entries": [raw_item()]}) + "\n```"
        assert len(extractor.parse_response(content)) == 1

    def test_invalid_json_raises(self, extractor: EntryExtractor):
        with pytest.raises(ExtractionError, match="not valid JSON"):
            extractor.parse_response("not valid json")

    def test_missing_entries_key_raises(self, extractor: EntryExtractor):
        with pytest.raises(ExtractionError, match="entries"):
            extractor.parse_response('{"data": []}')

    def test_invalid_items_skipped(self, extractor: EntryExtractor):
        content = json.dumps({"entries": [
            raw_item(),
            "invalid",
            raw_item(task=""),
            raw_item(startTime="yesterday"),
            raw_item(endTime="2025-12-02T08:00:00Z"),
            raw_item(durationMinutes=-5),
        ]})
        entries = extractor.parse_response(content)
        assert len(entries) == 1

    def test_all_items_invalid_raises(self, extractor: EntryExtractor):
        with pytest.raises(ExtractionError, match="No usable entries"):
            extractor.parse_response(json.dumps({"entries": [{"bad": "item"}]}))

    def test_out_of_range_duration_skipped(self, extractor: EntryExtractor):
        huge = json.dumps(raw_item()).replace('"durationMinutes": 60', '"durationMinutes": 1e400')
        content = '{"entries": [' + huge + ", " + json.dumps(raw_item(task="ok")) + "]}"
        entries = extractor.parse_response(content)
        assert [e.task for e in entries] == ["ok"]

    def test_only_out_of_range_duration_raises(self, extractor: EntryExtractor):
        huge = json.dumps(raw_item()).replace('"durationMinutes": 60', '"durationMinutes": 1e400')
        with pytest.raises(ExtractionError, match="No usable entries"):
            extractor.parse_response('{"entries": [' + huge + "]}")

    def test_invalid_category_derived_from_activity(self, extractor: EntryExtractor):
        content = json.dumps({"entries": [raw_item(category="FUN", activity="写作")]})
        assert extractor.parse_response(content)[0].category is Category.PRODUCTION

    def test_missing_category_unknown_activity_is_expense(self, extractor: EntryExtractor):
        item = raw_item(activity="发呆")
        del item["category"]
        assert extractor.parse_response(json.dumps([item]))[0].category is Category.EXPENSE

    def test_bad_date_str_derived_from_start(self, extractor: EntryExtractor):
        content = json.dumps([raw_item(dateStr="Dec 2", startTime="2025-12-02T12:00:00+00:00",
                                       endTime="2025-12-02T13:00:00+00:00")])
        entry = extractor.parse_response(content)[0]
        expected = datetime(2025, 12, 2, 12, tzinfo=timezone.utc).astimezone().strftime("%Y-%m-%d")
        assert entry.date_str == expected

    def test_missing_keywords_is_none(self, extractor: EntryExtractor):
        item = raw_item()
        del item["keywords"]
        assert extractor.parse_response(json.dumps([item]))[0].keywords is None


def test_parse_instant_accepts_z():
    assert parse_instant("2025-12-02T09:00:00.000Z") == datetime(2025, 12, 2, 9, tzinfo=timezone.utc)


def test_exported_from_package():
    from lifestream.entries import EntryExtractor as Exported

    assert Exported is EntryExtractor
