"""Time entry extraction from free text using an LLM."""

import json
import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any

from groq import AsyncGroq

from ..errors import ExtractionError
from .categories import category_context, category_for_activity
from .models import Category, TimeEntry

logger = logging.getLogger(__name__)

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

EXTRACTION_PROMPT = """User Input: "{text}"
Current Date/Time: {now}

Task: Analyze the user's input describing their activities.
1. Break down distinct activities.
2. Map each activity to the closest Standard Activity from the provided list.
3. Assign the correct Category (PRODUCTION, INVESTMENT, EXPENSE).
4. Parse time ranges:
   - If user says "9点到10点" or "9:00-10:00", extract start and end times
   - If no time specified, use current time and calculate end time from duration
   - If only duration given (e.g., "1小时"), estimate reasonable start time
5. Extract keywords from the task description for goal matching (e.g., "学习编程" -> ["学习", "编程"])
6. If the input implies a date (e.g., "yesterday", "昨天"), use that date. Otherwise use today.

{context}

Return ONLY valid JSON:
{{
  "entries": [
    {{
      "task": "<task description>",
      "activity": "<standard activity>",
      "category": "PRODUCTION" | "INVESTMENT" | "EXPENSE",
      "startTime": "<ISO datetime>",
      "endTime": "<ISO datetime>",
      "durationMinutes": <integer>,
      "dateStr": "YYYY-MM-DD",
      "keywords": ["<keyword>", ...]
    }}
  ]
}}

Important: Return ISO datetime strings for startTime and endTime (e.g., "2025-12-02T09:00:00.000Z")
"""

REQUIRED_FIELDS = ("task", "activity", "startTime", "endTime", "durationMinutes")


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant, accepting a trailing 'Z'.

    Raises:
        ValueError: If the value is not an ISO-8601 datetime.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _strip_code_fence(content: str) -> str:
    """Remove a surrounding markdown code block, if present."""
    text = content.strip()
    if not text.startswith("```"):
        return text
    lines = [line for line in text.split("\n") if not line.startswith("```")]
    return "\n".join(lines)


class EntryExtractor:
    """Turns a free-text activity description into time entries."""

    def __init__(
        self,
        llm_client: AsyncGroq,
        model: str = "llama-3.1-70b-versatile",
    ) -> None:
        """Initialize the extractor.

        Args:
            llm_client: The Groq client for LLM calls.
            model: The model to use for extraction.
        """
        self.client = llm_client
        self.model = model

    async def extract(self, text: str, now: datetime | None = None) -> list[TimeEntry]:
        """Extract time entries from free text.

        Args:
            text: What the user did, in their own words.
            now: The current instant, defaults to the wall clock.

        Returns:
            Hydrated entries in the order the model listed them.

        Raises:
            ExtractionError: If the LLM call fails or its output cannot be used.
        """
        if not text.strip():
            return []

        now = now or datetime.now(timezone.utc)
        prompt = EXTRACTION_PROMPT.format(
            text=text,
            now=now.isoformat(),
            context=category_context(),
        )

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.1,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            logger.error("Entry extraction call failed: %s", e)
            raise ExtractionError(f"LLM call failed: {e}") from e

        content = response.choices[0].message.content or ""
        return self.parse_response(content)

    def parse_response(self, content: str) -> list[TimeEntry]:
        """Validate the raw LLM output and hydrate it into entries.

        Items that do not have the entry shape are skipped with a warning.

        Raises:
            ExtractionError: If the output is not JSON, has no entry list,
                or none of its items are usable.
        """
        try:
            data = json.loads(_strip_code_fence(content) or "[]")
        except json.JSONDecodeError as e:
            raise ExtractionError(f"Response is not valid JSON: {e}") from e

        if isinstance(data, dict):
            items = data.get("entries")
        else:
            items = data
        if not isinstance(items, list):
            raise ExtractionError("Response has no 'entries' list")

        entries = []
        for index, item in enumerate(items):
            try:
                entries.append(self._hydrate(item))
            except (TypeError, ValueError, OverflowError) as e:
                logger.warning("Skipping invalid entry item %d: %s", index, e)

        if items and not entries:
            raise ExtractionError("No usable entries in response")
        return entries

    def _hydrate(self, item: Any) -> TimeEntry:
        """Validate one raw item and give it an id and sort timestamp."""
        if not isinstance(item, dict):
            raise TypeError(f"expected an object, got {type(item).__name__}")

        missing = [name for name in REQUIRED_FIELDS if item.get(name) in (None, "")]
        if missing:
            raise ValueError(f"missing fields: {', '.join(missing)}")

        start = parse_instant(str(item["startTime"]))
        end = parse_instant(str(item["endTime"]))
        if end < start:
            raise ValueError("endTime is before startTime")

        duration = int(item["durationMinutes"])
        if duration < 0:
            raise ValueError("durationMinutes is negative")

        activity = str(item["activity"]).strip()
        try:
            category = Category(item.get("category"))
        except (TypeError, ValueError):
            category = category_for_activity(activity)

        date_str = item.get("dateStr")
        if not isinstance(date_str, str) or not DATE_RE.match(date_str):
            date_str = start.astimezone().strftime("%Y-%m-%d")

        keywords = item.get("keywords")
        if isinstance(keywords, list):
            keywords = [str(k) for k in keywords if str(k).strip()]
        else:
            keywords = None

        return TimeEntry(
            id=str(uuid.uuid4()),
            task=str(item["task"]).strip(),
            activity=activity,
            category=category,
            duration_minutes=duration,
            start_time=str(item["startTime"]),
            end_time=str(item["endTime"]),
            timestamp=int(start.timestamp() * 1000),
            date_str=date_str,
            keywords=keywords,
        )
