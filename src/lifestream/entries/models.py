"""Data models for time entries."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Category(Enum):
    """Life-philosophy category of a time entry."""

    INVESTMENT = "INVESTMENT"  # adds quality to life
    PRODUCTION = "PRODUCTION"  # creates value
    EXPENSE = "EXPENSE"  # keeps life running


class Period(Enum):
    """Report window."""

    WEEK = "WEEK"
    MONTH = "MONTH"
    QUARTER = "QUARTER"


@dataclass(frozen=True)
class TimeEntry:
    """One recorded activity interval.

    Attributes:
        id: Locally generated UUID, stable for the entry's lifetime.
        task: Free-text description of what was done.
        activity: Standardized activity label (see categories).
        category: The entry's category.
        duration_minutes: Duration in whole minutes.
        start_time: ISO-8601 instant when the activity started.
        end_time: ISO-8601 instant when the activity ended.
        timestamp: Start time as epoch milliseconds, used for sorting.
        date_str: Calendar date of the start, YYYY-MM-DD.
        keywords: Keywords used for goal matching, None if not extracted.
        goal_id: Matched Notion goal page, set by enrichment.
        goal_title: Title of the matched goal, for display.
        notion_page_id: Notion page created for this entry; set means synced.
    """

    id: str
    task: str
    activity: str
    category: Category
    duration_minutes: int
    start_time: str
    end_time: str
    timestamp: int
    date_str: str
    keywords: list[str] | None = None
    goal_id: str | None = None
    goal_title: str | None = None
    notion_page_id: str | None = None

    @property
    def is_synced(self) -> bool:
        """Whether a Notion page exists for this entry."""
        return bool(self.notion_page_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape, omitting unset optionals."""
        data: dict[str, Any] = {
            "id": self.id,
            "task": self.task,
            "activity": self.activity,
            "category": self.category.value,
            "durationMinutes": self.duration_minutes,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "timestamp": self.timestamp,
            "dateStr": self.date_str,
        }
        if self.keywords is not None:
            data["keywords"] = list(self.keywords)
        if self.goal_id is not None:
            data["goalId"] = self.goal_id
        if self.goal_title is not None:
            data["goalTitle"] = self.goal_title
        if self.notion_page_id is not None:
            data["notionPageId"] = self.notion_page_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeEntry":
        """Create from the persisted JSON shape.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If the category is unknown.
        """
        keywords = data.get("keywords")
        return cls(
            id=str(data["id"]),
            task=str(data["task"]),
            activity=str(data["activity"]),
            category=Category(data["category"]),
            duration_minutes=int(data["durationMinutes"]),
            start_time=str(data["startTime"]),
            end_time=str(data["endTime"]),
            timestamp=int(data["timestamp"]),
            date_str=str(data["dateStr"]),
            keywords=[str(k) for k in keywords] if keywords is not None else None,
            goal_id=data.get("goalId"),
            goal_title=data.get("goalTitle"),
            notion_page_id=data.get("notionPageId"),
        )
