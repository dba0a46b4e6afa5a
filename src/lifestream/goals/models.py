"""Goal records read from the Notion goals database."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Goal:
    """A candidate objective entries can be matched to.

    Attributes:
        id: Notion page id.
        title: Goal title, matched against entry keywords.
        deadline: Deadline date, empty if unset.
        priority: 'High', 'Medium' or 'Low'.
        status: 'Planned', 'In Progress' or 'Completed'.
        estimated_time: Estimated effort.
        progress: Progress value as stored in Notion.
        duration_type: 'Week', 'Month' or 'Quarter'.
    """

    id: str
    title: str
    deadline: str = ""
    priority: str | None = None
    status: str = "Planned"
    estimated_time: float | None = None
    progress: float | None = None
    duration_type: str | None = None


@dataclass(frozen=True)
class GoalMatch:
    """The goal selected for an entry."""

    goal_id: str
    goal_title: str


def _prop(properties: dict[str, Any], name: str, kind: str) -> Any:
    """Return the typed payload of a page property, None if absent."""
    prop = properties.get(name)
    if not isinstance(prop, dict):
        return None
    return prop.get(kind)


def _named(value: Any) -> str | None:
    """Return the name of a select/status payload."""
    if isinstance(value, dict) and isinstance(value.get("name"), str):
        return value["name"]
    return None


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def goal_from_page(page: dict[str, Any]) -> Goal | None:
    """Map a Notion page into a Goal.

    Missing or malformed properties fall back to defaults. Returns None only
    when the page has no id.
    """
    page_id = page.get("id")
    if not isinstance(page_id, str) or not page_id:
        return None

    properties = page.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    title = ""
    title_parts = _prop(properties, "Goal Title", "title")
    if isinstance(title_parts, list) and title_parts and isinstance(title_parts[0], dict):
        title = str(title_parts[0].get("plain_text") or "")

    deadline = ""
    date = _prop(properties, "Deadline", "date")
    if isinstance(date, dict) and isinstance(date.get("start"), str):
        deadline = date["start"]

    return Goal(
        id=page_id,
        title=title,
        deadline=deadline,
        priority=_named(_prop(properties, "Priority", "select")),
        status=_named(_prop(properties, "Status", "status")) or "Planned",
        estimated_time=_number(_prop(properties, "Estimated Time", "number")),
        progress=_number(_prop(properties, "Progress", "number")),
        duration_type=_named(_prop(properties, "Duration Type", "select")),
    )
