"""Goal lookup and matching against Notion goals."""

from .models import Goal, GoalMatch
from .service import enrich_entries, fetch_active_goals, match_goal_to_entry

__all__ = [
    "Goal",
    "GoalMatch",
    "enrich_entries",
    "fetch_active_goals",
    "match_goal_to_entry",
]
