"""Goal lookup, keyword matching, and entry enrichment."""

import dataclasses
import logging

from ..entries.models import TimeEntry
from ..errors import ConfigIncompleteError, NotionError
from ..notion.client import NotionClient
from ..notion.config import NotionConfig
from .models import Goal, GoalMatch, goal_from_page

logger = logging.getLogger(__name__)


async def fetch_active_goals(
    client: NotionClient, config: NotionConfig, record_date: str
) -> list[Goal]:
    """Fetch goals that are not completed and due on or after record_date.

    Failures are logged and reported as no goals.
    """
    try:
        pages = await client.query_active_goals(config, record_date)
    except (ConfigIncompleteError, NotionError) as e:
        logger.error("Error fetching goals: %s", e)
        return []

    goals = []
    for page in pages:
        goal = goal_from_page(page)
        if goal is None:
            logger.warning("Skipping goal page without id")
            continue
        goals.append(goal)
    return goals


def match_goal_to_entry(entry: TimeEntry, goals: list[Goal]) -> GoalMatch | None:
    """Pick the goal whose title contains the most of the entry's keywords.

    Matching is case-insensitive substring search. Only a strictly higher
    score replaces the current best, so the earliest goal wins ties.
    """
    if not entry.keywords or not goals:
        return None

    keywords = [keyword.lower() for keyword in entry.keywords]
    best: Goal | None = None
    best_score = 0

    for goal in goals:
        title = goal.title.lower()
        score = sum(1 for keyword in keywords if keyword in title)
        if score > best_score:
            best = goal
            best_score = score

    if best is None:
        return None
    return GoalMatch(goal_id=best.id, goal_title=best.title)


async def enrich_entries(
    client: NotionClient, config: NotionConfig, entries: list[TimeEntry]
) -> list[TimeEntry]:
    """Attach the best matching goal to each entry of a fresh batch.

    Returns a batch of the same size and order. The input batch is
    returned unchanged when goals are not configured, the batch is empty,
    no goals are active, or anything goes wrong.
    """
    if not config.goals_database_id or not entries:
        return entries

    try:
        earliest = min(entry.date_str for entry in entries)
        goals = await fetch_active_goals(client, config, earliest)

        if not goals:
            logger.info("No active goals found")
            return entries

        logger.info("Found %d active goals", len(goals))

        enriched = []
        for entry in entries:
            # goal fields are only ever set once
            match = None if entry.goal_id else match_goal_to_entry(entry, goals)
            if match is None:
                enriched.append(entry)
                continue
            logger.info("Matched %r to goal %r", entry.task, match.goal_title)
            enriched.append(
                dataclasses.replace(entry, goal_id=match.goal_id, goal_title=match.goal_title)
            )
        return enriched

    except Exception as e:
        logger.error("Error processing entries with goals: %s", e)
        return entries
