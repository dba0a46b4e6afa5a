"""Dashboard statistics and report windows."""

import calendar
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from ..entries.models import Category, Period, TimeEntry


@dataclass
class ReportData:
    """Minutes spent, overall and broken down."""

    total_minutes: int = 0
    by_category: dict[Category, int] = field(
        default_factory=lambda: {category: 0 for category in Category}
    )
    by_activity: dict[str, int] = field(default_factory=dict)


def summarize(entries: list[TimeEntry]) -> ReportData:
    """Aggregate minutes by category and by activity."""
    data = ReportData()
    for entry in entries:
        data.total_minutes += entry.duration_minutes
        data.by_category[entry.category] += entry.duration_minutes
        data.by_activity[entry.activity] = (
            data.by_activity.get(entry.activity, 0) + entry.duration_minutes
        )
    return data


def top_activities(data: ReportData, limit: int = 10) -> list[tuple[str, int]]:
    """Activities with the most minutes, highest first."""
    ranked = sorted(data.by_activity.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def format_duration(minutes: int) -> str:
    hours, rest = divmod(minutes, 60)
    if hours:
        return f"{hours}h {rest}m"
    return f"{rest}m"


def _months_back(moment: datetime, months: int) -> datetime:
    """Same day and time `months` calendar months earlier, day clamped."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def period_cutoff(period: Period, now: datetime) -> datetime:
    """Start of the report window ending at now."""
    if period is Period.WEEK:
        return now - timedelta(days=7)
    if period is Period.MONTH:
        return _months_back(now, 1)
    return _months_back(now, 3)


def entries_in_period(
    entries: list[TimeEntry], period: Period, now: datetime | None = None
) -> list[TimeEntry]:
    """Entries that started within the report window."""
    now = now or datetime.now(timezone.utc)
    cutoff_ms = int(period_cutoff(period, now).timestamp() * 1000)
    return [entry for entry in entries if entry.timestamp >= cutoff_ms]
