"""Dashboard statistics and AI reports."""

from .generator import ReportGenerator
from .stats import ReportData, entries_in_period, format_duration, summarize, top_activities

__all__ = [
    "ReportData",
    "ReportGenerator",
    "entries_in_period",
    "format_duration",
    "summarize",
    "top_activities",
]
