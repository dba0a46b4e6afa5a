"""Time entries: models, categories, extraction, and local storage."""

from .categories import CATEGORY_DEFINITIONS, category_for_activity
from .extractor import EntryExtractor
from .models import Category, Period, TimeEntry
from .store import EntryStore

__all__ = [
    "CATEGORY_DEFINITIONS",
    "Category",
    "EntryExtractor",
    "EntryStore",
    "Period",
    "TimeEntry",
    "category_for_activity",
]
