"""Tests for the category table."""

from lifestream.entries.categories import (
    ACTIVITY_TO_CATEGORY,
    ALL_ACTIVITIES,
    CATEGORY_DEFINITIONS,
    category_context,
    category_for_activity,
)
from lifestream.entries.models import Category


def test_every_category_defined():
    assert set(CATEGORY_DEFINITIONS) == set(Category)


def test_known_activities():
    assert category_for_activity("学习") is Category.INVESTMENT
    assert category_for_activity("写作") is Category.PRODUCTION
    assert category_for_activity("睡觉") is Category.EXPENSE


def test_unknown_activity_is_expense():
    assert category_for_activity("发呆") is Category.EXPENSE


def test_activities_unique():
    assert len(ALL_ACTIVITIES) == len(ACTIVITY_TO_CATEGORY)
    assert len(ALL_ACTIVITIES) == sum(len(d.activities) for d in CATEGORY_DEFINITIONS.values())


def test_context_lists_all_categories():
    context = category_context()
    for category, definition in CATEGORY_DEFINITIONS.items():
        assert category.value in context
        assert definition.description in context
    assert "冥想" in context
