"""Category definitions and the activity-to-category table."""

from dataclasses import dataclass

from .models import Category


@dataclass(frozen=True)
class CategoryDefinition:
    """Display and classification data for one category."""

    label: str
    description: str
    activities: tuple[str, ...]


CATEGORY_DEFINITIONS: dict[Category, CategoryDefinition] = {
    Category.PRODUCTION: CategoryDefinition(
        label="生产 (Production)",
        description="创造价值",
        activities=(
            "沟通", "管理", "输出", "总结", "目标", "吉他", "家庭", "助人",
            "分享", "商业", "写作", "组织", "执行", "创新", "规划",
        ),
    ),
    Category.INVESTMENT: CategoryDefinition(
        label="投资 (Investment)",
        description="让生命有更多质量",
        activities=(
            "健康", "旅行", "人脉", "交易", "运动", "冥想", "阅读", "恋爱",
            "学习", "朋友", "播客", "健身",
        ),
    ),
    Category.EXPENSE: CategoryDefinition(
        label="支出 (Expense)",
        description="为了维持生命需要付出的",
        activities=(
            "休息", "睡觉", "吃饭", "购物", "娱乐", "社交", "视频", "游戏",
            "通勤", "杂事", "情绪", "无意识",
        ),
    ),
}

ACTIVITY_TO_CATEGORY: dict[str, Category] = {
    activity: category
    for category, definition in CATEGORY_DEFINITIONS.items()
    for activity in definition.activities
}

ALL_ACTIVITIES: tuple[str, ...] = tuple(ACTIVITY_TO_CATEGORY)


def category_for_activity(activity: str) -> Category:
    """Return the category of a standard activity, EXPENSE if unknown."""
    return ACTIVITY_TO_CATEGORY.get(activity, Category.EXPENSE)


def category_context() -> str:
    """Render the category table for inclusion in LLM prompts."""
    lines = ["We classify time into three categories based on these specific activities:"]
    for category, definition in CATEGORY_DEFINITIONS.items():
        lines.append(
            f"- {category.value} ({definition.description}): {', '.join(definition.activities)}"
        )
    return "\n".join(lines)
