"""Default category catalogue and seeding."""

from __future__ import annotations

from ..domain.repositories import CategoryRepository
from ..logging_config import get_logger
from ..models.category import Category

logger = get_logger(__name__)

# (name, icon, color, type)
DEFAULT_CATEGORIES: tuple[tuple[str, str, str, str], ...] = (
    ("Housing", "ri-home-4-line", "#a78bfa", "expense"),
    ("Food", "ri-shopping-basket-2-line", "#3b82f6", "expense"),
    ("Transportation", "ri-car-line", "#f59e0b", "expense"),
    ("Entertainment", "ri-film-line", "#10b981", "expense"),
    ("Utilities", "ri-lightbulb-line", "#6366f1", "expense"),
    ("Health", "ri-heart-pulse-line", "#ec4899", "expense"),
    ("Education", "ri-book-open-line", "#8b5cf6", "expense"),
    ("Other", "ri-more-line", "#ef4444", "expense"),
    ("Salary", "ri-bank-line", "#10b981", "income"),
    ("Bonus", "ri-money-dollar-circle-line", "#3b82f6", "income"),
    ("Investments", "ri-stock-line", "#6366f1", "income"),
    ("Gifts", "ri-gift-line", "#ec4899", "income"),
)


def ensure_default_categories(repository: CategoryRepository) -> int:
    """Seed the default catalogue when no categories exist; return rows created."""

    if repository.list_all():
        return 0

    for name, icon, color, category_type in DEFAULT_CATEGORIES:
        repository.create(
            Category(name=name, icon=icon, color=color, is_default=True, type=category_type)
        )
    logger.info("Seeded default categories", extra={"count": len(DEFAULT_CATEGORIES)})
    return len(DEFAULT_CATEGORIES)
