"""Concrete repository implementations using SQLModel."""

from .category import SQLModelCategoryRepository
from .linked_item import SQLModelLinkedItemRepository
from .savings_goal import SQLModelSavingsGoalRepository
from .transaction import SQLModelTransactionRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelCategoryRepository",
    "SQLModelLinkedItemRepository",
    "SQLModelSavingsGoalRepository",
    "SQLModelTransactionRepository",
    "SQLModelUserRepository",
]
