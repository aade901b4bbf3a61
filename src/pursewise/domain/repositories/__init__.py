"""Repository protocol definitions for domain layer."""

from .category import CategoryRepository
from .linked_item import LinkedItemRepository
from .savings_goal import SavingsGoalRepository
from .transaction import TransactionRepository
from .user import UserRepository

__all__ = [
    "CategoryRepository",
    "LinkedItemRepository",
    "SavingsGoalRepository",
    "TransactionRepository",
    "UserRepository",
]
