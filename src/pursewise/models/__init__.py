"""SQLModel table exports."""

from .category import Category
from .linked_item import LinkedItem
from .savings_goal import SavingsGoal
from .transaction import TRANSACTION_TYPES, Transaction
from .user import User

__all__ = [
    "Category",
    "LinkedItem",
    "SavingsGoal",
    "TRANSACTION_TYPES",
    "Transaction",
    "User",
]
