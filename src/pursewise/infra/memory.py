"""In-memory repository implementations.

Each :class:`MemoryStore` owns ordered maps keyed by id plus incrementing id
counters. A store lives on the application context, so separate apps (and
separate tests) never share records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from itertools import count
from typing import Any, Iterator, Optional, TypeVar

from ..domain.patches import SavingsGoalPatch, TransactionPatch
from ..errors import ValidationFailed
from ..models import Category, LinkedItem, SavingsGoal, Transaction, User

RecordT = TypeVar("RecordT")


def _clone(record: RecordT) -> RecordT:
    """Return a detached copy so callers cannot mutate stored rows."""

    return type(record)(**record.model_dump())  # type: ignore[attr-defined]


@dataclass
class _Table:
    rows: dict[int, Any] = field(default_factory=dict)
    ids: Iterator[int] = field(default_factory=lambda: count(1))

    def insert(self, record: Any) -> Any:
        record.id = next(self.ids)
        self.rows[record.id] = _clone(record)
        return record

    def get(self, record_id: int) -> Optional[Any]:
        row = self.rows.get(record_id)
        return _clone(row) if row is not None else None

    def values(self) -> list[Any]:
        return [_clone(row) for row in self.rows.values()]


@dataclass
class MemoryStore:
    """Per-application container for the in-memory tables."""

    users: _Table = field(default_factory=_Table)
    transactions: _Table = field(default_factory=_Table)
    savings_goals: _Table = field(default_factory=_Table)
    categories: _Table = field(default_factory=_Table)
    linked_items: _Table = field(default_factory=_Table)


class MemoryTransactionRepository:
    def __init__(self, store: MemoryStore):
        self.table = store.transactions

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        return self.table.get(transaction_id)

    def list_for_user(
        self,
        user_id: int,
        *,
        txn_type: Optional[str] = None,
        category: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        rows = [
            row
            for row in self.table.values()
            if row.user_id == user_id
            and (not txn_type or row.type == txn_type)
            and (not category or row.category == category)
            and (start_date is None or row.date >= start_date)
            and (end_date is None or row.date <= end_date)
        ]
        # Same ordering as the SQL backend: date desc, then id desc.
        return sorted(rows, key=lambda row: (row.date, row.id), reverse=True)

    def create(self, transaction: Transaction) -> Transaction:
        return self.table.insert(transaction)

    def update(self, transaction_id: int, patch: TransactionPatch) -> Optional[Transaction]:
        stored = self.table.rows.get(transaction_id)
        if stored is None:
            return None
        patch.apply_to(stored)
        return _clone(stored)

    def delete(self, transaction_id: int) -> bool:
        return self.table.rows.pop(transaction_id, None) is not None

    def external_ids(self, user_id: int) -> set[str]:
        return {
            row.external_id
            for row in self.table.rows.values()
            if row.user_id == user_id and row.external_id
        }


class MemorySavingsGoalRepository:
    def __init__(self, store: MemoryStore):
        self.table = store.savings_goals

    def get_by_id(self, goal_id: int) -> Optional[SavingsGoal]:
        return self.table.get(goal_id)

    def list_for_user(self, user_id: int) -> list[SavingsGoal]:
        return [row for row in self.table.values() if row.user_id == user_id]

    def create(self, goal: SavingsGoal) -> SavingsGoal:
        return self.table.insert(goal)

    def update(self, goal_id: int, patch: SavingsGoalPatch) -> Optional[SavingsGoal]:
        stored = self.table.rows.get(goal_id)
        if stored is None:
            return None
        patch.apply_to(stored)
        return _clone(stored)

    def delete(self, goal_id: int) -> bool:
        return self.table.rows.pop(goal_id, None) is not None


class MemoryCategoryRepository:
    def __init__(self, store: MemoryStore):
        self.table = store.categories

    def get_by_id(self, category_id: int) -> Optional[Category]:
        return self.table.get(category_id)

    def list_all(self) -> list[Category]:
        return self.table.values()

    def list_by_type(self, category_type: str) -> list[Category]:
        return [row for row in self.table.values() if row.type == category_type]

    def create(self, category: Category) -> Category:
        return self.table.insert(category)


class MemoryUserRepository:
    def __init__(self, store: MemoryStore):
        self.table = store.users

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.table.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        for row in self.table.rows.values():
            if row.username == username:
                return _clone(row)
        return None

    def create(self, user: User) -> User:
        if self.get_by_username(user.username) is not None:
            raise ValidationFailed({"username": ["Username already exists."]})
        return self.table.insert(user)


class MemoryLinkedItemRepository:
    def __init__(self, store: MemoryStore):
        self.table = store.linked_items

    def _find(self, item_id: str) -> Optional[LinkedItem]:
        for row in self.table.rows.values():
            if row.item_id == item_id:
                return row
        return None

    def get_by_item_id(self, item_id: str) -> Optional[LinkedItem]:
        row = self._find(item_id)
        return _clone(row) if row is not None else None

    def list_for_user(self, user_id: int) -> list[LinkedItem]:
        return [row for row in self.table.values() if row.user_id == user_id]

    def save(self, item: LinkedItem) -> LinkedItem:
        existing = self._find(item.item_id)
        if existing is None:
            return self.table.insert(item)
        existing.access_token = item.access_token
        existing.user_id = item.user_id
        return _clone(existing)

    def mark_synced(self, item_id: str, synced_at: datetime) -> None:
        existing = self._find(item_id)
        if existing is not None:
            existing.last_synced_at = synced_at
