"""Explicit update structures for user-editable records.

Each patch enumerates only the fields a client may change. ``None`` means
"leave unchanged"; ownership and bookkeeping columns are never patchable.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class _Patch:
    def changes(self) -> dict[str, Any]:
        """Return the fields set on this patch."""

        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }

    def apply_to(self, record: Any) -> Any:
        """Copy the set fields onto ``record`` in place and return it."""

        for name, value in self.changes().items():
            setattr(record, name, value)
        return record

    def is_empty(self) -> bool:
        return not self.changes()


@dataclass(frozen=True, slots=True)
class TransactionPatch(_Patch):
    amount: Optional[Decimal] = None
    type: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[date] = None
    notes: Optional[str] = None

    def changes(self) -> dict[str, Any]:
        changes = _Patch.changes(self)
        # Blank notes clear the field.
        if changes.get("notes") == "":
            changes["notes"] = None
        return changes


@dataclass(frozen=True, slots=True)
class SavingsGoalPatch(_Patch):
    title: Optional[str] = None
    icon: Optional[str] = None
    current_amount: Optional[Decimal] = None
    target_amount: Optional[Decimal] = None
    target_date: Optional[date] = None
