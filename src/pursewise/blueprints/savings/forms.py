"""Savings goal payload validation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ...domain.patches import SavingsGoalPatch
from ...errors import ValidationFailed
from ...models.savings_goal import SavingsGoal
from ..validation import as_text, parse_amount, parse_iso_date

# JSON key -> attribute name
FIELDS = {
    "title": "title",
    "icon": "icon",
    "currentAmount": "current_amount",
    "targetAmount": "target_amount",
    "targetDate": "target_date",
}
LABELS = {
    "title": "Title",
    "icon": "Icon",
    "currentAmount": "Current amount",
    "targetAmount": "Target amount",
    "targetDate": "Target date",
}
IGNORED = ("userId", "user_id", "id", "createdAt")


@dataclass(slots=True)
class SavingsGoalForm:
    """Validates a create (full) or update (partial) savings goal payload."""

    partial: bool = False
    title: Optional[str] = None
    icon: Optional[str] = None
    current_amount: Optional[Decimal] = None
    target_amount: Optional[Decimal] = None
    target_date: Optional[date] = None
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, str] = field(default_factory=dict, init=False)
    unknown: list[str] = field(default_factory=list, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, partial: bool = False) -> SavingsGoalForm:
        form = cls(partial=partial)
        form.load(data)
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        self.raw_data = {key: as_text(data[key]) for key in FIELDS if key in data}
        self.unknown = sorted(key for key in data if key not in FIELDS and key not in IGNORED)

    def validate(self) -> bool:
        self.errors.clear()
        for key in self.unknown:
            self._add_error(key, "Field cannot be set.")

        for key in FIELDS:
            supplied = key in self.raw_data
            value = self.raw_data.get(key, "")
            if not value:
                if supplied or not self.partial:
                    self._add_error(key, f"{LABELS[key]} is required.")
                continue
            self._parse(key, value)

        return not self.errors

    def _parse(self, key: str, value: str) -> None:
        if key in ("title", "icon"):
            limit = 128 if key == "title" else 64
            if len(value) > limit:
                self._add_error(key, f"{LABELS[key]} is too long.")
            else:
                setattr(self, FIELDS[key], value)
        elif key in ("currentAmount", "targetAmount"):
            try:
                amount = parse_amount(value)
            except ValueError:
                self._add_error(key, "Invalid amount format")
                return
            if key == "targetAmount" and amount <= 0:
                self._add_error(key, "Target amount must be greater than zero.")
                return
            setattr(self, FIELDS[key], amount)
        else:
            try:
                self.target_date = parse_iso_date(value)
            except ValueError:
                self._add_error(key, "Enter a valid date (YYYY-MM-DD).")

    def raise_for_errors(self) -> None:
        if not self.validate():
            raise ValidationFailed(self.errors)

    def to_record(self, *, user_id: int) -> SavingsGoal:
        return SavingsGoal(
            user_id=user_id,
            title=self.title,
            icon=self.icon,
            current_amount=self.current_amount,
            target_amount=self.target_amount,
            target_date=self.target_date,
        )

    def to_patch(self) -> SavingsGoalPatch:
        return SavingsGoalPatch(
            title=self.title,
            icon=self.icon,
            current_amount=self.current_amount,
            target_amount=self.target_amount,
            target_date=self.target_date,
        )

    def _add_error(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)
