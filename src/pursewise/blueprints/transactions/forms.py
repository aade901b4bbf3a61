"""Transaction payload validation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ...domain.patches import TransactionPatch
from ...errors import ValidationFailed
from ...models.transaction import TRANSACTION_TYPES, Transaction
from ..validation import as_text, parse_amount, parse_iso_date

# JSON key -> attribute name
FIELDS = {
    "amount": "amount",
    "type": "type",
    "description": "description",
    "category": "category",
    "date": "date",
    "notes": "notes",
}
REQUIRED = ("amount", "type", "description", "category", "date")
# Accepted but ignored: ownership is taken from the session.
IGNORED = ("userId", "user_id", "id", "createdAt")


@dataclass(slots=True)
class TransactionForm:
    """Validates a create (full) or update (partial) transaction payload."""

    partial: bool = False
    amount: Optional[Decimal] = None
    type: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[date] = None
    notes: Optional[str] = None
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, str] = field(default_factory=dict, init=False)
    unknown: list[str] = field(default_factory=list, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, partial: bool = False) -> TransactionForm:
        form = cls(partial=partial)
        form.load(data)
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming JSON values as trimmed strings."""

        self.raw_data = {key: as_text(data[key]) for key in FIELDS if key in data}
        self.unknown = sorted(key for key in data if key not in FIELDS and key not in IGNORED)

    def validate(self) -> bool:
        """Validate supplied fields and populate typed attributes."""

        self.errors.clear()
        for key in self.unknown:
            self._add_error(key, "Field cannot be set.")

        if not self.partial:
            for key in REQUIRED:
                if not self.raw_data.get(key):
                    self._add_error(key, f"{key.capitalize()} is required.")

        if "amount" in self.raw_data and self.raw_data["amount"]:
            try:
                self.amount = parse_amount(self.raw_data["amount"])
            except ValueError:
                self._add_error("amount", "Invalid amount format")
        elif self.partial and "amount" in self.raw_data:
            self._add_error("amount", "Amount is required.")

        if "type" in self.raw_data:
            value = self.raw_data["type"].lower()
            if value in TRANSACTION_TYPES:
                self.type = value
            elif value or self.partial:
                self._add_error("type", "Type must be 'income' or 'expense'.")

        for key in ("description", "category"):
            if key in self.raw_data:
                value = self.raw_data[key]
                if value and len(value) > (255 if key == "description" else 64):
                    self._add_error(key, f"{key.capitalize()} is too long.")
                elif value:
                    setattr(self, key, value)
                elif self.partial:
                    self._add_error(key, f"{key.capitalize()} is required.")

        if "date" in self.raw_data and self.raw_data["date"]:
            try:
                self.date = parse_iso_date(self.raw_data["date"])
            except ValueError:
                self._add_error("date", "Enter a valid date (YYYY-MM-DD).")
        elif self.partial and "date" in self.raw_data:
            self._add_error("date", "Date is required.")

        if "notes" in self.raw_data:
            self.notes = self.raw_data["notes"]

        return not self.errors

    def raise_for_errors(self) -> None:
        if not self.validate():
            raise ValidationFailed(self.errors)

    def to_record(self, *, user_id: int) -> Transaction:
        return Transaction(
            user_id=user_id,
            amount=self.amount,
            type=self.type,
            description=self.description,
            category=self.category,
            date=self.date,
            notes=self.notes or None,
        )

    def to_patch(self) -> TransactionPatch:
        return TransactionPatch(
            amount=self.amount,
            type=self.type,
            description=self.description,
            category=self.category,
            date=self.date,
            notes=self.notes,
        )

    def _add_error(self, field_name: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field_name, []).append(message)
