"""In-memory filtering for the transaction list view."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping

from ..errors import ValidationFailed
from .periods import coerce_date, shift_months

TYPE_CHOICES = ("all", "income", "expense")
DATE_RANGE_CHOICES = ("all", "this-month", "last-month", "3-months", "6-months", "year")


@dataclass(frozen=True, slots=True)
class TransactionFilters:
    """Filters applied to transaction listings."""

    type: str = "all"
    category: str = "all"
    date_range: str = "all"
    search: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TransactionFilters:
        """Parse request query arguments, rejecting unknown choices."""

        errors: dict[str, list[str]] = {}
        txn_type = (data.get("type") or "all").strip().lower()
        if txn_type not in TYPE_CHOICES:
            errors.setdefault("type", []).append(f"Type must be one of {', '.join(TYPE_CHOICES)}.")
        date_range = (data.get("range") or data.get("dateRange") or "all").strip().lower()
        if date_range not in DATE_RANGE_CHOICES:
            errors.setdefault("range", []).append(
                f"Range must be one of {', '.join(DATE_RANGE_CHOICES)}."
            )
        if errors:
            raise ValidationFailed(errors)

        return cls(
            type=txn_type,
            category=(data.get("category") or "all").strip() or "all",
            date_range=date_range,
            search=(data.get("search") or data.get("q") or "").strip(),
        )

    def matches(self, txn: Any, *, today: date) -> bool:
        if self.type != "all" and txn.type != self.type:
            return False
        if self.category != "all" and txn.category != self.category:
            return False
        if self.search and self.search.lower() not in (txn.description or "").lower():
            return False
        return _in_range(coerce_date(txn.date), self.date_range, today)


def _in_range(day: date, date_range: str, today: date) -> bool:
    if date_range == "this-month":
        return (day.year, day.month) == (today.year, today.month)
    if date_range == "last-month":
        last = shift_months(today, -1)
        return (day.year, day.month) == (last.year, last.month)
    if date_range == "3-months":
        return day >= shift_months(today, -3)
    if date_range == "6-months":
        return day >= shift_months(today, -6)
    if date_range == "year":
        return day.year == today.year
    return True


def apply_filters(
    transactions: Iterable[Any], filters: TransactionFilters, *, today: date
) -> list[Any]:
    """Return the transactions matching ``filters`` in their original order."""

    return [txn for txn in transactions if filters.matches(txn, today=today)]
