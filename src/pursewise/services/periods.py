"""Calendar helpers shared by dashboard aggregation and transaction filters."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime


def coerce_date(value: date | datetime | str) -> date:
    """Return a calendar date from a date, datetime, or ISO string."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) > 10:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def shift_months(day: date, months: int) -> date:
    """Move ``day`` by ``months`` calendar months, clamping to the month length."""

    index = day.year * 12 + (day.month - 1) + months
    year, month_zero = divmod(index, 12)
    month = month_zero + 1
    return date(year, month, min(day.day, monthrange(year, month)[1]))


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``day``."""

    last_day = monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the preceding calendar month."""

    if month == 1:
        return year - 1, 12
    return year, month - 1


def quarter_of(day: date) -> int:
    """Zero-based quarter index (0..3) for ``day``."""

    return (day.month - 1) // 3
