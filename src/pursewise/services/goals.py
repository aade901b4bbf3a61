"""Savings goal progress calculations."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from .aggregation import ZERO, round_half_up, to_amount


def progress_percent(current: Any, target: Any) -> int:
    """Whole-number percentage of ``target`` reached by ``current``.

    Values above 100 are returned as-is; display layers cap them. A zero or
    negative target reports 0 because there is nothing meaningful to measure.
    """

    target_amount = to_amount(target)
    if target_amount <= ZERO:
        return 0
    return round_half_up(to_amount(current) / target_amount * 100)


def months_elapsed(created_at: date | datetime, now: date | datetime) -> int:
    """Calendar months between two dates, floored at 1."""

    months = (now.year - created_at.year) * 12 + (now.month - created_at.month)
    return max(1, months)


def monthly_average(goal: Any, now: date | datetime) -> Decimal:
    """Average amount saved per month since the goal was created."""

    return to_amount(goal.current_amount) / months_elapsed(goal.created_at, now)


def remaining_amount(goal: Any) -> Decimal:
    """Amount still to save; negative once the target is exceeded."""

    return to_amount(goal.target_amount) - to_amount(goal.current_amount)


def goal_overview(goal: Any, now: date | datetime) -> dict[str, object]:
    """Progress figures rendered next to each goal."""

    return {
        "progress": progress_percent(goal.current_amount, goal.target_amount),
        "remaining": float(remaining_amount(goal)),
        "monthlyAverage": float(monthly_average(goal, now).quantize(Decimal("0.01"))),
    }
