"""JSON-ready representations of records and dashboard payloads.

Dates are ISO calendar-date strings; stored amounts are two-decimal strings.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ..models import Category, LinkedItem, SavingsGoal, Transaction, User
from .aggregation import DashboardPayload, to_amount
from .goals import goal_overview
from .periods import coerce_date

_CENTS = Decimal("0.01")


def format_amount(value: Any) -> str:
    return format(to_amount(value).quantize(_CENTS), "f")


def _timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    return {
        "id": txn.id,
        "userId": txn.user_id,
        "amount": format_amount(txn.amount),
        "type": txn.type,
        "description": txn.description,
        "category": txn.category,
        "date": coerce_date(txn.date).isoformat(),
        "notes": txn.notes,
        "externalId": txn.external_id,
        "createdAt": _timestamp(txn.created_at),
    }


def savings_goal_to_dict(goal: SavingsGoal, *, now: Optional[date] = None) -> dict[str, Any]:
    payload = {
        "id": goal.id,
        "userId": goal.user_id,
        "title": goal.title,
        "icon": goal.icon,
        "currentAmount": format_amount(goal.current_amount),
        "targetAmount": format_amount(goal.target_amount),
        "targetDate": coerce_date(goal.target_date).isoformat(),
        "createdAt": _timestamp(goal.created_at),
    }
    if now is not None:
        payload.update(goal_overview(goal, now))
    return payload


def category_to_dict(category: Category) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "icon": category.icon,
        "color": category.color,
        "isDefault": category.is_default,
        "type": category.type,
    }


def user_to_dict(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "name": user.name,
        "email": user.email,
        "avatar": user.avatar,
    }


def linked_item_to_dict(item: LinkedItem) -> dict[str, Any]:
    """Expose a linked item without its access token."""

    return {
        "id": item.id,
        "itemId": item.item_id,
        "createdAt": _timestamp(item.created_at),
        "lastSyncedAt": _timestamp(item.last_synced_at),
    }


def dashboard_to_dict(payload: DashboardPayload, *, now: date) -> dict[str, Any]:
    return {
        "summary": payload.summary.to_dict(),
        "recentTransactions": [transaction_to_dict(txn) for txn in payload.recent_transactions],
        "savingsGoals": [savings_goal_to_dict(goal, now=now) for goal in payload.savings_goals],
        "transactions": [transaction_to_dict(txn) for txn in payload.transactions],
    }
