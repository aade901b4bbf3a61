"""Dashboard aggregation routes.

Every response is computed from the signed-in user's rows at request time;
nothing is cached between requests.
"""

from __future__ import annotations

from datetime import date

from flask import jsonify, request

from ...context import get_context
from ...errors import ValidationFailed
from ...logging_config import get_logger
from ...services.aggregation import (
    DEFAULT_MONTH_COUNT,
    build_dashboard,
    category_breakdown,
    monthly_series,
    quarterly_series,
)
from ...services.serialization import dashboard_to_dict
from ..auth.guards import current_user_id, login_required
from . import bp

logger = get_logger(__name__)

TIMEFRAMES = ("monthly", "yearly")
MAX_MONTHS = 24


def _int_arg(name: str, default: int, *, minimum: int, maximum: int) -> int:
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationFailed({name: ["Must be a whole number."]}) from None
    if not minimum <= value <= maximum:
        raise ValidationFailed({name: [f"Must be between {minimum} and {maximum}."]})
    return value


@bp.get("")
@login_required
def dashboard():
    """Summary figures, recent activity and goals for the signed-in user."""

    ctx = get_context()
    user_id = current_user_id()
    today = date.today()
    transactions = ctx.transactions.list_for_user(user_id)
    goals = ctx.savings_goals.list_for_user(user_id)

    payload = build_dashboard(
        transactions,
        goals,
        today=today,
        recent_limit=ctx.config.RECENT_TRANSACTIONS_LIMIT,
    )
    logger.debug(
        "Dashboard computed",
        extra={"user_id": user_id, "transactions": len(transactions), "goals": len(goals)},
    )
    return jsonify(dashboard_to_dict(payload, now=today))


@bp.get("/category-breakdown")
@login_required
def category_totals():
    rows = get_context().transactions.list_for_user(current_user_id())
    return jsonify([entry.to_dict() for entry in category_breakdown(rows)])


@bp.get("/series")
@login_required
def series():
    """Income/expense buckets, monthly (trailing months) or yearly (by quarter)."""

    timeframe = (request.args.get("timeframe") or "monthly").strip().lower()
    if timeframe not in TIMEFRAMES:
        raise ValidationFailed({"timeframe": [f"Choose one of: {', '.join(TIMEFRAMES)}."]})

    rows = get_context().transactions.list_for_user(current_user_id())
    today = date.today()
    if timeframe == "monthly":
        months = _int_arg("months", DEFAULT_MONTH_COUNT, minimum=1, maximum=MAX_MONTHS)
        buckets = monthly_series(rows, months, now=today)
    else:
        year = _int_arg("year", today.year, minimum=1, maximum=9999)
        buckets = quarterly_series(rows, year)
    return jsonify({"timeframe": timeframe, "buckets": [bucket.to_dict() for bucket in buckets]})
