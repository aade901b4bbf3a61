"""Dashboard aggregation engine.

Pure functions turning a user's already-loaded transactions and savings goals
into summary figures, category breakdowns and time-bucketed series. Nothing
here performs I/O or keeps state between calls; inputs are never mutated.

Transactions are any objects exposing ``amount``, ``type``, ``category`` and
``date``. Amounts are summed as :class:`~decimal.Decimal`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Iterable, Optional, Sequence

from .periods import coerce_date, month_bounds, previous_month, quarter_of, shift_months

ZERO = Decimal("0")
INCOME = "income"
EXPENSE = "expense"

# Zero-baseline policy: a period compared against an empty previous period
# reports a full increase rather than an undefined ratio.
ZERO_BASELINE_CHANGE = 100

DEFAULT_RECENT_LIMIT = 5
DEFAULT_MONTH_COUNT = 6

CATEGORY_COLORS: dict[str, str] = {
    "Housing": "#a78bfa",
    "Food": "#3b82f6",
    "Transportation": "#f59e0b",
    "Entertainment": "#10b981",
    "Utilities": "#6366f1",
    "Health": "#ec4899",
    "Education": "#8b5cf6",
    "Other": "#ef4444",
}
FALLBACK_CATEGORY_COLOR = "#6b7280"

QUARTER_LABELS = ("Q1", "Q2", "Q3", "Q4")


def to_amount(value: Any) -> Decimal:
    """Coerce a stored amount (Decimal, str, int, float) to Decimal."""

    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves toward positive infinity."""

    return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def _totals(transactions: Iterable[Any]) -> tuple[Decimal, Decimal]:
    income = ZERO
    expense = ZERO
    for txn in transactions:
        if txn.type == INCOME:
            income += to_amount(txn.amount)
        elif txn.type == EXPENSE:
            expense += to_amount(txn.amount)
    return income, expense


@dataclass(frozen=True, slots=True)
class SummaryTotals:
    """All-time income, expense and net balance."""

    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO
    net_balance: Decimal = ZERO


@dataclass(frozen=True, slots=True)
class MonthOverMonth:
    """Current vs previous calendar month totals and their percent change."""

    current_income: Decimal
    current_expenses: Decimal
    previous_income: Decimal
    previous_expenses: Decimal
    income_change: int
    expense_change: int


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    category: str
    amount: Decimal
    color: str

    def to_dict(self) -> dict[str, object]:
        return {"category": self.category, "amount": float(self.amount), "color": self.color}


@dataclass(frozen=True, slots=True)
class SeriesBucket:
    label: str
    income: Decimal = ZERO
    expense: Decimal = ZERO

    def to_dict(self) -> dict[str, object]:
        return {"label": self.label, "income": float(self.income), "expense": float(self.expense)}


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal
    savings_rate: int
    income_change: int
    expense_change: int

    def to_dict(self) -> dict[str, object]:
        return {
            "totalIncome": float(self.total_income),
            "totalExpenses": float(self.total_expenses),
            "netBalance": float(self.net_balance),
            "savingsRate": self.savings_rate,
            "incomeChange": self.income_change,
            "expenseChange": self.expense_change,
        }


@dataclass(frozen=True, slots=True)
class DashboardPayload:
    """Everything the dashboard view needs, computed in one pass per request."""

    summary: DashboardSummary
    recent_transactions: list[Any] = field(default_factory=list)
    savings_goals: list[Any] = field(default_factory=list)
    transactions: list[Any] = field(default_factory=list)


def compute_summary(transactions: Iterable[Any]) -> SummaryTotals:
    """Sum amounts by type across the full input set."""

    income, expense = _totals(transactions)
    return SummaryTotals(total_income=income, total_expenses=expense, net_balance=income - expense)


def percent_change(current: Decimal, previous: Decimal) -> int:
    """Whole-number percent change from ``previous`` to ``current``."""

    if previous == ZERO:
        return ZERO_BASELINE_CHANGE
    return round_half_up((current - previous) / previous * 100)


def compute_month_over_month(transactions: Iterable[Any], reference_date: date) -> MonthOverMonth:
    """Compare the reference date's calendar month with the one before it."""

    current_key = (reference_date.year, reference_date.month)
    previous_key = previous_month(*current_key)

    current: list[Any] = []
    previous: list[Any] = []
    for txn in transactions:
        day = coerce_date(txn.date)
        key = (day.year, day.month)
        if key == current_key:
            current.append(txn)
        elif key == previous_key:
            previous.append(txn)

    current_income, current_expenses = _totals(current)
    previous_income, previous_expenses = _totals(previous)
    return MonthOverMonth(
        current_income=current_income,
        current_expenses=current_expenses,
        previous_income=previous_income,
        previous_expenses=previous_expenses,
        income_change=percent_change(current_income, previous_income),
        expense_change=percent_change(current_expenses, previous_expenses),
    )


def compute_savings_rate(total_income: Decimal, total_expenses: Decimal) -> int:
    """Percentage of income retained after expenses; negative when overspent."""

    if total_income == ZERO:
        return 0
    return round_half_up((total_income - total_expenses) / total_income * 100)


def recent_transactions(transactions: Iterable[Any], n: int = DEFAULT_RECENT_LIMIT) -> list[Any]:
    """Return the ``n`` newest transactions by date.

    The sort is stable, so same-day entries keep their input order.
    """

    if n <= 0:
        return []
    ordered = sorted(list(transactions), key=lambda txn: coerce_date(txn.date), reverse=True)
    return ordered[:n]


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, FALLBACK_CATEGORY_COLOR)


def category_breakdown(transactions: Iterable[Any]) -> list[CategoryTotal]:
    """Per-category expense totals, largest first; ties keep first-seen order."""

    totals: dict[str, Decimal] = {}
    for txn in transactions:
        if txn.type != EXPENSE:
            continue
        totals[txn.category] = totals.get(txn.category, ZERO) + to_amount(txn.amount)

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryTotal(category=name, amount=amount, color=category_color(name))
        for name, amount in ranked
    ]


def monthly_series(
    transactions: Iterable[Any],
    month_count: int = DEFAULT_MONTH_COUNT,
    now: Optional[date] = None,
) -> list[SeriesBucket]:
    """Income/expense totals for the trailing ``month_count`` months, oldest first."""

    today = now or date.today()
    dated = [(coerce_date(txn.date), txn) for txn in transactions]

    buckets: list[SeriesBucket] = []
    for offset in range(month_count - 1, -1, -1):
        month_start, month_end = month_bounds(shift_months(today, -offset))
        income, expense = _totals(
            txn for day, txn in dated if month_start <= day <= month_end
        )
        buckets.append(SeriesBucket(label=month_start.strftime("%b"), income=income, expense=expense))
    return buckets


def quarterly_series(transactions: Iterable[Any], year: Optional[int] = None) -> list[SeriesBucket]:
    """Income/expense totals per calendar quarter of ``year``."""

    target_year = year if year is not None else date.today().year
    grouped: list[list[Any]] = [[], [], [], []]
    for txn in transactions:
        day = coerce_date(txn.date)
        if day.year == target_year:
            grouped[quarter_of(day)].append(txn)

    buckets = []
    for label, members in zip(QUARTER_LABELS, grouped):
        income, expense = _totals(members)
        buckets.append(SeriesBucket(label=label, income=income, expense=expense))
    return buckets


def build_dashboard(
    transactions: Sequence[Any],
    goals: Sequence[Any],
    *,
    today: date,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> DashboardPayload:
    """Assemble the full dashboard payload for one user."""

    totals = compute_summary(transactions)
    month_over_month = compute_month_over_month(transactions, today)
    summary = DashboardSummary(
        total_income=totals.total_income,
        total_expenses=totals.total_expenses,
        net_balance=totals.net_balance,
        savings_rate=compute_savings_rate(totals.total_income, totals.total_expenses),
        income_change=month_over_month.income_change,
        expense_change=month_over_month.expense_change,
    )
    return DashboardPayload(
        summary=summary,
        recent_transactions=recent_transactions(transactions, recent_limit),
        savings_goals=list(goals),
        transactions=list(transactions),
    )
