"""
Expense Aggregations

DESIGN DECISION: Everything here is read-only and deterministic.
These functions only ever see expenses handed to them by a repository;
the dashboard, reports page and AI prompts all consume their output.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field

from spendwise.models import Expense


ZERO = Decimal("0.00")

PERIOD_DAYS = {"7d": 7, "30d": 30, "90d": 90}


class ReportError(ValueError):
    """Unknown period or comparison requested."""
    pass


# =============================================================================
# RESULT MODELS
# =============================================================================

class CategoryTotal(BaseModel):
    category: str
    amount: Decimal


class DailyTotal(BaseModel):
    day: date
    amount: Decimal


class SpendingTrends(BaseModel):
    """Headline numbers and the daily series for the trends chart."""

    total: Decimal = ZERO
    average_daily: Decimal = Field(default=ZERO, description="Per day with spending")
    average_monthly: Decimal = Field(default=ZERO, description="Per month with spending")
    highest_day: Optional[DailyTotal] = None
    daily: list[DailyTotal] = Field(default_factory=list)


class CategoryComparison(BaseModel):
    category: str
    current: Decimal
    comparison: Decimal


class PeriodComparison(BaseModel):
    """Current period against the period before it."""

    current_label: str
    comparison_label: str
    current_start: date
    current_end: date
    comparison_start: date
    comparison_end: date
    current_total: Decimal
    comparison_total: Decimal
    difference: Decimal
    percentage_change: float
    categories: list[CategoryComparison] = Field(default_factory=list)


# =============================================================================
# FILTERS
# =============================================================================

def sort_newest_first(expenses: Iterable[Expense]) -> list[Expense]:
    return sorted(expenses, key=lambda e: e.date, reverse=True)


def filter_expenses(
    expenses: list[Expense],
    period: str = "all",
    search: str = "",
    categories: Optional[list[str]] = None,
    today: Optional[date] = None,
) -> list[Expense]:
    """
    Dashboard filter.

    Args:
        expenses: Expenses to filter
        period: 7d, 30d, 90d or all; the cutoff day itself is included
        search: Case-insensitive substring of the name
        categories: Keep only these categories (empty or None keeps all)
        today: Reference day for the period cutoff

    Returns:
        Matching expenses, newest first
    """
    today = today or date.today()

    if period != "all":
        if period not in PERIOD_DAYS:
            raise ReportError(f"Unknown period: {period}")
        cutoff = today - timedelta(days=PERIOD_DAYS[period])
        expenses = [e for e in expenses if e.date >= cutoff]

    needle = search.strip().lower()
    if needle:
        expenses = [e for e in expenses if needle in e.name.lower()]

    if categories:
        wanted = set(categories)
        expenses = [e for e in expenses if e.category in wanted]

    return sort_newest_first(expenses)


def expenses_between(expenses: list[Expense], start: date, end: date) -> list[Expense]:
    """Expenses dated within [start, end]."""
    return [e for e in expenses if start <= e.date <= end]


def recent_expenses(expenses: list[Expense], today: date, days: int = 90) -> list[Expense]:
    """Expenses from the last `days` days, inclusive of the cutoff day."""
    cutoff = today - timedelta(days=days)
    return sort_newest_first(e for e in expenses if e.date >= cutoff)


# =============================================================================
# TOTALS
# =============================================================================

def total_spent(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.price for e in expenses), ZERO)


def _category_sums(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    sums: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        sums[expense.category] += expense.price
    return dict(sums)


def totals_by_category(expenses: Iterable[Expense]) -> list[CategoryTotal]:
    """Spend per category, largest first."""
    sums = _category_sums(expenses)
    return [
        CategoryTotal(category=category, amount=amount)
        for category, amount in sorted(sums.items(), key=lambda kv: kv[1], reverse=True)
    ]


def spent_this_month_by_category(
    expenses: Iterable[Expense],
    categories: list[str],
    today: date,
) -> dict[str, Decimal]:
    """Spend in today's calendar month for every known category (zero if none)."""
    spent = {category: ZERO for category in categories}
    for expense in expenses:
        if expense.date.year == today.year and expense.date.month == today.month:
            spent[expense.category] = spent.get(expense.category, ZERO) + expense.price
    return spent


def spending_trends(expenses: list[Expense]) -> SpendingTrends:
    """Totals and daily averages over the given expenses."""
    if not expenses:
        return SpendingTrends()

    daily: dict[date, Decimal] = defaultdict(lambda: ZERO)
    active_months = set()
    for expense in expenses:
        daily[expense.date] += expense.price
        active_months.add((expense.date.year, expense.date.month))

    total = total_spent(expenses)

    highest = None
    for day in sorted(daily):
        if highest is None or daily[day] > highest.amount:
            highest = DailyTotal(day=day, amount=daily[day])

    return SpendingTrends(
        total=total,
        average_daily=total / len(daily),
        average_monthly=total / len(active_months),
        highest_day=highest,
        daily=[DailyTotal(day=day, amount=daily[day]) for day in sorted(daily)],
    )


# =============================================================================
# PERIOD COMPARISON
# =============================================================================

COMPARISONS = ("last_month", "last_7_days", "last_30_days")


def comparison_windows(comparison: str, today: date) -> tuple[str, str, date, date, date, date]:
    """
    Resolve a comparison name into labels and inclusive date ranges.

    Returns:
        (current_label, comparison_label,
         current_start, current_end, comparison_start, comparison_end)
    """
    if comparison == "last_month":
        current_start = today.replace(day=1)
        comparison_start = current_start - relativedelta(months=1)
        comparison_end = current_start - timedelta(days=1)
        return (
            f"This Month ({current_start:%B})",
            f"Last Month ({comparison_start:%B})",
            current_start,
            today,
            comparison_start,
            comparison_end,
        )

    if comparison in ("last_7_days", "last_30_days"):
        days = 7 if comparison == "last_7_days" else 30
        current_start = today - timedelta(days=days - 1)
        comparison_end = current_start - timedelta(days=1)
        comparison_start = comparison_end - timedelta(days=days - 1)
        return (
            f"Last {days} Days",
            f"Previous {days} Days",
            current_start,
            today,
            comparison_start,
            comparison_end,
        )

    raise ReportError(f"Unknown comparison: {comparison}")


def percentage_change(current: Decimal, previous: Decimal) -> float:
    if previous > 0:
        return float((current - previous) / previous * 100)
    return 100.0 if current > 0 else 0.0


def compare_periods(
    expenses: list[Expense],
    comparison: str = "last_month",
    today: Optional[date] = None,
) -> PeriodComparison:
    """Compare spending in the current window against the previous one."""
    today = today or date.today()
    (
        current_label,
        comparison_label,
        current_start,
        current_end,
        comparison_start,
        comparison_end,
    ) = comparison_windows(comparison, today)

    current = expenses_between(expenses, current_start, current_end)
    previous = expenses_between(expenses, comparison_start, comparison_end)

    current_total = total_spent(current)
    comparison_total = total_spent(previous)

    current_by_category = _category_sums(current)
    previous_by_category = _category_sums(previous)
    rows = [
        CategoryComparison(
            category=category,
            current=current_by_category.get(category, ZERO),
            comparison=previous_by_category.get(category, ZERO),
        )
        for category in set(current_by_category) | set(previous_by_category)
    ]
    rows.sort(key=lambda row: (-(row.current + row.comparison), row.category))

    return PeriodComparison(
        current_label=current_label,
        comparison_label=comparison_label,
        current_start=current_start,
        current_end=current_end,
        comparison_start=comparison_start,
        comparison_end=comparison_end,
        current_total=current_total,
        comparison_total=comparison_total,
        difference=current_total - comparison_total,
        percentage_change=percentage_change(current_total, comparison_total),
        categories=rows,
    )
