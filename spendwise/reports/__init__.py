"""Read-only reports over stored expenses."""

from spendwise.reports.aggregations import (
    COMPARISONS,
    PERIOD_DAYS,
    CategoryComparison,
    CategoryTotal,
    DailyTotal,
    PeriodComparison,
    ReportError,
    SpendingTrends,
    compare_periods,
    comparison_windows,
    expenses_between,
    filter_expenses,
    percentage_change,
    recent_expenses,
    sort_newest_first,
    spending_trends,
    spent_this_month_by_category,
    total_spent,
    totals_by_category,
)

__all__ = [
    "COMPARISONS",
    "PERIOD_DAYS",
    "CategoryComparison",
    "CategoryTotal",
    "DailyTotal",
    "PeriodComparison",
    "ReportError",
    "SpendingTrends",
    "compare_periods",
    "comparison_windows",
    "expenses_between",
    "filter_expenses",
    "percentage_change",
    "recent_expenses",
    "sort_newest_first",
    "spending_trends",
    "spent_this_month_by_category",
    "total_spent",
    "totals_by_category",
]
