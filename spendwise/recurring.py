"""
Recurring Expense Projection

Turns recurring expense definitions into the concrete expenses that have
fallen due since each definition's watermark (last_added_date).

DESIGN DECISION: The projector is a pure function. It never touches
storage; the caller inserts the returned drafts and persists the returned
definitions. Calling it twice without persisting the advanced watermarks
yields the same drafts twice.

Calendar arithmetic is delegated to dateutil's relativedelta. Adding one
month to Jan 31 gives Feb 28/29, and because each step is added to the
previous occurrence that clamp carries forward (Feb 29 -> Mar 29 ...).
That is the library's definition and is kept as-is.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta

from spendwise.models import ExpenseDraft, Frequency, RecurringExpense


PERIODS: dict[Frequency, Union[timedelta, relativedelta]] = {
    Frequency.WEEKLY: timedelta(days=7),
    Frequency.MONTHLY: relativedelta(months=1),
    Frequency.YEARLY: relativedelta(years=1),
}


@dataclass
class DueExpenses:
    """Result of one projection run."""

    due_expenses: list[ExpenseDraft] = field(default_factory=list)
    updated_recurring_expenses: list[RecurringExpense] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.due_expenses)


def advance(day: date, frequency: Frequency) -> date:
    """Move a date forward by one period of the given frequency."""
    return day + PERIODS[Frequency(frequency)]


def due_dates(recurring: RecurringExpense, today: date) -> list[date]:
    """
    All occurrences of one definition that are due on or before today
    and have not been materialized yet.

    The first candidate is start_date itself when the watermark predates
    it, otherwise one period after the watermark.
    """
    watermark = recurring.last_added_date

    if watermark < recurring.start_date:
        cursor = recurring.start_date
    else:
        cursor = advance(watermark, recurring.frequency)

    dates = []
    while cursor <= today:
        if cursor >= recurring.start_date and cursor > watermark:
            dates.append(cursor)
        cursor = advance(cursor, recurring.frequency)
    return dates


def generate_due_expenses(
    recurring_expenses: list[RecurringExpense],
    last_check_date: date,
    today: date,
) -> DueExpenses:
    """
    Compute the expenses that fell due and the advanced watermarks.

    Args:
        recurring_expenses: Stored definitions (not modified)
        last_check_date: When the daily check last ran; the watermarks,
            not this date, decide which occurrences are new
        today: Calendar day to project up to (inclusive)

    Returns:
        DueExpenses with one draft per occurrence (no ids yet) and a copy
        of every definition, its watermark moved to the last occurrence
        emitted for it.
    """
    result = DueExpenses()

    for recurring in recurring_expenses:
        dates = due_dates(recurring, today)

        for due in dates:
            result.due_expenses.append(ExpenseDraft(
                name=recurring.name,
                category=recurring.category,
                price=recurring.price,
                date=due,
            ))

        if dates:
            result.updated_recurring_expenses.append(
                recurring.model_copy(update={"last_added_date": dates[-1]})
            )
        else:
            result.updated_recurring_expenses.append(recurring.model_copy())

    return result
