"""
Notification Generation and Merging

Budget alerts and activity reminders are derived from the current expenses
and budgets every time either changes, then merged into the stored list.

DESIGN DECISION: Notification ids are derived from what they describe
(kind + category + month, or a fixed reminder key). Recomputing the same
condition produces the same id, so merging is a plain keyed upsert:
- ids already stored keep their read flag and original timestamp
- a fresh critical alert drops the stored warning for the same category/month
- reminders not regenerated this cycle are dropped
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional

from spendwise.models import Expense, Notification, NotificationType


CRITICAL_PERCENT = Decimal("100")
DEFAULT_WARNING_PERCENT = Decimal("85")
DEFAULT_REMINDER_AFTER_DAYS = 3


def month_key(day: date) -> str:
    """YYYY-MM for the calendar month containing day."""
    return f"{day.year:04d}-{day.month:02d}"


def notification_key(
    kind: NotificationType,
    category: Optional[str] = None,
    month: Optional[str] = None,
    reminder: str = "activity",
) -> str:
    """
    Deterministic id for a notification.

    Budget alerts are keyed by category and month (YYYY-MM). Reminders use
    a fixed key per reminder name.
    """
    kind = NotificationType(kind)
    if kind in (NotificationType.BUDGET_CRITICAL, NotificationType.BUDGET_WARNING):
        if not category or not month:
            raise ValueError("Budget notifications need a category and a month")
        level = "critical" if kind == NotificationType.BUDGET_CRITICAL else "warning"
        return f"budget-{level}-{category}-{month}"
    return f"reminder-{reminder}"


REMINDER_ACTIVITY_KEY = notification_key(NotificationType.REMINDER, reminder="activity")
REMINDER_WELCOME_KEY = notification_key(NotificationType.REMINDER, reminder="welcome")


def spent_this_month(expenses: list[Expense], today: date) -> dict[str, Decimal]:
    """Spend per category within today's calendar month."""
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        if expense.date.year == today.year and expense.date.month == today.month:
            totals[expense.category] = totals.get(expense.category, Decimal("0")) + expense.price
    return totals


def generate_notifications(
    expenses: list[Expense],
    budgets: dict[str, Decimal],
    now: datetime,
    warning_percent: Decimal = DEFAULT_WARNING_PERCENT,
    reminder_after_days: int = DEFAULT_REMINDER_AFTER_DAYS,
) -> list[Notification]:
    """
    Derive this cycle's notifications.

    Args:
        expenses: All stored expenses
        budgets: Category -> monthly limit (zero means no budget)
        now: Evaluation time; its calendar month bounds the budget check
        warning_percent: Usage at or above which a warning is raised
        reminder_after_days: Idle period after which a reminder is raised

    Returns:
        Unread notifications stamped with now.
    """
    fresh: list[Notification] = []
    today = now.date()
    month = month_key(today)
    warning_percent = Decimal(str(warning_percent))

    # 1. Budget notifications
    spent_by_category = spent_this_month(expenses, today)

    for category, budget in budgets.items():
        budget = Decimal(str(budget))
        if budget <= 0:
            continue

        spent = spent_by_category.get(category, Decimal("0"))
        percentage = spent / budget * 100

        if percentage >= CRITICAL_PERCENT:
            fresh.append(Notification(
                id=notification_key(NotificationType.BUDGET_CRITICAL, category, month),
                message=f"You've gone over your budget for {category} this month.",
                type=NotificationType.BUDGET_CRITICAL,
                timestamp=now,
            ))
        elif percentage >= warning_percent:
            fresh.append(Notification(
                id=notification_key(NotificationType.BUDGET_WARNING, category, month),
                message=f"You've used over {warning_percent.normalize():f}% of your {category} budget.",
                type=NotificationType.BUDGET_WARNING,
                timestamp=now,
            ))

    # 2. Reminder notification
    if expenses:
        most_recent = max(expense.date for expense in expenses)
        idle = now - datetime.combine(most_recent, time.min, tzinfo=now.tzinfo)

        if idle > timedelta(days=reminder_after_days):
            fresh.append(Notification(
                id=REMINDER_ACTIVITY_KEY,
                message="It's been a few days. Don't forget to log your recent expenses!",
                type=NotificationType.REMINDER,
                timestamp=now,
            ))
    else:
        fresh.append(Notification(
            id=REMINDER_WELCOME_KEY,
            message="Welcome! Upload a receipt or add an expense to get started.",
            type=NotificationType.REMINDER,
            timestamp=now,
        ))

    return fresh


def _warning_superseded_key(notification_id: str) -> str:
    return notification_id.replace("budget-warning-", "budget-critical-", 1)


def merge_notifications(
    previous: list[Notification],
    fresh: list[Notification],
) -> list[Notification]:
    """
    Merge this cycle's notifications into the stored list.

    Returns:
        The merged list, newest first.
    """
    existing_ids = {n.id for n in previous}
    truly_new = [n for n in fresh if n.id not in existing_ids]
    merged = list(previous) + truly_new

    fresh_critical_ids = {
        n.id for n in fresh if n.type == NotificationType.BUDGET_CRITICAL
    }
    fresh_reminder_ids = {
        n.id for n in fresh if n.type == NotificationType.REMINDER
    }

    kept = []
    for notification in merged:
        if (
            notification.type == NotificationType.BUDGET_WARNING
            and _warning_superseded_key(notification.id) in fresh_critical_ids
        ):
            continue
        if (
            notification.type == NotificationType.REMINDER
            and notification.id not in fresh_reminder_ids
        ):
            continue
        kept.append(notification)

    return sorted(kept, key=lambda n: n.timestamp, reverse=True)


def refresh_notifications(
    previous: list[Notification],
    expenses: list[Expense],
    budgets: dict[str, Decimal],
    now: datetime,
    warning_percent: Decimal = DEFAULT_WARNING_PERCENT,
    reminder_after_days: int = DEFAULT_REMINDER_AFTER_DAYS,
) -> list[Notification]:
    """Generate this cycle's notifications and merge them into previous."""
    fresh = generate_notifications(
        expenses,
        budgets,
        now,
        warning_percent=warning_percent,
        reminder_after_days=reminder_after_days,
    )
    return merge_notifications(previous, fresh)
