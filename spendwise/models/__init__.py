"""
Data Models Package

This package contains all Pydantic models used in Spendwise.
All data flowing through the system must conform to these schemas.
"""

from spendwise.models.expense import (
    CURRENCIES,
    DEFAULT_CATEGORIES,
    FALLBACK_CATEGORY,
    MAX_AMOUNT,
    Accent,
    Currency,
    DashboardWidgets,
    Expense,
    ExpenseDraft,
    ExtractedItem,
    Frequency,
    Money,
    Notification,
    NotificationType,
    RecurringExpense,
    SavingsGoal,
    SplitPart,
    Theme,
    ValidationIssue,
    ValidationResult,
    get_currency,
    new_id,
    to_money,
)
from spendwise.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "CURRENCIES",
    "DEFAULT_CATEGORIES",
    "FALLBACK_CATEGORY",
    "MAX_AMOUNT",
    "Accent",
    "Currency",
    "DashboardWidgets",
    "Expense",
    "ExpenseDraft",
    "ExtractedItem",
    "Frequency",
    "Money",
    "Notification",
    "NotificationType",
    "RecurringExpense",
    "SavingsGoal",
    "SplitPart",
    "Theme",
    "ValidationIssue",
    "ValidationResult",
    "get_currency",
    "new_id",
    "to_money",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
