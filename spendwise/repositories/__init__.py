"""
Repositories Package

One repository per stored collection. Each reads and writes its key
through the KeyValueStore interface.
"""

from spendwise.repositories.budgets import BudgetRepository, Budgets
from spendwise.repositories.categories import CategoryRepository
from spendwise.repositories.expenses import ExpenseRepository, SplitError
from spendwise.repositories.goals import SavingsGoalRepository
from spendwise.repositories.notifications import NotificationRepository
from spendwise.repositories.preferences import PreferencesRepository
from spendwise.repositories.recurring import RecurringExpenseRepository

__all__ = [
    "BudgetRepository",
    "Budgets",
    "CategoryRepository",
    "ExpenseRepository",
    "NotificationRepository",
    "PreferencesRepository",
    "RecurringExpenseRepository",
    "SavingsGoalRepository",
    "SplitError",
]
