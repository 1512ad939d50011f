"""
Abstract Storage Interface

DESIGN DECISION: Everything the tracker remembers lives in a flat key-value
store holding JSON values. This allows us to:
1. Keep a single local file as the whole database
2. Use in-memory storage for testing
3. Keep business logic decoupled from where the bytes end up

The interface is intentionally tiny: get, set, remove.
Whatever is stored under a key is the truth. There are no transactions,
no migrations and no cross-process locking; exactly one writer
(the running app) is assumed.
"""

from abc import ABC, abstractmethod
from typing import Any


class StorageKeys:
    """Stable keys for every persisted collection and preference."""

    EXPENSES = "expenses"
    BUDGETS = "expense_budgets"
    CATEGORIES = "expense_categories"
    RECURRING_EXPENSES = "recurring_expenses"
    SAVINGS_GOALS = "savings_goals"
    NOTIFICATIONS = "notifications"
    THEME = "theme"
    ACCENT = "accent"
    CURRENCY = "currency"
    DASHBOARD_WIDGETS = "dashboard_widgets"
    ONBOARDING_COMPLETE = "onboarding_complete"
    LAST_RECURRING_CHECK = "last_recurring_check"


class KeyValueStore(ABC):
    """
    Abstract interface for key-value persistence.

    Any storage implementation (JSON file, in-memory, etc.)
    must implement these methods.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Read the JSON value stored under a key.

        Args:
            key: Storage key
            default: Value returned when the key is absent

        Returns:
            The stored value (a private copy), or default
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Store a JSON-serializable value under a key.

        Raises:
            StorageError: If the value cannot be serialized or written
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is a no-op."""
        pass

    def __contains__(self, key: str) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
