"""Monthly budget limits per category."""

from decimal import Decimal
from typing import Any, Optional

from spendwise.audit import AuditLogger
from spendwise.models import to_money
from spendwise.services.storage import KeyValueStore, StorageError, StorageKeys


Budgets = dict[str, Decimal]


class BudgetRepository:
    """
    Category -> monthly limit, stored as one JSON object.

    A zero or missing limit means no budget is set for that category.
    """

    def __init__(self, store: KeyValueStore, audit_logger: Optional[AuditLogger] = None):
        self._store = store
        self._audit = audit_logger

    def get_all(self) -> Budgets:
        raw = self._store.get(StorageKeys.BUDGETS, {})
        if not isinstance(raw, dict):
            raise StorageError(f"Expected an object under '{StorageKeys.BUDGETS}'")
        try:
            return {category: to_money(amount) for category, amount in raw.items()}
        except ValueError as e:
            raise StorageError(f"Stored budgets are malformed: {e}") from e

    def _save(self, budgets: Budgets) -> None:
        self._store.set(
            StorageKeys.BUDGETS,
            {category: float(amount) for category, amount in budgets.items()},
        )

    def set_budget(self, category: str, amount: Any) -> Budgets:
        """
        Set one category's limit.

        Raises:
            ValueError: If the amount is not a non-negative number
        """
        value = self._check_amount(amount)
        budgets = self.get_all()
        budgets[category] = value
        self._save(budgets)
        if self._audit:
            self._audit.log_budgets_updated([category])
        return budgets

    def set_all(self, new_budgets: dict[str, Any], source: str = "manual") -> Budgets:
        """Merge several limits into the stored budgets with one write."""
        budgets = self.get_all()
        for category, amount in new_budgets.items():
            budgets[category] = self._check_amount(amount)
        self._save(budgets)
        if self._audit:
            self._audit.log_budgets_updated(sorted(new_budgets), source)
        return budgets

    @staticmethod
    def _check_amount(amount: Any) -> Decimal:
        value = to_money(amount)
        if value < 0:
            raise ValueError("Budget amount cannot be negative")
        return value
