"""Recurring expense definitions."""

from datetime import date
from typing import Any

from spendwise.models import Frequency, RecurringExpense
from spendwise.repositories.base import CollectionRepository
from spendwise.services.storage import StorageKeys


class RecurringExpenseRepository(CollectionRepository[RecurringExpense]):

    model = RecurringExpense
    key = StorageKeys.RECURRING_EXPENSES

    def add(
        self,
        name: str,
        category: str,
        price: Any,
        frequency: Frequency,
        start_date: date,
    ) -> RecurringExpense:
        """Create a definition whose first occurrence is start_date."""
        item = RecurringExpense.create(
            name=name,
            category=category,
            price=price,
            frequency=frequency,
            start_date=start_date,
        )
        self.save_all(self.list_all() + [item])
        return item

    def update(self, item: RecurringExpense) -> RecurringExpense:
        self._replace(item)
        return item

    def remove(self, item_id: str) -> bool:
        return self._delete(item_id)

    def replace_all(self, items: list[RecurringExpense]) -> None:
        self.save_all(items)
