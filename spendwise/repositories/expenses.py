"""
Expense Repository

CRUD over the stored expense list, plus splitting.

CRITICAL: A split is all-or-nothing. Every part is checked, and the parts
must add up to the original price to the cent, before anything is written.
"""

from decimal import Decimal
from typing import Iterable, Optional

from spendwise.models import Expense, ExpenseDraft, SplitPart, new_id
from spendwise.repositories.base import CollectionRepository
from spendwise.services.storage import NotFoundError, StorageKeys


class SplitError(Exception):
    """A split request violates the split rules; nothing was changed."""
    pass


def _newest_first(expenses: list[Expense]) -> list[Expense]:
    return sorted(expenses, key=lambda e: e.date, reverse=True)


class ExpenseRepository(CollectionRepository[Expense]):
    """Stored expenses, always returned newest first."""

    model = Expense
    key = StorageKeys.EXPENSES

    def list_all(self) -> list[Expense]:
        return _newest_first(super().list_all())

    def add(self, draft: ExpenseDraft, source: str = "manual") -> Expense:
        """
        Insert a new expense and assign its id.

        Args:
            draft: The expense fields
            source: Where it came from (manual, receipt, recurring), for the audit log

        Returns:
            The stored expense
        """
        return self.add_batch([draft], source=source)[0]

    def add_batch(self, drafts: Iterable[ExpenseDraft], source: str = "manual") -> list[Expense]:
        """Insert several expenses with one write."""
        new_expenses = [Expense.from_draft(draft) for draft in drafts]
        if not new_expenses:
            return []
        self.save_all(_newest_first(self.list_all() + new_expenses))
        if self._audit:
            for expense in new_expenses:
                self._audit.log_expense_added(expense.id, expense.name, str(expense.price), source)
        return new_expenses

    def update(self, expense: Expense) -> Expense:
        """
        Replace a stored expense.

        Raises:
            NotFoundError: If no expense has this id
        """
        self._replace(expense)
        if self._audit:
            self._audit.log_expense_updated(expense.id)
        return expense

    def remove(self, expense_id: str) -> bool:
        removed = self._delete(expense_id)
        if removed and self._audit:
            self._audit.log_expense_removed(expense_id)
        return removed

    def split(self, original_id: str, parts: list[SplitPart]) -> list[Expense]:
        """
        Replace one expense with several parts that add up to it.

        The parts keep the original date and share a fresh split group id.

        Raises:
            NotFoundError: If the original expense does not exist
            SplitError: If any part is invalid or the total does not match
        """
        original = self.get(original_id)
        if original is None:
            raise NotFoundError(f"No Expense with id {original_id}")

        try:
            self._check_split(original, parts)
        except SplitError as e:
            if self._audit:
                self._audit.log_split_rejected(original_id, str(e))
            raise

        split_group_id = new_id()
        split_expenses = [
            Expense(
                name=part.name,
                category=part.category,
                price=part.price,
                date=original.date,
                split_group_id=split_group_id,
            )
            for part in parts
        ]

        others = [e for e in self.list_all() if e.id != original_id]
        self.save_all(_newest_first(others + split_expenses))

        if self._audit:
            self._audit.log_expense_split(original_id, split_group_id, len(split_expenses))
        return split_expenses

    @staticmethod
    def _check_split(original: Expense, parts: list[SplitPart]) -> None:
        if not parts:
            raise SplitError("Please create at least one valid split item.")

        for index, part in enumerate(parts, start=1):
            if not part.name:
                raise SplitError(f"Split item {index} needs a name.")
            if not part.category:
                raise SplitError(f"Split item {index} needs a category.")
            if part.price <= 0:
                raise SplitError(f"Split item {index} must have a positive price.")

        total = sum((part.price for part in parts), Decimal("0.00"))
        remaining = original.price - total
        if remaining != 0:
            raise SplitError(
                "The total of split items must equal the original price. "
                f"You have {remaining} remaining."
            )

    def find_split_group(self, split_group_id: str) -> list[Expense]:
        return [e for e in self.list_all() if e.split_group_id == split_group_id]

    def latest(self) -> Optional[Expense]:
        expenses = self.list_all()
        return expenses[0] if expenses else None
