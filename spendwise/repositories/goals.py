"""Savings goals."""

from datetime import date
from decimal import Decimal
from typing import Any

from spendwise.models import SavingsGoal
from spendwise.repositories.base import CollectionRepository
from spendwise.services.storage import StorageKeys


class SavingsGoalRepository(CollectionRepository[SavingsGoal]):

    model = SavingsGoal
    key = StorageKeys.SAVINGS_GOALS

    def add(
        self,
        name: str,
        target_amount: Any,
        deadline: date,
        saved_amount: Any = Decimal("0.00"),
    ) -> SavingsGoal:
        goal = SavingsGoal(
            name=name,
            target_amount=target_amount,
            saved_amount=saved_amount,
            deadline=deadline,
        )
        self.save_all(self.list_all() + [goal])
        return goal

    def update(self, goal: SavingsGoal) -> SavingsGoal:
        self._replace(goal)
        return goal

    def remove(self, goal_id: str) -> bool:
        return self._delete(goal_id)
