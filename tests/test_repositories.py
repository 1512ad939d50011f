"""Tests for the repositories over the key-value store."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from spendwise.models import (
    DEFAULT_CATEGORIES,
    Accent,
    DashboardWidgets,
    ExpenseDraft,
    Frequency,
    Notification,
    NotificationType,
    SplitPart,
    Theme,
)
from spendwise.repositories import SplitError
from spendwise.services.storage import DuplicateError, NotFoundError, StorageError, StorageKeys


def draft(name="Groceries run", category="Groceries", price="42.00", day=date(2024, 5, 10)):
    return ExpenseDraft(name=name, category=category, price=price, date=day)


class TestExpenseRepository:
    """Tests for expense CRUD."""

    def test_add_assigns_id_and_persists(self, expense_repo, store):
        expense = expense_repo.add(draft())
        assert expense.id
        assert store.get(StorageKeys.EXPENSES)[0]["price"] == 42.0

    def test_list_is_newest_first(self, expense_repo):
        expense_repo.add_batch([
            draft(name="Old", day=date(2024, 5, 1)),
            draft(name="New", day=date(2024, 5, 15)),
            draft(name="Mid", day=date(2024, 5, 8)),
        ])
        assert [e.name for e in expense_repo.list_all()] == ["New", "Mid", "Old"]
        assert expense_repo.latest().name == "New"

    def test_add_batch_empty_is_noop(self, expense_repo, store):
        assert expense_repo.add_batch([]) == []
        assert StorageKeys.EXPENSES not in store

    def test_update(self, expense_repo):
        expense = expense_repo.add(draft())
        expense_repo.update(expense.model_copy(update={"name": "Market"}))
        assert expense_repo.get(expense.id).name == "Market"

    def test_update_missing_raises(self, expense_repo):
        expense = expense_repo.add(draft())
        expense_repo.remove(expense.id)
        with pytest.raises(NotFoundError):
            expense_repo.update(expense)

    def test_remove(self, expense_repo):
        expense = expense_repo.add(draft())
        assert expense_repo.remove(expense.id) is True
        assert expense_repo.remove(expense.id) is False
        assert expense_repo.list_all() == []

    def test_malformed_storage_raises(self, expense_repo, store):
        store.set(StorageKeys.EXPENSES, [{"name": "no id or price"}])
        with pytest.raises(StorageError):
            expense_repo.list_all()


class TestSplit:
    """Tests for splitting one expense into parts."""

    def test_split_exact_total(self, expense_repo):
        original = expense_repo.add(draft())
        other = expense_repo.add(draft(name="Coffee", category="Food", price="3.00"))

        parts = expense_repo.split(original.id, [
            SplitPart(name="Vegetables", category="Groceries", price="30.00"),
            SplitPart(name="Snacks", category="Food", price="12.00"),
        ])

        stored = expense_repo.list_all()
        assert original.id not in {e.id for e in stored}
        assert other.id in {e.id for e in stored}
        assert len(stored) == 3
        assert {p.date for p in parts} == {original.date}
        assert len({p.split_group_id for p in parts}) == 1
        assert parts[0].split_group_id is not None
        assert expense_repo.find_split_group(parts[0].split_group_id) == \
            sorted(parts, key=lambda e: e.date, reverse=True)

    @pytest.mark.parametrize("second_price", ["11.99", "12.01"])
    def test_split_total_mismatch_is_rejected(self, expense_repo, store, second_price):
        original = expense_repo.add(draft())
        before = store.snapshot()

        with pytest.raises(SplitError, match="must equal the original price"):
            expense_repo.split(original.id, [
                SplitPart(name="Vegetables", category="Groceries", price="30.00"),
                SplitPart(name="Snacks", category="Food", price=second_price),
            ])

        assert store.snapshot() == before

    def test_split_part_without_name_is_rejected(self, expense_repo, store):
        original = expense_repo.add(draft())
        before = store.snapshot()

        with pytest.raises(SplitError):
            expense_repo.split(original.id, [
                SplitPart(name="", category="Groceries", price="30.00"),
                SplitPart(name="Snacks", category="Food", price="12.00"),
            ])
        assert store.snapshot() == before

    def test_split_part_with_zero_price_is_rejected(self, expense_repo):
        original = expense_repo.add(draft())
        with pytest.raises(SplitError):
            expense_repo.split(original.id, [
                SplitPart(name="Vegetables", category="Groceries", price="42.00"),
                SplitPart(name="Bag", category="Other", price="0"),
            ])

    def test_split_without_parts_is_rejected(self, expense_repo):
        original = expense_repo.add(draft())
        with pytest.raises(SplitError):
            expense_repo.split(original.id, [])

    def test_split_unknown_expense(self, expense_repo):
        with pytest.raises(NotFoundError):
            expense_repo.split("missing", [SplitPart(name="A", category="Food", price=1)])


class TestBudgetRepository:
    """Tests for category budgets."""

    def test_empty_by_default(self, budget_repo):
        assert budget_repo.get_all() == {}

    def test_set_budget(self, budget_repo, store):
        budget_repo.set_budget("Food", "250.5")
        assert budget_repo.get_all() == {"Food": Decimal("250.50")}
        assert store.get(StorageKeys.BUDGETS) == {"Food": 250.5}

    def test_set_all_merges(self, budget_repo):
        budget_repo.set_budget("Food", 100)
        budget_repo.set_all({"Transport": 50, "Food": 120}, source="ai")
        assert budget_repo.get_all() == {"Food": Decimal("120.00"), "Transport": Decimal("50.00")}

    def test_negative_budget_rejected(self, budget_repo):
        with pytest.raises(ValueError):
            budget_repo.set_budget("Food", -5)
        assert budget_repo.get_all() == {}


class TestCategoryRepository:
    """Tests for the category vocabulary."""

    def test_defaults(self, category_repo):
        assert category_repo.list_all() == DEFAULT_CATEGORIES

    def test_add_category(self, category_repo):
        categories = category_repo.add("  Pets ")
        assert categories[-1] == "Pets"
        assert category_repo.exists("Pets")

    def test_duplicate_rejected(self, category_repo):
        with pytest.raises(DuplicateError, match="This category already exists."):
            category_repo.add("Food")

    def test_blank_rejected(self, category_repo):
        with pytest.raises(ValueError, match="New category name is required."):
            category_repo.add("   ")

    def test_defaults_not_shared_between_stores(self, category_repo):
        category_repo.add("Pets")
        assert "Pets" not in DEFAULT_CATEGORIES


class TestRecurringAndGoals:
    """Tests for recurring definitions and savings goals."""

    def test_add_recurring(self, recurring_repo):
        item = recurring_repo.add("Netflix", "Entertainment", 15, Frequency.MONTHLY, date(2024, 1, 15))
        assert recurring_repo.list_all() == [item]
        assert item.last_added_date == date(2024, 1, 14)

    def test_replace_all(self, recurring_repo):
        item = recurring_repo.add("Netflix", "Entertainment", 15, Frequency.MONTHLY, date(2024, 1, 15))
        advanced = item.model_copy(update={"last_added_date": date(2024, 4, 15)})
        recurring_repo.replace_all([advanced])
        assert recurring_repo.get(item.id).last_added_date == date(2024, 4, 15)

    def test_update_recurring_keeps_watermark(self, recurring_repo):
        item = recurring_repo.add("Netflix", "Entertainment", 15, Frequency.MONTHLY, date(2024, 1, 15))

        recurring_repo.update(item.model_copy(update={"name": "Netflix HD", "price": Decimal("17.99")}))

        stored = recurring_repo.get(item.id)
        assert (stored.name, stored.price) == ("Netflix HD", Decimal("17.99"))
        assert stored.last_added_date == date(2024, 1, 14)

    def test_update_recurring_moves_watermark(self, recurring_repo):
        item = recurring_repo.add("Rent", "Utilities", 900, Frequency.MONTHLY, date(2024, 1, 1))

        recurring_repo.update(item.model_copy(update={"last_added_date": date(2024, 4, 1)}))

        assert recurring_repo.get(item.id).last_added_date == date(2024, 4, 1)

    def test_update_removed_recurring(self, recurring_repo):
        item = recurring_repo.add("Gym", "Health", 30, Frequency.WEEKLY, date(2024, 5, 1))
        recurring_repo.remove(item.id)

        with pytest.raises(NotFoundError):
            recurring_repo.update(item.model_copy(update={"price": Decimal("35")}))
        assert recurring_repo.list_all() == []

    def test_goal_crud(self, goal_repo):
        goal = goal_repo.add("Bike", 500, date(2024, 12, 1))
        goal_repo.update(goal.model_copy(update={"saved_amount": Decimal("100")}))
        assert goal_repo.get(goal.id).saved_amount == Decimal("100.00")
        assert goal_repo.remove(goal.id) is True
        assert goal_repo.list_all() == []


class TestNotificationRepository:

    def test_mark_all_read_and_clear(self, notification_repo):
        notification_repo.save_all([
            Notification(id="reminder-welcome", message="hi",
                         type=NotificationType.REMINDER, timestamp=datetime(2024, 5, 1)),
        ])
        assert notification_repo.unread_count() == 1
        notification_repo.mark_all_read()
        assert notification_repo.unread_count() == 0
        notification_repo.clear()
        assert notification_repo.list_all() == []


class TestPreferencesRepository:
    """Tests for single-value preferences."""

    def test_defaults(self, preferences):
        assert preferences.get_theme() == Theme.DARK
        assert preferences.get_currency().code == "USD"
        assert preferences.get_widgets() == DashboardWidgets()
        assert preferences.is_onboarding_complete() is False
        assert preferences.get_last_recurring_check() is None

    def test_theme_and_accent(self, preferences, store):
        preferences.set_theme(Theme.LIGHT)
        preferences.set_accent(Accent.PINK)
        assert (preferences.get_theme(), preferences.get_accent()) == (Theme.LIGHT, Accent.PINK)

        store.set(StorageKeys.THEME, "sepia")
        store.set(StorageKeys.ACCENT, "orange")
        assert (preferences.get_theme(), preferences.get_accent()) == (Theme.DARK, Accent.CYAN)

    def test_currency_round_trip(self, preferences):
        preferences.set_currency("eur")
        assert preferences.get_currency().code == "EUR"

    def test_toggle_widget(self, preferences):
        widgets = preferences.toggle_widget("ai_summary")
        assert widgets.ai_summary is False
        assert preferences.get_widgets().ai_summary is False

    def test_toggle_unknown_widget(self, preferences):
        with pytest.raises(KeyError):
            preferences.toggle_widget("weather")

    def test_last_recurring_check(self, preferences, store):
        preferences.set_last_recurring_check(date(2024, 5, 20))
        assert store.get(StorageKeys.LAST_RECURRING_CHECK) == "2024-05-20"
        assert preferences.get_last_recurring_check() == date(2024, 5, 20)

    def test_last_check_accepts_timestamps(self, preferences, store):
        store.set(StorageKeys.LAST_RECURRING_CHECK, "2024-05-20T08:30:00.000Z")
        assert preferences.get_last_recurring_check() == date(2024, 5, 20)

    def test_onboarding(self, preferences):
        preferences.complete_onboarding()
        assert preferences.is_onboarding_complete() is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
