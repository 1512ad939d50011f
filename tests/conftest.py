"""
Shared fixtures.

Every test runs against an in-memory store, with settings read from a
clean environment and no real Gemini calls.
"""

from datetime import date
from decimal import Decimal

import pytest

from spendwise.audit import AuditLogger
from spendwise.config import get_settings
from spendwise.models import Expense
from spendwise.repositories import (
    BudgetRepository,
    CategoryRepository,
    ExpenseRepository,
    NotificationRepository,
    PreferencesRepository,
    RecurringExpenseRepository,
    SavingsGoalRepository,
)
from spendwise.services.storage import InMemoryStore


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep settings away from any real .env file or home directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STORAGE_DATA_PATH", str(tmp_path / "data.json"))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("DEFAULT_CURRENCY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def expense_repo(store, audit_logger):
    return ExpenseRepository(store, audit_logger)


@pytest.fixture
def budget_repo(store, audit_logger):
    return BudgetRepository(store, audit_logger)


@pytest.fixture
def category_repo(store):
    return CategoryRepository(store)


@pytest.fixture
def recurring_repo(store, audit_logger):
    return RecurringExpenseRepository(store, audit_logger)


@pytest.fixture
def goal_repo(store, audit_logger):
    return SavingsGoalRepository(store, audit_logger)


@pytest.fixture
def notification_repo(store, audit_logger):
    return NotificationRepository(store, audit_logger)


@pytest.fixture
def preferences(store):
    return PreferencesRepository(store)


def make_expense(name, category, price, day, **extra):
    return Expense(name=name, category=category, price=Decimal(str(price)), date=day, **extra)


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    """Stands in for genai.GenerativeModel; records every call."""

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content_async(self, contents, **kwargs):
        self.calls.append((contents, kwargs))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.text)


@pytest.fixture
def today():
    return date(2024, 5, 20)
