"""
Core Data Models for Spendwise

These models define the schemas for everything the tracker persists.
They are designed to:
1. Enforce type safety when data is loaded back from storage
2. Provide clear validation error messages
3. Serialize to plain JSON for the key-value store and exports

DESIGN DECISION: Money is held as Decimal (two places) in memory and written
as a JSON number. Splits and budget percentages are compared exactly, while
the stored documents stay readable by any JSON tool.
"""

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
)


CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999.99")

DEFAULT_CATEGORIES = [
    "Food",
    "Groceries",
    "Transport",
    "Entertainment",
    "Utilities",
    "Shopping",
    "Health",
    "Other",
]

FALLBACK_CATEGORY = "Other"


def to_money(value: Any) -> Any:
    """Coerce numbers and numeric strings to a Decimal rounded to cents."""
    if isinstance(value, bool):
        raise ValueError("Amount must be a number")
    if isinstance(value, (int, float, str)):
        try:
            value = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError("Amount must be a finite number")
        if abs(value) > MAX_AMOUNT:
            raise ValueError(f"Amount must not exceed {MAX_AMOUNT}")
        try:
            return value.quantize(CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {value!r}")
    return value


Money = Annotated[
    Decimal,
    BeforeValidator(to_money),
    PlainSerializer(float, return_type=float, when_used="json"),
]


def new_id() -> str:
    return str(uuid4())


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Frequency(str, Enum):
    """How often a recurring expense falls due."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class NotificationType(str, Enum):
    """Kinds of notification shown in the bell menu."""
    BUDGET_WARNING = "budget_warning"
    BUDGET_CRITICAL = "budget_critical"
    REMINDER = "reminder"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Accent(str, Enum):
    CYAN = "cyan"
    INDIGO = "indigo"
    PINK = "pink"


# =============================================================================
# EXPENSES
# =============================================================================

class ExtractedItem(BaseModel):
    """
    A single line item returned by the receipt extraction.

    This is PROPOSED data. The category is re-checked against the
    known vocabulary before it becomes an expense.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    price: Money = Field(..., ge=0)


class ExpenseDraft(BaseModel):
    """
    An expense that has not been assigned an identifier yet.

    Produced by the recurring projector, receipt extraction and the
    manual entry form. The repository assigns the id on insertion.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    price: Money = Field(..., ge=0, description="Amount in the display currency")
    date: date
    split_group_id: Optional[str] = Field(
        default=None,
        description="Shared by all parts produced by one split"
    )


class Expense(BaseModel):
    """A stored expense."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    price: Money = Field(..., ge=0)
    date: date
    split_group_id: Optional[str] = None

    @classmethod
    def from_draft(cls, draft: ExpenseDraft, expense_id: Optional[str] = None) -> "Expense":
        return cls(id=expense_id or new_id(), **draft.model_dump())


class SplitPart(BaseModel):
    """One replacement record requested when splitting an expense."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str
    category: str
    price: Money


# =============================================================================
# RECURRING EXPENSES
# =============================================================================

class RecurringExpense(BaseModel):
    """
    A template that periodically materializes into expenses.

    last_added_date is the watermark: every occurrence on or before it has
    already been turned into an expense. A fresh definition starts with the
    watermark one day before start_date so the first occurrence is captured.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    price: Money = Field(..., ge=0)
    frequency: Frequency
    start_date: date
    last_added_date: date

    @classmethod
    def create(
        cls,
        name: str,
        category: str,
        price: Any,
        frequency: Frequency,
        start_date: date,
    ) -> "RecurringExpense":
        return cls(
            name=name,
            category=category,
            price=price,
            frequency=frequency,
            start_date=start_date,
            last_added_date=start_date - timedelta(days=1),
        )


# =============================================================================
# SAVINGS GOALS
# =============================================================================

class SavingsGoal(BaseModel):
    """A target amount and deadline, tracked independently of expenses."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=200)
    target_amount: Money = Field(..., gt=0)
    saved_amount: Money = Field(default=Decimal("0.00"), ge=0)
    deadline: date

    @property
    def remaining_amount(self) -> Decimal:
        return max(self.target_amount - self.saved_amount, Decimal("0.00"))

    @property
    def progress_percent(self) -> float:
        return min(float(self.saved_amount / self.target_amount * 100), 100.0)


# =============================================================================
# NOTIFICATIONS
# =============================================================================

class Notification(BaseModel):
    """
    A budget alert or activity reminder.

    The id is derived from what the notification is about, never random,
    so regenerating the same condition yields the same id.
    """

    id: str
    message: str
    type: NotificationType
    timestamp: datetime
    read: bool = False


# =============================================================================
# CURRENCY & PREFERENCES
# =============================================================================

class Currency(BaseModel):
    code: str = Field(..., min_length=3, max_length=3)
    name: str
    symbol: str

    def format(self, amount: Decimal | float) -> str:
        return f"{self.symbol}{Decimal(str(amount)).quantize(CENT):,}"


CURRENCIES: list[Currency] = [
    Currency(code="USD", name="US Dollar", symbol="$"),
    Currency(code="EUR", name="Euro", symbol="€"),
    Currency(code="GBP", name="British Pound", symbol="£"),
    Currency(code="INR", name="Indian Rupee", symbol="₹"),
    Currency(code="JPY", name="Japanese Yen", symbol="¥"),
    Currency(code="CAD", name="Canadian Dollar", symbol="CA$"),
    Currency(code="AUD", name="Australian Dollar", symbol="A$"),
]


def get_currency(code: str) -> Currency:
    """Look up a built-in currency, falling back to the first entry."""
    for currency in CURRENCIES:
        if currency.code == code.upper():
            return currency
    return CURRENCIES[0]


class DashboardWidgets(BaseModel):
    """Which dashboard panels are visible."""

    ai_summary: bool = True
    spending_trends: bool = True
    expense_list: bool = True
    summary: bool = True
    export_data: bool = True
    ai_coach: bool = True


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found on a form."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'duplicate')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating manual form input.

    Errors block submission and are shown next to their field.
    Warnings are shown but do not block.
    """

    validated_at: datetime = Field(default_factory=datetime.now)
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def errors_by_field(self) -> dict[str, str]:
        """First error message per field, for inline display."""
        errors: dict[str, str] = {}
        for issue in self.issues:
            if issue.severity == "error":
                errors.setdefault(issue.field, issue.message)
        return errors
