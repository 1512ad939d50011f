"""
Two-Stage Form Validation

STAGE 1 - FIELD VALIDATION:
- Required field presence
- Numbers parse and are in range
- New category names are non-blank and unique
Errors from this stage block submission.

STAGE 2 - SEMANTIC CHECKS:
- Expense dates in the future or unusually old
- Savings goal deadlines already passed
These are warnings: shown next to the field, never blocking.

Stage 2 only runs when stage 1 passes. Validation never rewrites the
user's input; it only reports issues.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Optional

from spendwise.models import ValidationIssue, ValidationResult, to_money


MAX_EXPENSE_AGE_DAYS = 365 * 2

NAME_REQUIRED = "Item name is required."
DATE_REQUIRED = "Please select a date."
NEW_CATEGORY_REQUIRED = "New category name is required."
CATEGORY_EXISTS = "This category already exists."
INVALID_PRICE = "Please enter a valid, positive price."
INVALID_FIELDS = "Please fill out all fields with valid values."


def parse_amount(raw: Any) -> Optional[Decimal]:
    """
    Parse user input the way it will be stored: a Decimal rounded to cents.

    Returns None when the input is not a finite number or exceeds MAX_AMOUNT.
    """
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return to_money(str(raw).strip())
    except ValueError:
        return None


class ExpenseFormValidator:
    """
    Validates the manual entry, recurring expense and savings goal forms.

    Args:
        categories: The current category vocabulary, for duplicate checks
    """

    def __init__(self, categories: list[str]):
        self._categories = list(categories)

    def _semantic_expense_date(self, day: date, today: date) -> list[ValidationIssue]:
        issues = []
        if day > today:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"The date ({day.isoformat()}) is in the future.",
                severity="warning",
            ))
        elif day < today - timedelta(days=MAX_EXPENSE_AGE_DAYS):
            issues.append(ValidationIssue(
                field="date",
                issue_type="suspicious_date",
                message=f"The date ({day.isoformat()}) seems unusually old.",
                severity="warning",
            ))
        return issues

    def validate_expense(
        self,
        name: str,
        price: Any,
        day: Optional[date],
        new_category: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Validate the manual expense form.

        Args:
            name: Item name as typed
            price: Price as typed (string or number)
            day: Selected date, None if not picked
            new_category: Text of the "add new category" box; None when an
                existing category was selected
            today: Reference day for semantic checks
        """
        issues = []

        if not (name or "").strip():
            issues.append(ValidationIssue(
                field="name", issue_type="missing", message=NAME_REQUIRED,
            ))
        if day is None:
            issues.append(ValidationIssue(
                field="date", issue_type="missing", message=DATE_REQUIRED,
            ))
        if new_category is not None:
            issues.extend(self._check_new_category(new_category))

        amount = parse_amount(price)
        if amount is None or amount <= 0:
            issues.append(ValidationIssue(
                field="price", issue_type="invalid_value", message=INVALID_PRICE,
            ))

        if not any(issue.severity == "error" for issue in issues):
            issues.extend(self._semantic_expense_date(day, today or date.today()))

        return ValidationResult(issues=issues)

    def _check_new_category(self, new_category: str) -> list[ValidationIssue]:
        trimmed = new_category.strip()
        if not trimmed:
            return [ValidationIssue(
                field="new_category", issue_type="missing", message=NEW_CATEGORY_REQUIRED,
            )]
        if trimmed in self._categories:
            return [ValidationIssue(
                field="new_category", issue_type="duplicate", message=CATEGORY_EXISTS,
            )]
        return []

    def validate_new_category(self, new_category: str) -> ValidationResult:
        return ValidationResult(issues=self._check_new_category(new_category))

    def validate_recurring(
        self,
        name: str,
        price: Any,
        start_date: Optional[date],
    ) -> ValidationResult:
        """Validate the recurring expense form."""
        issues = []

        if not (name or "").strip():
            issues.append(ValidationIssue(
                field="name", issue_type="missing", message=INVALID_FIELDS,
            ))
        amount = parse_amount(price)
        if amount is None or amount <= 0:
            issues.append(ValidationIssue(
                field="price", issue_type="invalid_value", message=INVALID_FIELDS,
            ))
        if start_date is None:
            issues.append(ValidationIssue(
                field="start_date", issue_type="missing", message=INVALID_FIELDS,
            ))

        return ValidationResult(issues=issues)

    def validate_goal(
        self,
        name: str,
        target_amount: Any,
        saved_amount: Any,
        deadline: Optional[date],
        today: Optional[date] = None,
    ) -> ValidationResult:
        """Validate the savings goal form."""
        issues = []

        if not (name or "").strip():
            issues.append(ValidationIssue(
                field="name", issue_type="missing", message=INVALID_FIELDS,
            ))
        target = parse_amount(target_amount)
        if target is None or target <= 0:
            issues.append(ValidationIssue(
                field="target_amount", issue_type="invalid_value", message=INVALID_FIELDS,
            ))
        saved = parse_amount(saved_amount)
        if saved is None or saved < 0:
            issues.append(ValidationIssue(
                field="saved_amount", issue_type="invalid_value", message=INVALID_FIELDS,
            ))
        if deadline is None:
            issues.append(ValidationIssue(
                field="deadline", issue_type="missing", message=INVALID_FIELDS,
            ))

        if not any(issue.severity == "error" for issue in issues):
            if deadline < (today or date.today()):
                issues.append(ValidationIssue(
                    field="deadline",
                    issue_type="past_date",
                    message="The deadline has already passed.",
                    severity="warning",
                ))

        return ValidationResult(issues=issues)

    @staticmethod
    def get_user_friendly_summary(result: ValidationResult) -> str:
        """One line per issue, errors first."""
        if not result.issues:
            return "All checks passed."
        errors = [i.message for i in result.issues if i.severity == "error"]
        warnings = [i.message for i in result.issues if i.severity == "warning"]
        lines = [f"❌ {message}" for message in dict.fromkeys(errors)]
        lines += [f"⚠️ {message}" for message in dict.fromkeys(warnings)]
        return "\n".join(lines)
