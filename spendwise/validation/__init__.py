"""Form validation package."""

from spendwise.validation.validator import (
    CATEGORY_EXISTS,
    DATE_REQUIRED,
    INVALID_FIELDS,
    INVALID_PRICE,
    NAME_REQUIRED,
    NEW_CATEGORY_REQUIRED,
    ExpenseFormValidator,
    parse_amount,
)

__all__ = [
    "CATEGORY_EXISTS",
    "DATE_REQUIRED",
    "INVALID_FIELDS",
    "INVALID_PRICE",
    "NAME_REQUIRED",
    "NEW_CATEGORY_REQUIRED",
    "ExpenseFormValidator",
    "parse_amount",
]
