"""AI services package."""

from spendwise.services.ai.gemini_service import (
    AIServiceError,
    GeminiExpenseService,
    InsufficientDataError,
    parse_json_array,
)

__all__ = [
    "AIServiceError",
    "GeminiExpenseService",
    "InsufficientDataError",
    "parse_json_array",
]
