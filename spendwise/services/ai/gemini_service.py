"""
AI Services using Google Gemini

DESIGN DECISION: The generative model is treated as an opaque, fallible
collaborator. Each call is a single request/response:
- no retries, no cancellation
- any failure becomes one AIServiceError with a message fit for the user
- structured answers are re-validated here before anything trusts them

CRITICAL BOUNDARIES:

1. RECEIPT EXTRACTION:
   - CAN: Propose line items (name, category, price)
   - CANNOT: Introduce categories outside the user's vocabulary
     (unknown ones are coerced to the fallback category)

2. BUDGET SUGGESTIONS:
   - CAN: Propose a monthly limit per known category
   - CANNOT: Apply anything itself; the caller merges the validated result

3. INSIGHTS / COACHING:
   - Free text for display only. Nothing is parsed out of it.
"""

import json
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, TypedDict

import google.generativeai as genai
from pydantic import ValidationError

from spendwise.audit import get_logger
from spendwise.config import GeminiSettings, get_settings
from spendwise.models import (
    FALLBACK_CATEGORY,
    Currency,
    Expense,
    ExtractedItem,
    SavingsGoal,
    to_money,
)


logger = get_logger(__name__)

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$")

MIN_EXPENSES_FOR_SUGGESTIONS = 5
COACHING_EXPENSE_LIMIT = 20


class AIServiceError(Exception):
    """The AI service failed or answered with something unusable."""
    pass


class InsufficientDataError(Exception):
    """Not enough data to ask the AI for a meaningful answer."""
    pass


class ReceiptItemSchema(TypedDict):
    name: str
    category: str
    price: float


class BudgetSuggestionSchema(TypedDict):
    category: str
    budget: float


def _expenses_for_prompt(expenses: list[Expense]) -> list[dict[str, Any]]:
    return [
        {
            "name": e.name,
            "category": e.category,
            "price": float(e.price),
            "date": e.date.isoformat(),
        }
        for e in expenses
    ]


def parse_json_array(text: str) -> list:
    """
    Parse a JSON array out of a model response.

    Models sometimes wrap JSON in ```json fences even in JSON mode.

    Raises:
        AIServiceError: If the text is empty, not JSON, or not an array
    """
    cleaned = _FENCE_PATTERN.sub("", (text or "").strip())
    if not cleaned:
        raise AIServiceError("The AI returned an empty response.")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AIServiceError("The AI returned an invalid response. Please try again.") from e
    if not isinstance(data, list):
        raise AIServiceError("The AI response was not in the expected format (array).")
    return data


class GeminiExpenseService:
    """
    All calls the tracker makes to Gemini.

    A preconfigured model can be injected (tests pass a fake); otherwise
    one is built from GeminiSettings.
    """

    def __init__(
        self,
        model: Optional[Any] = None,
        settings: Optional[GeminiSettings] = None,
    ):
        if model is not None:
            self._model = model
            return

        self._settings = settings or get_settings().gemini
        genai.configure(api_key=self._settings.api_key)
        self._model = genai.GenerativeModel(
            model_name=self._settings.model_name,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
            },
        )

    async def _generate_text(self, contents: Any, generation_config: Optional[Any] = None) -> str:
        if generation_config is None:
            response = await self._model.generate_content_async(contents)
        else:
            response = await self._model.generate_content_async(
                contents,
                generation_config=generation_config,
            )
        # .text raises ValueError when the candidate was blocked or empty
        return (response.text or "").strip()

    # -------------------------------------------------------------------------
    # Receipt extraction
    # -------------------------------------------------------------------------

    async def extract_expenses_from_receipt(
        self,
        image_bytes: bytes,
        mime_type: str,
        categories: list[str],
    ) -> list[ExtractedItem]:
        """
        Extract itemized expenses from a receipt image.

        Args:
            image_bytes: Encoded image
            mime_type: e.g. image/jpeg
            categories: Allowed category vocabulary

        Returns:
            Validated items; categories outside the vocabulary are replaced
            by the fallback category and unusable items are dropped.

        Raises:
            AIServiceError: On any service failure or unusable response
        """
        category_list = ", ".join(categories)
        prompt = f"""Extract the itemized list of expenses from this receipt. For each item, provide its name, price, and category. Use the following categories: {category_list}. If an item doesn't fit any category, use "{FALLBACK_CATEGORY}". The price should be a number.

Example response format:
[
    {{"name": "Organic Bananas", "category": "Groceries", "price": 1.29}},
    {{"name": "Almond Milk", "category": "Groceries", "price": 3.49}}
]"""

        image_part = {"mime_type": mime_type, "data": image_bytes}

        try:
            text = await self._generate_text(
                [image_part, prompt],
                generation_config=genai.GenerationConfig(
                    response_mime_type="application/json",
                    response_schema=list[ReceiptItemSchema],
                ),
            )
            if not text:
                raise AIServiceError(
                    "The AI returned an empty response. The receipt might be unclear."
                )
            data = parse_json_array(text)
        except AIServiceError as e:
            logger.warning("receipt_extraction_unusable", error=str(e))
            if "invalid response" in str(e):
                raise AIServiceError(
                    "The AI returned an invalid response. Please try a clearer receipt image."
                ) from e
            raise
        except Exception as e:
            logger.error("receipt_extraction_failed", error=str(e))
            raise AIServiceError(
                "Failed to analyze the receipt. The image might be blurry or the format unsupported."
            ) from e

        items = []
        for raw in data:
            if not isinstance(raw, dict):
                continue
            category = raw.get("category")
            if category not in categories:
                category = FALLBACK_CATEGORY
            try:
                items.append(ExtractedItem(
                    name=raw.get("name"),
                    category=category,
                    price=raw.get("price"),
                ))
            except (ValidationError, ValueError, TypeError) as e:
                logger.warning("receipt_item_dropped", item=str(raw)[:200], error=str(e))

        logger.info("receipt_extracted", item_count=len(items), raw_count=len(data))
        return items

    # -------------------------------------------------------------------------
    # Free-text insights
    # -------------------------------------------------------------------------

    async def generate_insights(self, expenses: list[Expense], currency: Currency) -> str:
        """Short Markdown summary of spending habits."""
        if not expenses:
            return "There are no expenses to analyze."

        prompt = f"""You are a financial analyst AI. Here is a list of recent expenses in {currency.name} ({currency.code}):
{json.dumps(_expenses_for_prompt(expenses), indent=2)}

Analyze these spending habits and provide a brief, insightful summary (2-3 sentences).
- Highlight the category with the highest spending.
- Mention any potential areas for savings.
- Keep the tone encouraging and helpful.
- Use Markdown for formatting, for example, use **bold** for key terms."""

        try:
            return await self._generate_text(prompt)
        except Exception as e:
            logger.error("insights_failed", error=str(e))
            raise AIServiceError("Failed to generate financial insights at this time.") from e

    async def generate_budget_suggestions(
        self,
        expenses: list[Expense],
        categories: list[str],
        currency: Currency,
    ) -> dict[str, Decimal]:
        """
        Suggest a monthly budget per category.

        Returns:
            category -> whole-unit amount, only for known categories with a
            non-negative numeric budget.

        Raises:
            InsufficientDataError: With fewer than five expenses
            AIServiceError: On any service failure or unusable response
        """
        if len(expenses) < MIN_EXPENSES_FOR_SUGGESTIONS:
            raise InsufficientDataError(
                "Not enough expense data to generate suggestions. Please add more expenses."
            )

        prompt = f"""You are an expert financial advisor AI. Based on the following list of recent expenses in {currency.name} ({currency.code}), please suggest a reasonable monthly budget for each category.
The goal is to help the user save money while maintaining a realistic lifestyle.
Only provide suggestions for the following categories: {', '.join(categories)}.

Expense Data:
{json.dumps(_expenses_for_prompt(expenses))}

Please provide your response as a JSON array of objects, where each object has a "category" and a "budget" field. The budget should be a positive number."""

        try:
            text = await self._generate_text(
                prompt,
                generation_config=genai.GenerationConfig(
                    response_mime_type="application/json",
                    response_schema=list[BudgetSuggestionSchema],
                ),
            )
            data = parse_json_array(text)
        except AIServiceError as e:
            logger.warning("budget_suggestions_unusable", error=str(e))
            raise
        except Exception as e:
            logger.error("budget_suggestions_failed", error=str(e))
            raise AIServiceError("Failed to generate budget suggestions at this time.") from e

        suggestions: dict[str, Decimal] = {}
        for item in data:
            if not isinstance(item, dict):
                continue
            category = item.get("category")
            budget = item.get("budget")
            if category not in categories:
                continue
            if isinstance(budget, bool) or not isinstance(budget, (int, float)):
                continue
            try:
                to_money(budget)
            except ValueError:
                continue
            amount = Decimal(str(budget))
            if amount < 0:
                continue
            suggestions[category] = amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)

        return suggestions

    async def generate_coaching_message(
        self,
        goal: SavingsGoal,
        expenses: list[Expense],
        budgets: dict[str, Decimal],
        currency: Currency,
    ) -> str:
        """A short coaching note for one savings goal."""
        if not expenses:
            return "Start by adding some expenses so I can help you with your goal!"

        recent = _expenses_for_prompt(expenses[:COACHING_EXPENSE_LIMIT])
        budget_data = {category: float(amount) for category, amount in budgets.items()}

        prompt = f"""You are an AI savings coach. Your tone should be encouraging, insightful, and positive.
The user has the following savings goal:
- Goal: Save for a "{goal.name}"
- Target Amount: {currency.symbol}{goal.target_amount}
- Amount Saved So Far: {currency.symbol}{goal.saved_amount}
- Deadline: {goal.deadline.isoformat()}

Here is their spending and budget data for the current month in {currency.name} ({currency.code}):
- Budgets: {json.dumps(budget_data)}
- Recent Expenses: {json.dumps(recent, indent=2)}

Based on this, provide a short (2-3 sentences) coaching message. Your message should:
1. Acknowledge their goal in a positive way.
2. Provide ONE specific, actionable tip based on their recent spending and budgets.
3. End with an encouraging statement to keep them motivated.
4. Use Markdown for formatting, like using **bold** for key terms."""

        try:
            return await self._generate_text(prompt)
        except Exception as e:
            logger.error("coaching_failed", error=str(e))
            raise AIServiceError("Failed to generate a coaching message at this time.") from e
