"""
Tests for the Gemini service.

The model is replaced by FakeModel, so nothing here talks to the network.
"""

import pytest
from datetime import date
from decimal import Decimal

from conftest import FakeModel, make_expense

from spendwise.models import SavingsGoal, get_currency
from spendwise.services.ai import (
    AIServiceError,
    GeminiExpenseService,
    InsufficientDataError,
    parse_json_array,
)


CATEGORIES = ["Food", "Groceries", "Transport", "Other"]
USD = get_currency("USD")


def recent(count):
    return [
        make_expense(f"Item {i}", "Food", 10 + i, date(2024, 5, 1 + i))
        for i in range(count)
    ]


class TestParseJsonArray:

    def test_plain_array(self):
        assert parse_json_array('[{"a": 1}]') == [{"a": 1}]

    def test_strips_code_fences(self):
        assert parse_json_array('```json\n[{"a": 1}]\n```') == [{"a": 1}]

    def test_empty(self):
        with pytest.raises(AIServiceError, match="empty response"):
            parse_json_array("   ")

    def test_not_json(self):
        with pytest.raises(AIServiceError, match="invalid response"):
            parse_json_array("Sorry, I can't read that.")

    def test_not_an_array(self):
        with pytest.raises(AIServiceError, match="expected format"):
            parse_json_array('{"name": "Milk"}')


class TestReceiptExtraction:
    """Tests for turning a receipt image into line items."""

    @pytest.mark.asyncio
    async def test_items_are_validated_and_coerced(self):
        model = FakeModel(text="""```json
[
  {"name": "Bananas", "category": "Groceries", "price": 1.29},
  {"name": "Batteries", "category": "Electronics", "price": 4.5},
  {"name": "", "category": "Food", "price": 2},
  {"name": "Refund", "category": "Other", "price": -3},
  {"name": "Mystery", "category": "Food", "price": "abc"},
  "not an object"
]
```""")
        service = GeminiExpenseService(model=model)

        items = await service.extract_expenses_from_receipt(b"img", "image/jpeg", CATEGORIES)

        assert [(i.name, i.category, i.price) for i in items] == [
            ("Bananas", "Groceries", Decimal("1.29")),
            ("Batteries", "Other", Decimal("4.50")),
        ]
        contents, kwargs = model.calls[0]
        assert contents[0] == {"mime_type": "image/jpeg", "data": b"img"}
        assert "Food, Groceries, Transport, Other" in contents[1]
        assert "generation_config" in kwargs

    @pytest.mark.asyncio
    async def test_empty_response(self):
        service = GeminiExpenseService(model=FakeModel(text=""))
        with pytest.raises(AIServiceError, match="The receipt might be unclear"):
            await service.extract_expenses_from_receipt(b"img", "image/jpeg", CATEGORIES)

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        service = GeminiExpenseService(model=FakeModel(text="I see a receipt!"))
        with pytest.raises(AIServiceError, match="Please try a clearer receipt image"):
            await service.extract_expenses_from_receipt(b"img", "image/jpeg", CATEGORIES)

    @pytest.mark.asyncio
    async def test_model_failure(self):
        service = GeminiExpenseService(model=FakeModel(error=RuntimeError("quota")))
        with pytest.raises(AIServiceError, match="Failed to analyze the receipt"):
            await service.extract_expenses_from_receipt(b"img", "image/jpeg", CATEGORIES)

    @pytest.mark.asyncio
    async def test_out_of_range_price_is_dropped(self):
        model = FakeModel(text='[{"name": "Car", "category": "Transport", "price": 1e30}, '
                               '{"name": "Bread", "category": "Food", "price": 2}]')
        service = GeminiExpenseService(model=model)

        items = await service.extract_expenses_from_receipt(b"img", "image/jpeg", CATEGORIES)

        assert [(i.name, i.price) for i in items] == [("Bread", Decimal("2.00"))]


class TestBudgetSuggestions:
    """Tests for AI budget suggestions."""

    @pytest.mark.asyncio
    async def test_too_few_expenses_skips_the_model(self):
        model = FakeModel(text="[]")
        service = GeminiExpenseService(model=model)

        with pytest.raises(InsufficientDataError):
            await service.generate_budget_suggestions(recent(4), CATEGORIES, USD)
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_suggestions_are_filtered_and_rounded(self):
        model = FakeModel(text="""[
            {"category": "Food", "budget": 149.5},
            {"category": "Transport", "budget": 80},
            {"category": "Pets", "budget": 40},
            {"category": "Groceries", "budget": -10},
            {"category": "Other", "budget": "lots"},
            {"category": "Other", "budget": true},
            {"category": "Other", "budget": 1e30}
        ]""")
        service = GeminiExpenseService(model=model)

        suggestions = await service.generate_budget_suggestions(recent(5), CATEGORIES, USD)

        assert suggestions == {"Food": Decimal("150"), "Transport": Decimal("80")}

    @pytest.mark.asyncio
    async def test_model_failure(self):
        service = GeminiExpenseService(model=FakeModel(error=RuntimeError("down")))
        with pytest.raises(AIServiceError):
            await service.generate_budget_suggestions(recent(5), CATEGORIES, USD)


class TestFreeText:
    """Tests for insights and coaching."""

    @pytest.mark.asyncio
    async def test_insights_without_expenses(self):
        model = FakeModel(text="unused")
        service = GeminiExpenseService(model=model)

        assert await service.generate_insights([], USD) == "There are no expenses to analyze."
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_insights(self):
        model = FakeModel(text="  You spend most on **Food**.  ")
        service = GeminiExpenseService(model=model)

        text = await service.generate_insights(recent(3), USD)

        assert text == "You spend most on **Food**."
        assert "US Dollar (USD)" in model.calls[0][0]

    @pytest.mark.asyncio
    async def test_insights_failure(self):
        service = GeminiExpenseService(model=FakeModel(error=RuntimeError("down")))
        with pytest.raises(AIServiceError, match="Failed to generate financial insights"):
            await service.generate_insights(recent(3), USD)

    @pytest.mark.asyncio
    async def test_coaching_without_expenses(self):
        goal = SavingsGoal(name="Bike", target_amount=500, deadline=date(2024, 12, 1))
        service = GeminiExpenseService(model=FakeModel(text="unused"))

        message = await service.generate_coaching_message(goal, [], {}, USD)

        assert message == "Start by adding some expenses so I can help you with your goal!"

    @pytest.mark.asyncio
    async def test_coaching_uses_recent_expenses_only(self):
        goal = SavingsGoal(name="Bike", target_amount=500, deadline=date(2024, 12, 1))
        model = FakeModel(text="Keep going!")
        service = GeminiExpenseService(model=model)
        expenses = [make_expense(f"Coffee {i}", "Food", 3, date(2024, 5, 1)) for i in range(25)]

        message = await service.generate_coaching_message(
            goal, expenses, {"Food": Decimal("100")}, USD
        )

        prompt = model.calls[0][0]
        assert message == "Keep going!"
        assert '"Coffee 19"' in prompt
        assert '"Coffee 20"' not in prompt
        assert 'Save for a "Bike"' in prompt


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
