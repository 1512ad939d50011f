"""Tests for the recurring expense projector."""

import pytest
from datetime import date
from decimal import Decimal

from spendwise.models import Frequency, RecurringExpense
from spendwise.recurring import advance, due_dates, generate_due_expenses


def netflix(**overrides):
    fields = dict(
        name="Netflix",
        category="Entertainment",
        price=15,
        frequency=Frequency.MONTHLY,
        start_date=date(2024, 1, 15),
    )
    fields.update(overrides)
    return RecurringExpense.create(**fields)


class TestAdvance:
    """Tests for single-period steps."""

    def test_weekly(self):
        assert advance(date(2024, 1, 1), Frequency.WEEKLY) == date(2024, 1, 8)

    def test_monthly_clamps_to_month_end(self):
        assert advance(date(2024, 1, 31), Frequency.MONTHLY) == date(2024, 2, 29)

    def test_yearly_from_leap_day(self):
        assert advance(date(2024, 2, 29), Frequency.YEARLY) == date(2025, 2, 28)


class TestGenerateDueExpenses:
    """Tests for materializing due occurrences."""

    def test_netflix_catch_up(self):
        """Monthly from Jan 15, checked on Apr 20: four occurrences."""
        item = netflix()
        result = generate_due_expenses([item], date(2024, 1, 14), date(2024, 4, 20))

        assert [e.date for e in result.due_expenses] == [
            date(2024, 1, 15),
            date(2024, 2, 15),
            date(2024, 3, 15),
            date(2024, 4, 15),
        ]
        assert all(e.price == Decimal("15.00") for e in result.due_expenses)
        assert all(e.name == "Netflix" for e in result.due_expenses)
        assert result.updated_recurring_expenses[0].last_added_date == date(2024, 4, 15)
        assert result.count == 4

    def test_drafts_have_no_split_group(self):
        result = generate_due_expenses([netflix()], date(2024, 1, 14), date(2024, 1, 20))
        assert result.due_expenses[0].split_group_id is None

    def test_future_start_yields_nothing(self):
        """A definition starting after today is left untouched."""
        item = netflix(start_date=date(2024, 5, 1))
        result = generate_due_expenses([item], date(2024, 4, 1), date(2024, 4, 20))

        assert result.due_expenses == []
        assert result.updated_recurring_expenses[0].last_added_date == date(2024, 4, 30)

    def test_start_today_is_due(self):
        item = netflix(start_date=date(2024, 4, 20))
        result = generate_due_expenses([item], date(2024, 4, 19), date(2024, 4, 20))
        assert [e.date for e in result.due_expenses] == [date(2024, 4, 20)]

    def test_same_inputs_give_same_output(self):
        """Without persisting the watermark, a second call repeats the result."""
        item = netflix()
        first = generate_due_expenses([item], date(2024, 1, 14), date(2024, 4, 20))
        second = generate_due_expenses([item], date(2024, 1, 14), date(2024, 4, 20))

        assert [e.date for e in first.due_expenses] == [e.date for e in second.due_expenses]

    def test_advanced_watermark_prevents_duplicates(self):
        item = netflix()
        first = generate_due_expenses([item], date(2024, 1, 14), date(2024, 4, 20))
        second = generate_due_expenses(
            first.updated_recurring_expenses, date(2024, 4, 20), date(2024, 4, 25)
        )
        assert second.due_expenses == []

    def test_input_is_not_mutated(self):
        item = netflix()
        generate_due_expenses([item], date(2024, 1, 14), date(2024, 4, 20))
        assert item.last_added_date == date(2024, 1, 14)

    def test_watermark_mid_series(self):
        """Only occurrences after the watermark are emitted."""
        item = netflix().model_copy(update={"last_added_date": date(2024, 2, 15)})
        result = generate_due_expenses([item], date(2024, 2, 15), date(2024, 4, 20))
        assert [e.date for e in result.due_expenses] == [date(2024, 3, 15), date(2024, 4, 15)]

    @pytest.mark.parametrize(
        "frequency,start,today,expected",
        [
            (Frequency.WEEKLY, date(2024, 1, 1), date(2024, 1, 31), 5),
            (Frequency.MONTHLY, date(2023, 11, 10), date(2024, 2, 20), 4),
            (Frequency.YEARLY, date(2022, 3, 1), date(2024, 6, 1), 3),
        ],
    )
    def test_occurrence_count(self, frequency, start, today, expected):
        item = netflix(frequency=frequency, start_date=start)
        dates = due_dates(item, today)

        assert len(dates) == expected
        assert dates[0] == start
        for earlier, later in zip(dates, dates[1:]):
            assert advance(earlier, frequency) == later

    def test_month_end_clamp_carries_forward(self):
        """Jan 31 monthly steps from each previous occurrence."""
        item = netflix(start_date=date(2024, 1, 31))
        assert due_dates(item, date(2024, 4, 30)) == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 29),
            date(2024, 4, 29),
        ]

    def test_multiple_definitions(self):
        items = [
            netflix(),
            netflix(name="Gym", category="Health", price=30, frequency=Frequency.WEEKLY,
                    start_date=date(2024, 4, 6)),
        ]
        result = generate_due_expenses(items, date(2024, 1, 1), date(2024, 4, 20))

        assert result.count == 4 + 3
        assert [r.name for r in result.updated_recurring_expenses] == ["Netflix", "Gym"]
        assert result.updated_recurring_expenses[1].last_added_date == date(2024, 4, 20)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
