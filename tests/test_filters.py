"""Tests for period filtering and category aggregation."""

from datetime import date

import pytest

from common.exceptions import ValidationError
from common.models import Expense, FilterMode
from common.services import compute_totals, filter_expenses, week_start


def _expense(expense_id, amount, category, day):
    return Expense(id=expense_id, amount=amount, category=category, date=day)


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2024, 5, 15), date(2024, 5, 12)),  # Wednesday
        (date(2024, 5, 12), date(2024, 5, 12)),  # Sunday is day 0
        (date(2024, 5, 18), date(2024, 5, 12)),  # Saturday
        (date(2024, 3, 2), date(2024, 2, 25)),  # crosses a month boundary
    ],
)
def test_week_start_is_previous_sunday(today, expected):
    assert week_start(today) == expected


class TestFilterExpenses:
    def setup_method(self):
        self.records = [
            _expense(4, 1.0, "A", date(2024, 5, 15)),
            _expense(3, 2.0, "B", date(2024, 5, 12)),
            _expense(2, 4.0, "C", date(2024, 5, 11)),
            _expense(1, 8.0, "D", date(2024, 4, 30)),
        ]

    def test_all_is_identity(self, today):
        assert filter_expenses(self.records, FilterMode.ALL, today) == self.records

    def test_week_keeps_records_since_sunday(self, today):
        kept = filter_expenses(self.records, "WEEK", today)
        assert [expense.id for expense in kept] == [4, 3]

    def test_month_keeps_current_month_only(self, today):
        kept = filter_expenses(self.records, "month", today)
        assert [expense.id for expense in kept] == [4, 3, 2]

    def test_month_requires_matching_year(self, today):
        last_year = [_expense(9, 1.0, "A", date(2023, 5, 15))]
        assert filter_expenses(last_year, FilterMode.MONTH, today) == []

    def test_month_includes_a_record_dated_today(self, today):
        assert filter_expenses([_expense(1, 1.0, "A", today)], FilterMode.MONTH, today)

    def test_unknown_mode_raises(self, today):
        with pytest.raises(ValidationError):
            filter_expenses(self.records, "YEAR", today)


class TestTotals:
    def test_empty(self):
        totals = compute_totals([])
        assert totals.total == 0.0
        assert totals.by_category == {}

    def test_category_sums_partition_total(self):
        records = [
            _expense(1, 10.5, "Food", date(2024, 5, 1)),
            _expense(2, 2.25, "Bus", date(2024, 5, 2)),
            _expense(3, 4.0, "Food", date(2024, 5, 3)),
            _expense(4, -1.5, "Bus", date(2024, 5, 4)),
        ]
        totals = compute_totals(records)
        assert totals.total == 15.25
        assert totals.by_category == {"Food": 14.5, "Bus": 0.75}
        assert sum(totals.by_category.values()) == totals.total

    def test_week_example(self, today):
        records = [
            _expense(2, 5.0, "Food", today),
            _expense(1, 10.0, "Food", date(2024, 1, 1)),
        ]
        totals = compute_totals(filter_expenses(records, FilterMode.WEEK, today))
        assert totals.total == 5.0
        assert totals.by_category == {"Food": 5.0}


def test_store_filter_uses_injected_clock(store, today):
    store.create("3", "Food", date=today.isoformat())
    store.create("7", "Rent", date="2024-04-01")
    visible = store.filter(store.list(), FilterMode.MONTH)
    assert [expense.category for expense in visible] == ["Food"]
    assert store.totals(visible).total == 3.0


def test_store_filter_accepts_explicit_today(store):
    store.create("7", "Rent", date="2024-04-01")
    assert len(store.filter(store.list(), "MONTH", today=date(2024, 4, 20))) == 1
