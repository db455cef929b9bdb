"""Tests for the shared input validators."""

from datetime import date, datetime

import pytest

from common.exceptions import ValidationError
from common.validators import (
    parse_amount,
    validate_date,
    validate_expense_fields,
    validate_optional_str,
    validate_required_str,
)

TODAY = date(2024, 5, 15)


class TestParseAmount:
    @pytest.mark.parametrize(
        "raw, expected",
        [("12.5", 12.5), (" 7 ", 7.0), ("1,250.75", 1250.75), (3, 3.0), (-4.2, -4.2), ("0", 0.0)],
    )
    def test_accepts_numeric_input(self, raw, expected):
        assert parse_amount(raw, "amount") == expected

    def test_keeps_full_precision(self):
        assert parse_amount("0.123456789", "amount") == 0.123456789

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "12abc", True, "nan", "inf", object(), 10**400])
    def test_rejects_missing_or_unparseable(self, raw):
        with pytest.raises(ValidationError):
            parse_amount(raw, "amount")


class TestStrings:
    def test_required_string_is_trimmed(self):
        assert validate_required_str("  Food ", "category") == "Food"

    @pytest.mark.parametrize("value", ["", "   ", None, 5])
    def test_required_string_rejects_blank_and_non_strings(self, value):
        with pytest.raises(ValidationError):
            validate_required_str(value, "category")

    def test_strings_have_no_length_limit(self):
        assert validate_required_str("C" * 51, "category") == "C" * 51
        assert validate_optional_str("x" * 201, "note") == "x" * 201

    def test_optional_string_collapses_blank_to_none(self):
        assert validate_optional_str(None, "note") is None
        assert validate_optional_str("   ", "note") is None
        assert validate_optional_str(" lunch ", "note") == "lunch"


class TestValidateDate:
    def test_defaults_to_today(self):
        assert validate_date(None, "date", default=TODAY) == TODAY
        assert validate_date("  ", "date", default=TODAY) == TODAY

    def test_accepts_dates_and_iso_strings(self):
        assert validate_date(date(2024, 1, 2), "date", default=TODAY) == date(2024, 1, 2)
        assert validate_date(datetime(2024, 1, 2, 8, 30), "date", default=TODAY) == date(2024, 1, 2)
        assert validate_date("2024-02-29", "date", default=TODAY) == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2024-13-01", "yesterday", 20240101, "2024-01-01garbage", "20240101", "2024-1-1"])
    def test_rejects_invalid_dates(self, value):
        with pytest.raises(ValidationError):
            validate_date(value, "date", default=TODAY)


def test_validate_expense_fields_normalises_everything():
    fields = validate_expense_fields("9.99", " Food ", " ", None, today=TODAY)
    assert fields == {"amount": 9.99, "category": "Food", "note": None, "date": TODAY}
