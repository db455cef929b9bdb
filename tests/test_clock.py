"""Tests for the injectable date sources."""

from datetime import date

from common.clock import fixed_clock


def test_fixed_clock_always_reports_its_day():
    clock = fixed_clock(date(2024, 2, 29))
    assert clock() == clock() == date(2024, 2, 29)


def test_store_reads_today_from_its_clock(store, today):
    assert store.today() == today
