from datetime import date, datetime
from decimal import Decimal

from library_api.services.fine_calculator import calculate_fine, days_late


def test_return_on_due_date_is_free():
    assert days_late(date(2024, 3, 10), date(2024, 3, 10)) == 0
    assert calculate_fine(date(2024, 3, 10), date(2024, 3, 10)) == Decimal("0")


def test_early_return_is_free():
    assert calculate_fine(date(2024, 3, 10), date(2024, 3, 1)) == Decimal("0")


def test_three_days_late():
    assert days_late(date(2024, 3, 10), date(2024, 3, 13)) == 3
    assert calculate_fine(date(2024, 3, 10), date(2024, 3, 13)) == Decimal("3000")


def test_time_of_day_is_ignored():
    due = date(2024, 3, 10)
    assert days_late(due, datetime(2024, 3, 10, 23, 59)) == 0
    assert days_late(due, datetime(2024, 3, 11, 0, 1)) == 1


def test_custom_rate():
    assert calculate_fine(date(2024, 1, 31), date(2024, 2, 2), per_day=Decimal("250.50")) == Decimal("501.00")
    assert calculate_fine(date(2024, 1, 31), date(2024, 2, 2), per_day=500) == Decimal("1000")
