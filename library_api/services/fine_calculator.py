"""Late-return fine arithmetic.

Pure functions, no database access. Days are counted on the calendar: any
time component is dropped before comparing, so a return later on the due
date itself is on time and a return on the next calendar day is one day late.
"""
from datetime import date, datetime
from decimal import Decimal

DEFAULT_FINE_PER_DAY = Decimal("1000")


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def days_late(due_date, return_date) -> int:
    due, returned = _as_date(due_date), _as_date(return_date)
    if returned <= due:
        return 0
    return (returned - due).days


def calculate_fine(due_date, return_date, per_day=DEFAULT_FINE_PER_DAY) -> Decimal:
    return Decimal(days_late(due_date, return_date)) * Decimal(str(per_day))
