"""Date manipulation utilities for monthly rent due days"""

import calendar
from datetime import date, datetime, timezone
from typing import Optional

from rent_reminder.domain.exceptions import InvariantViolation


def to_date(value: date) -> date:
    """Drop the time-of-day component (datetimes are dates too)

    Aware datetimes are read as UTC dates; naive ones are taken as already UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def is_same_day(first: Optional[date], second: date) -> bool:
    """True when both values fall on the same calendar day"""
    if first is None:
        return False
    return to_date(first) == to_date(second)


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _check_due_day(due_day: int) -> None:
    if not 1 <= due_day <= 31:
        raise InvariantViolation(f"rent due day must be between 1 and 31, got {due_day}")


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def due_date_in_month(due_day: int, year: int, month: int) -> date:
    """
    Effective due date for a given month.

    A due day that does not exist in the month (31 in April, 29-31 in a
    non-leap February) degrades to the month's last day instead of
    rolling over into the next month.
    """
    _check_due_day(due_day)
    return date(year, month, min(due_day, last_day_of_month(year, month)))


def next_due_date(due_day: int, today: date) -> date:
    """Nearest effective due date on or after today"""
    today = to_date(today)
    candidate = due_date_in_month(due_day, today.year, today.month)
    if candidate < today:
        year, month = _shift_month(today.year, today.month, 1)
        candidate = due_date_in_month(due_day, year, month)
    return candidate


def previous_due_date(due_day: int, today: date) -> date:
    """Nearest effective due date on or before today"""
    today = to_date(today)
    candidate = due_date_in_month(due_day, today.year, today.month)
    if candidate > today:
        year, month = _shift_month(today.year, today.month, -1)
        candidate = due_date_in_month(due_day, year, month)
    return candidate


def days_until_due(due_day: int, today: date) -> int:
    """
    Whole days until the next occurrence of a monthly due day.

    Returns 0 when today is the (possibly degraded) due date.

    Example:
        days_until_due(31, date(2023, 2, 15)) -> 13 (Feb 28)
        days_until_due(31, date(2024, 2, 15)) -> 14 (Feb 29, leap year)
    """
    today = to_date(today)
    return (next_due_date(due_day, today) - today).days


def days_past_due(due_day: int, today: date) -> int:
    """
    Whole days since the most recent occurrence of a monthly due day.

    Example:
        days_past_due(31, date(2024, 4, 2)) -> 2 (Mar 31)
        days_past_due(31, date(2024, 5, 1)) -> 1 (Apr 30)
    """
    today = to_date(today)
    return (today - previous_due_date(due_day, today)).days

