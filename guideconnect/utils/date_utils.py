"""
Date utility functions for Nepal Guide Connect.

Calendar-month windows for month-over-month statistics, and date range
helpers used for booking availability checks.
"""

from datetime import date, datetime, timezone
from typing import NamedTuple

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class MonthWindow(NamedTuple):
    """Boundaries of the current and previous calendar month (half-open ranges)."""

    this_month_start: datetime
    next_month_start: datetime
    last_month_start: datetime


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def month_start(value: datetime) -> datetime:
    """
    Midnight on the first day of the month containing ``value``.

    Examples:
        >>> month_start(datetime(2026, 3, 17, 15, 30))
        datetime.datetime(2026, 3, 1, 0, 0)
    """
    return value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def add_months(value: datetime, months: int) -> datetime:
    """
    Shift a first-of-month datetime by a number of months.

    Args:
        value: A datetime on day 1 (as returned by month_start)
        months: Months to add, may be negative

    Examples:
        >>> add_months(datetime(2026, 1, 1), -1)
        datetime.datetime(2025, 12, 1, 0, 0)
    """
    index = value.year * 12 + (value.month - 1) + months
    return value.replace(year=index // 12, month=index % 12 + 1)


def month_window(now: datetime | None = None) -> MonthWindow:
    """
    Get the current, next and previous month boundaries for ``now``.

    Args:
        now: Reference time (defaults to the current UTC time)

    Returns:
        MonthWindow(this_month_start, next_month_start, last_month_start)
    """
    current = month_start(now or utc_now())
    return MonthWindow(
        this_month_start=current,
        next_month_start=add_months(current, 1),
        last_month_start=add_months(current, -1),
    )


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """
    Whether two inclusive date ranges share at least one day.

    Examples:
        >>> ranges_overlap(date(2026, 5, 1), date(2026, 5, 10), date(2026, 5, 10), date(2026, 5, 12))
        True
    """
    return start_a <= end_b and start_b <= end_a
