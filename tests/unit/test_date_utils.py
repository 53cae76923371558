"""
Unit tests for date utility functions.
"""

from datetime import date, datetime, timezone

import pytest

from guideconnect.utils.date_utils import (
    MONTH_NAMES,
    add_months,
    month_start,
    month_window,
    ranges_overlap,
    utc_now,
)


class TestMonthStart:
    def test_truncates_to_first_day(self):
        assert month_start(datetime(2026, 3, 17, 15, 30, 12, 500)) == datetime(2026, 3, 1)

    def test_keeps_timezone(self):
        result = month_start(datetime(2026, 3, 17, tzinfo=timezone.utc))
        assert result.tzinfo == timezone.utc


class TestAddMonths:
    @pytest.mark.parametrize(
        "start, months, expected",
        [
            (datetime(2026, 1, 1), -1, datetime(2025, 12, 1)),
            (datetime(2026, 12, 1), 1, datetime(2027, 1, 1)),
            (datetime(2026, 5, 1), 0, datetime(2026, 5, 1)),
            (datetime(2026, 5, 1), -17, datetime(2024, 12, 1)),
        ],
    )
    def test_shift(self, start, months, expected):
        assert add_months(start, months) == expected


class TestMonthWindow:
    def test_mid_year(self):
        window = month_window(datetime(2026, 10, 19, 8, tzinfo=timezone.utc))

        assert window.last_month_start == datetime(2026, 9, 1, tzinfo=timezone.utc)
        assert window.this_month_start == datetime(2026, 10, 1, tzinfo=timezone.utc)
        assert window.next_month_start == datetime(2026, 11, 1, tzinfo=timezone.utc)

    def test_unpacks_as_this_next_last(self):
        this_start, next_start, last_start = month_window(datetime(2026, 10, 19, 8))

        assert this_start == datetime(2026, 10, 1)
        assert next_start == datetime(2026, 11, 1)
        assert last_start == datetime(2026, 9, 1)

    def test_january_rolls_back_a_year(self):
        window = month_window(datetime(2027, 1, 5))

        assert window.last_month_start == datetime(2026, 12, 1)
        assert window.next_month_start == datetime(2027, 2, 1)

    def test_defaults_to_now(self):
        window = month_window()
        now = utc_now()

        assert window.this_month_start <= now < window.next_month_start


class TestRangesOverlap:
    def test_shared_boundary_day(self):
        assert ranges_overlap(date(2026, 5, 1), date(2026, 5, 10), date(2026, 5, 10), date(2026, 5, 12))

    def test_contained(self):
        assert ranges_overlap(date(2026, 5, 1), date(2026, 5, 31), date(2026, 5, 10), date(2026, 5, 12))

    def test_disjoint(self):
        assert not ranges_overlap(date(2026, 5, 1), date(2026, 5, 9), date(2026, 5, 10), date(2026, 5, 12))


def test_month_names():
    assert len(MONTH_NAMES) == 12
    assert MONTH_NAMES[0] == "Jan"
    assert MONTH_NAMES[11] == "Dec"
