"""
Tests for calendar-day helpers.
"""

from datetime import date, datetime, timezone

import pytest

from core.utils.datetime import as_date, days_inclusive, in_date_range, parse_date


class TestParseDate:

    @pytest.mark.parametrize("text,expected", [
        ("2024-03-15", date(2024, 3, 15)),
        ("2024-03-15T10:30:00", date(2024, 3, 15)),
        ("2024-03-15T10:30:00.000Z", date(2024, 3, 15)),
        ("03/15/2024", date(2024, 3, 15)),
        ("15/03/2024", date(2024, 3, 15)),
        ("2024/03/15", date(2024, 3, 15)),
        ("  2024-03-15 ", date(2024, 3, 15)),
        ("", None),
        ("next tuesday", None),
    ])
    def test_formats(self, text, expected):
        assert parse_date(text) == expected


class TestAsDate:

    def test_datetime_reduced_to_day(self):
        assert as_date(datetime(2024, 3, 15, 23, 59)) == date(2024, 3, 15)

    def test_aware_datetime_keeps_its_own_day(self):
        assert as_date(datetime(2024, 3, 15, 23, 0, tzinfo=timezone.utc)) == date(2024, 3, 15)

    def test_date_and_string(self):
        assert as_date(date(2024, 3, 15)) == date(2024, 3, 15)
        assert as_date("2024-03-15") == date(2024, 3, 15)

    @pytest.mark.parametrize("value", [None, 20240315, object()])
    def test_unsupported(self, value):
        assert as_date(value) is None


class TestDaysInclusive:

    @pytest.mark.parametrize("start,end,expected", [
        (date(2024, 3, 1), date(2024, 3, 1), 1),
        (date(2024, 3, 1), date(2024, 3, 3), 3),
        (datetime(2024, 2, 28, 18), datetime(2024, 3, 1, 9), 3),
        (None, date(2024, 3, 1), 0),
        (date(2024, 3, 1), None, 0),
    ])
    def test_days(self, start, end, expected):
        assert days_inclusive(start, end) == expected


class TestInDateRange:

    def test_no_bounds_accepts_anything(self):
        assert in_date_range(None)
        assert in_date_range(datetime(1999, 1, 1))

    def test_bounds_are_inclusive(self):
        start, end = date(2024, 3, 1), date(2024, 3, 31)
        assert in_date_range(datetime(2024, 3, 1, 0, 0), start, end)
        assert in_date_range(datetime(2024, 3, 31, 23, 59), start, end)
        assert not in_date_range(datetime(2024, 4, 1), start, end)
        assert not in_date_range(datetime(2024, 2, 29, 23, 59), start, end)

    def test_open_ended_ranges(self):
        assert in_date_range(date(2030, 1, 1), start=date(2024, 1, 1))
        assert in_date_range(date(2000, 1, 1), end=date(2024, 1, 1))

    def test_missing_value_fails_when_bounded(self):
        assert not in_date_range(None, start=date(2024, 1, 1))
        assert not in_date_range("not a date", end=date(2024, 1, 1))

    def test_string_bounds(self):
        assert in_date_range("2024-03-15", "2024-03-01", "2024-03-31")
