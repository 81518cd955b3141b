"""Tests for date normalisation used by book dates."""

from datetime import date, datetime

import pytest

from app.utils.dates import to_calendar_date


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1965-08-01", date(1965, 8, 1)),
        ("1965-08-01T15:30:00Z", date(1965, 8, 1)),
        ("1965-08-01T23:59:59+02:00", date(1965, 8, 1)),
        (datetime(1965, 8, 1, 15, 30), date(1965, 8, 1)),
        (date(1965, 8, 1), date(1965, 8, 1)),
    ],
)
def test_time_of_day_is_dropped(value, expected):
    assert to_calendar_date(value) == expected


@pytest.mark.parametrize("value", [None, "", "   "])
def test_blank_values_are_none(value):
    assert to_calendar_date(value) is None


@pytest.mark.parametrize("value", ["yesterday", "1965-13-01", "01/08/1965", 1965])
def test_invalid_values_raise(value):
    with pytest.raises(ValueError):
        to_calendar_date(value)
