"""Tests for time-of-day and calendar-date normalization."""

from datetime import date, datetime

import pytest

from eventplanner.domain.errors import InvalidTimeRangeError, MalformedTimeError
from eventplanner.services.timeparse import (
    TimeWindow,
    coerce_calendar_date,
    format_display_date,
    format_time_of_day,
    normalize_time_of_day,
    parse_time_of_day,
)


@pytest.mark.parametrize(
    ("raw", "minutes"),
    [("00:00", 0), ("09:05", 545), ("10:00", 600), ("23:59", 1439)],
)
def test_parse_valid_times(raw, minutes):
    assert parse_time_of_day(raw) == minutes


@pytest.mark.parametrize(
    "raw", ["25:00", "24:00", "12:60", "9:30", "0930", "ab:cd", "", "12:00:00", "١٠:٠٠", None, 930]
)
def test_parse_rejects_malformed(raw):
    with pytest.raises(MalformedTimeError):
        parse_time_of_day(raw)


def test_malformed_time_is_a_value_error():
    """Callers catching ValueError also see malformed times."""
    with pytest.raises(ValueError):
        parse_time_of_day("25:00")


def test_format_and_normalize():
    assert format_time_of_day(545) == "09:05"
    assert normalize_time_of_day(" 07:30 ") == "07:30"
    with pytest.raises(ValueError):
        format_time_of_day(1440)


def test_window_rejects_inverted_and_empty_ranges():
    with pytest.raises(InvalidTimeRangeError):
        TimeWindow.from_strings("11:00", "10:00")
    with pytest.raises(InvalidTimeRangeError):
        TimeWindow.from_strings("10:00", "10:00")


def test_window_overlap_is_half_open():
    morning = TimeWindow.from_strings("10:00", "11:00")
    assert not morning.overlaps(TimeWindow.from_strings("11:00", "12:00"))
    assert morning.overlaps(TimeWindow.from_strings("10:59", "12:00"))
    assert morning.overlaps(TimeWindow.from_strings("10:15", "10:45"))


@pytest.mark.parametrize(
    "raw",
    [
        "2024-07-15",
        "2024-07-15T08:30:00",
        "July 15, 2024",
        "7/15/2024",
        date(2024, 7, 15),
        datetime(2024, 7, 15, 23, 0),
    ],
)
def test_coerce_calendar_date(raw):
    assert coerce_calendar_date(raw) == date(2024, 7, 15)


@pytest.mark.parametrize("raw", ["", "   ", "not a date", 20240715])
def test_coerce_calendar_date_rejects_garbage(raw):
    with pytest.raises(ValueError):
        coerce_calendar_date(raw)


def test_display_date_has_no_padding():
    assert format_display_date(date(2024, 7, 5)) == "7/5/2024"
    assert format_display_date(date(2024, 12, 25)) == "12/25/2024"
