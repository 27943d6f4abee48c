"""Helpers for normalizing time-of-day strings and calendar dates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime

import dateparser

from eventplanner.domain.errors import InvalidTimeRangeError, MalformedTimeError

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^([0-9]{2}):([0-9]{2})$")

_DATE_SETTINGS = {
    "DATE_ORDER": "MDY",
    "PREFER_DAY_OF_MONTH": "first",
    "RETURN_AS_TIMEZONE_AWARE": False,
    "STRICT_PARSING": True,
}


def parse_time_of_day(value: object) -> int:
    """Convert ``"HH:MM"`` into minutes since midnight.

    Hours must be 00-23 and minutes 00-59, both zero-padded.  Raises
    ``MalformedTimeError`` for anything else, including non-strings.
    """
    if not isinstance(value, str):
        raise MalformedTimeError(value)
    match = _TIME_RE.match(value.strip())
    if match is None:
        raise MalformedTimeError(value)
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise MalformedTimeError(value)
    return hours * 60 + minutes


def format_time_of_day(minutes: int) -> str:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time_of_day(value: object) -> str:
    """Return the canonical ``HH:MM`` spelling of *value*."""
    return format_time_of_day(parse_time_of_day(value))


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval ``[start, end)`` in minutes since midnight."""

    start: int
    end: int

    @classmethod
    def from_strings(cls, start_time: str, end_time: str) -> TimeWindow:
        start = parse_time_of_day(start_time)
        end = parse_time_of_day(end_time)
        if start >= end:
            raise InvalidTimeRangeError(start_time, end_time)
        return cls(start=start, end=end)

    def overlaps(self, other: TimeWindow) -> bool:
        # Touching boundaries (self.end == other.start) do not overlap.
        return self.start < other.end and self.end > other.start


def coerce_calendar_date(value: object) -> date:
    """Coerce *value* into a calendar date.

    Accepts ``date``/``datetime`` objects, ISO strings (``2024-07-15``) and
    looser human spellings such as ``"July 15, 2024"`` or ``"7/15/2024"``,
    which are handed to ``dateparser``.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid date: {value!r}")

    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        pass

    parsed = dateparser.parse(raw, settings=_DATE_SETTINGS)
    if parsed is None:
        raise ValueError(f"Invalid date: {value!r}")
    return parsed.date()


def format_display_date(day: date) -> str:
    """Render *day* as ``M/D/YYYY`` (no zero padding)."""
    return f"{day.month}/{day.day}/{day.year}"
