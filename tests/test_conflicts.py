"""Tests for the conflict-detection service."""

from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from eventplanner.domain.errors import ConflictError, MalformedTimeError
from eventplanner.domain.models import Event, ScheduleCandidate
from eventplanner.services.conflicts import (
    check_conflict,
    ensure_no_conflict,
    find_conflicts,
)

_DAY = date(2024, 7, 15)


def _make_event(
    start: str, end: str, owner: str = "owner-1", day: date = _DAY, title: str = "Existing"
) -> Event:
    return Event(
        owner_id=owner,
        title=title,
        description="Existing event",
        date=day,
        start_time=start,
        end_time=end,
        location="Room 1",
        category="Work",
    )


def _candidate(
    start: str,
    end: str,
    owner: str = "owner-1",
    day: date = _DAY,
    exclude: str | None = None,
) -> ScheduleCandidate:
    return ScheduleCandidate(
        owner_id=owner,
        date=day,
        start_time=start,
        end_time=end,
        exclude_event_id=exclude,
    )


def test_no_overlap():
    """Events that don't overlap should not be returned as conflicts."""
    existing = [_make_event("08:00", "09:00")]
    assert find_conflicts(_candidate("10:00", "11:00"), existing) == []
    assert check_conflict(_candidate("10:00", "11:00"), existing).ok is True


def test_partial_overlap_reports_message():
    """Owner has 10:00-11:30; booking 11:00-12:00 is rejected."""
    existing = [_make_event("10:00", "11:30")]

    with pytest.raises(ConflictError) as exc_info:
        ensure_no_conflict(_candidate("11:00", "12:00"), existing)

    assert str(exc_info.value) == (
        "Event time conflict: You already have an event scheduled from "
        "10:00 to 11:30 on 7/15/2024. Please choose a different time."
    )
    assert exc_info.value.conflicting_event.id == existing[0].id


def test_exact_boundary_no_conflict():
    """Owner has 10:00-11:30; booking 11:30-12:30 touches but does not overlap."""
    existing = [_make_event("10:00", "11:30")]
    ensure_no_conflict(_candidate("11:30", "12:30"), existing)
    assert find_conflicts(_candidate("09:00", "10:00"), existing) == []


def test_containing_and_contained_ranges_conflict():
    existing = [_make_event("10:00", "11:00")]
    assert find_conflicts(_candidate("09:00", "12:00"), existing) == existing
    assert find_conflicts(_candidate("10:15", "10:45"), existing) == existing
    assert find_conflicts(_candidate("10:00", "11:00"), existing) == existing


def test_other_owners_never_conflict():
    """Identical slots owned by different users coexist."""
    existing = [_make_event("10:00", "11:00", owner="owner-2")]
    assert check_conflict(_candidate("10:00", "11:00"), existing).ok is True


def test_other_days_never_conflict():
    existing = [_make_event("10:00", "11:00", day=date(2024, 7, 16))]
    assert check_conflict(_candidate("10:00", "11:00"), existing).ok is True


def test_excluded_event_is_ignored():
    """An event being updated does not conflict with its own old slot."""
    own = _make_event("09:00", "10:00")
    ensure_no_conflict(_candidate("09:30", "10:30", exclude=own.id), [own])


def test_first_conflict_in_pool_order_is_reported():
    first = _make_event("09:00", "10:30", title="First")
    second = _make_event("10:00", "11:00", title="Second")

    result = check_conflict(_candidate("10:00", "10:30"), [first, second])

    assert result.ok is False
    assert result.conflicting_event.id == first.id
    assert "09:00 to 10:30" in result.message
    assert find_conflicts(_candidate("10:00", "10:30"), [first, second]) == [first, second]


@pytest.mark.parametrize(
    ("a", "b"),
    [
        (("10:00", "11:00"), ("10:30", "11:30")),
        (("10:00", "11:00"), ("11:00", "12:00")),
        (("08:00", "18:00"), ("12:00", "12:01")),
        (("00:00", "00:01"), ("23:00", "23:59")),
    ],
)
def test_overlap_is_symmetric(a, b):
    a_vs_b = check_conflict(_candidate(*a), [_make_event(*b)]).ok
    b_vs_a = check_conflict(_candidate(*b), [_make_event(*a)]).ok
    assert a_vs_b == b_vs_a


def test_validation_is_repeatable():
    existing = [_make_event("10:00", "11:30")]
    candidate = _candidate("11:00", "12:00")
    assert check_conflict(candidate, existing) == check_conflict(candidate, existing)


def test_malformed_candidate_time():
    with pytest.raises(MalformedTimeError):
        check_conflict(_candidate("25:00", "26:00"), [])


def test_concurrent_checks_share_a_pool_consistently():
    pool = [
        _make_event("09:00", "10:00", title="Standup"),
        _make_event("12:00", "13:00", title="Lunch"),
        _make_event("09:00", "17:00", owner="owner-2"),
    ]
    cases = [
        (_candidate("09:30", "10:30"), "09:00"),
        (_candidate("10:00", "12:00"), None),
        (_candidate("12:30", "14:00"), "12:00"),
        (_candidate("11:00", "12:00", owner="owner-2"), "09:00"),
        (_candidate("09:00", "10:00", exclude=pool[0].id), None),
    ] * 40

    def run(case):
        candidate, _ = case
        result = check_conflict(candidate, pool)
        return result.conflicting_event.start_time if result.conflicting_event else None

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(run, cases))

    assert results == [expected for _, expected in cases]
    assert len(pool) == 3
