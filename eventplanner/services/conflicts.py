"""Service for detecting scheduling conflicts between events."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from eventplanner.domain.errors import ConflictError
from eventplanner.domain.models import (
    ConflictCheck,
    ConflictingEvent,
    Event,
    ScheduleCandidate,
)
from eventplanner.services.timeparse import TimeWindow

logger = logging.getLogger(__name__)


def _comparable(candidate: ScheduleCandidate, event: Event) -> bool:
    """Only the same owner's other events on the same day can collide."""
    return (
        event.owner_id == candidate.owner_id
        and event.date == candidate.date
        and event.id != candidate.exclude_event_id
    )


def find_conflicts(
    candidate: ScheduleCandidate,
    existing_events: Iterable[Event],
) -> list[Event]:
    """Return existing events that overlap with the candidate's time range.

    Overlap rule: conflict if new_start < existing.end AND new_end > existing.start.
    Exact boundary touches (end == start) are NOT considered conflicts.
    Raises ``MalformedTimeError`` / ``InvalidTimeRangeError`` for a bad
    candidate window.
    """
    window = TimeWindow.from_strings(candidate.start_time, candidate.end_time)
    return [
        event
        for event in existing_events
        if _comparable(candidate, event) and window.overlaps(event.window)
    ]


def check_conflict(
    candidate: ScheduleCandidate,
    existing_events: Iterable[Event],
) -> ConflictCheck:
    """Report the first existing event that overlaps the candidate, if any.

    The pool is scanned in the order given and the scan stops at the first
    hit; no attempt is made to pick a "best" conflict.
    """
    window = TimeWindow.from_strings(candidate.start_time, candidate.end_time)
    for event in existing_events:
        if not _comparable(candidate, event):
            continue
        if window.overlaps(event.window):
            conflicting = ConflictingEvent(
                id=event.id,
                start_time=event.start_time,
                end_time=event.end_time,
                date=event.date,
            )
            return ConflictCheck(
                ok=False,
                conflicting_event=conflicting,
                message=conflicting.describe(),
            )
    return ConflictCheck(ok=True)


def ensure_no_conflict(
    candidate: ScheduleCandidate,
    existing_events: Iterable[Event],
) -> None:
    """Raise ``ConflictError`` if the candidate overlaps an existing event."""
    result = check_conflict(candidate, existing_events)
    if result.conflicting_event is not None:
        logger.info(
            "Schedule conflict for owner %s on %s: %s-%s overlaps event %s",
            candidate.owner_id,
            candidate.date.isoformat(),
            candidate.start_time,
            candidate.end_time,
            result.conflicting_event.id,
        )
        raise ConflictError(result.conflicting_event)
