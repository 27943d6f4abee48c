"""Domain errors raised by the scheduling services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eventplanner.domain.models import ConflictingEvent


class EventPlannerError(Exception):
    """Base class for every error the services raise on purpose."""


class MalformedTimeError(EventPlannerError, ValueError):
    """A time-of-day string is not a valid ``HH:MM`` value."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid time {value!r}: expected HH:MM (00:00-23:59)")


class InvalidTimeRangeError(EventPlannerError, ValueError):
    """Start time is not strictly before end time."""

    def __init__(self, start_time: str, end_time: str) -> None:
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(
            f"End time {end_time} must be after start time {start_time}"
        )


class EventInPastError(EventPlannerError):
    """The event would start before the current moment."""


class ConflictError(EventPlannerError):
    """The candidate overlaps an existing event of the same owner."""

    def __init__(self, conflicting_event: ConflictingEvent) -> None:
        self.conflicting_event = conflicting_event
        super().__init__(conflicting_event.describe())


class NotFoundError(EventPlannerError):
    pass


class ForbiddenError(EventPlannerError):
    pass


class UnauthorizedError(EventPlannerError):
    pass


class DuplicateUserError(EventPlannerError):
    pass


class SelfDeletionError(EventPlannerError):
    pass
