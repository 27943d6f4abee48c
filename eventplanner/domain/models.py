"""Domain models for the event planner."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from eventplanner.services.timeparse import (
    TimeWindow,
    coerce_calendar_date,
    format_display_date,
    normalize_time_of_day,
)

CalendarDate = Annotated[date, BeforeValidator(coerce_calendar_date)]
TimeOfDay = Annotated[str, BeforeValidator(normalize_time_of_day)]

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class EventStatus(StrEnum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class UserRole(StrEnum):
    ADMIN = "admin"
    USER = "user"


class TimelineEntryType(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    RESCHEDULED = "rescheduled"
    DELETED = "deleted"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class User(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str = Field(min_length=2)
    email: str = Field(pattern=_EMAIL_PATTERN)
    role: UserRole = UserRole.USER
    phone: str | None = None
    address: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class Event(BaseModel):
    id: str = Field(default_factory=_new_id)
    owner_id: str
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date: CalendarDate
    start_time: TimeOfDay
    end_time: TimeOfDay
    location: str = Field(min_length=1)
    category: str = Field(min_length=1)
    status: EventStatus = EventStatus.UPCOMING
    max_attendees: int | None = Field(default=None, ge=1)
    price: float | None = Field(default=None, ge=0)
    contact_email: str | None = Field(default=None, pattern=_EMAIL_PATTERN)
    contact_phone: str | None = None
    requirements: str | None = None
    image: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _end_after_start(self) -> Event:
        TimeWindow.from_strings(self.start_time, self.end_time)
        return self

    @property
    def window(self) -> TimeWindow:
        return TimeWindow.from_strings(self.start_time, self.end_time)


class TimelineEntry(BaseModel):
    id: str = Field(default_factory=_new_id)
    event_id: str
    timestamp: datetime = Field(default_factory=_utcnow)
    type: TimelineEntryType
    actor_id: str | None = None
    payload: dict = Field(default_factory=dict)


class EventQuery(BaseModel):
    """Criteria for fetching one owner's events on one calendar date."""

    model_config = ConfigDict(frozen=True)

    owner_id: str = Field(min_length=1)
    on_date: CalendarDate
    exclude_event_id: str | None = None


# ---------------------------------------------------------------------------
# Conflict validation shapes
# ---------------------------------------------------------------------------


class ScheduleCandidate(BaseModel):
    """The slot being validated: who, which day, and which times."""

    owner_id: str
    date: CalendarDate
    start_time: str
    end_time: str
    exclude_event_id: str | None = None


class ConflictingEvent(BaseModel):
    id: str
    start_time: str
    end_time: str
    date: CalendarDate

    def describe(self) -> str:
        return (
            "Event time conflict: You already have an event scheduled from "
            f"{self.start_time} to {self.end_time} on "
            f"{format_display_date(self.date)}. Please choose a different time."
        )


class ConflictCheck(BaseModel):
    ok: bool
    conflicting_event: ConflictingEvent | None = None
    message: str | None = None
    # Every overlapping event, filled in by availability checks.
    conflicting_event_ids: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class EventCreate(BaseModel):
    # Times are parsed by the lifecycle service, not here.
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date: CalendarDate
    start_time: str = Field(min_length=1)
    end_time: str = Field(min_length=1)
    location: str = Field(min_length=1)
    category: str = Field(min_length=1)
    max_attendees: int | None = Field(default=None, ge=1)
    price: float | None = Field(default=None, ge=0)
    contact_email: str | None = Field(default=None, pattern=_EMAIL_PATTERN)
    contact_phone: str | None = None
    requirements: str | None = None
    image: str | None = None


class EventUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    date: CalendarDate | None = None
    start_time: str | None = Field(default=None, min_length=1)
    end_time: str | None = Field(default=None, min_length=1)
    location: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    max_attendees: int | None = Field(default=None, ge=1)
    price: float | None = Field(default=None, ge=0)
    contact_email: str | None = Field(default=None, pattern=_EMAIL_PATTERN)
    contact_phone: str | None = None
    requirements: str | None = None
    image: str | None = None
    status: EventStatus | None = None

    def changes(self) -> dict[str, Any]:
        """Fields the caller actually supplied, with ``null`` treated as absent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ConflictCheckRequest(BaseModel):
    date: CalendarDate
    start_time: str = Field(min_length=1)
    end_time: str = Field(min_length=1)
    exclude_event_id: str | None = None


class UserCreate(BaseModel):
    name: str = Field(min_length=2)
    email: str = Field(pattern=_EMAIL_PATTERN)
    role: UserRole = UserRole.USER
    phone: str | None = None
    address: str | None = None


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2)
    email: str | None = Field(default=None, pattern=_EMAIL_PATTERN)
    role: UserRole | None = None
    phone: str | None = None
    address: str | None = None


class UserCount(BaseModel):
    count: int


class DayGroup(BaseModel):
    date: CalendarDate
    events: list[Event]
