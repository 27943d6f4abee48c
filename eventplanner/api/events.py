"""Event routes: dashboard reads, admin writes, conflict checks."""

from __future__ import annotations

from fastapi import APIRouter, status

from eventplanner.api.deps import CurrentUser, EventServiceDep
from eventplanner.domain.models import (
    ConflictCheck,
    ConflictCheckRequest,
    DayGroup,
    Event,
    EventCreate,
    EventUpdate,
    TimelineEntry,
)

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=list[Event])
def list_events(service: EventServiceDep) -> list[Event]:
    """Return all events ordered by date and start time."""
    return service.list_events()


@router.get("/by-day", response_model=list[DayGroup])
def events_by_day(service: EventServiceDep) -> list[DayGroup]:
    """Return events grouped by calendar date for the dashboard."""
    return service.events_by_day()


@router.post("/check-conflict", response_model=ConflictCheck)
def check_conflict(
    body: ConflictCheckRequest, service: EventServiceDep, user: CurrentUser
) -> ConflictCheck:
    """Tell the caller whether a slot is free without creating anything."""
    return service.check_availability(body, user)


@router.post("", response_model=Event, status_code=status.HTTP_201_CREATED)
def create_event(body: EventCreate, service: EventServiceDep, user: CurrentUser) -> Event:
    return service.create(body, user)


@router.get("/{event_id}", response_model=Event)
def get_event(event_id: str, service: EventServiceDep) -> Event:
    return service.get(event_id)


@router.get("/{event_id}/timeline", response_model=list[TimelineEntry])
def get_event_timeline(event_id: str, service: EventServiceDep) -> list[TimelineEntry]:
    """Return the activity recorded for an event, oldest first."""
    return service.timeline(event_id)


@router.put("/{event_id}", response_model=Event)
def update_event(
    event_id: str, body: EventUpdate, service: EventServiceDep, user: CurrentUser
) -> Event:
    """Apply a partial update.

    Only a change to ``date``, ``start_time`` or ``end_time`` triggers a
    conflict check; descriptive edits are written straight through.
    """
    return service.update(event_id, body, user)


@router.delete("/{event_id}")
def delete_event(event_id: str, service: EventServiceDep, user: CurrentUser) -> dict:
    service.delete(event_id, user)
    return {"status": "deleted"}
