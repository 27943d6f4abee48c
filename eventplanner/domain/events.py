"""Domain events emitted during the event lifecycle."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EventCreated(BaseModel):
    """Fired after a new Event has been persisted."""

    event_id: str
    actor_id: str


class EventUpdated(BaseModel):
    """Fired after an update has been persisted.

    ``rescheduled`` is set when the date or either time changed, i.e. when
    the update went through conflict validation.
    """

    event_id: str
    actor_id: str
    changed_fields: list[str] = Field(default_factory=list)
    rescheduled: bool = False


class EventDeleted(BaseModel):
    """Fired after an Event has been removed."""

    event_id: str
    actor_id: str
    owner_id: str
    title: str
