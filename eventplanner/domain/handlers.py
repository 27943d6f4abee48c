"""Domain event handlers — wired up at application startup."""

from __future__ import annotations

import logging

from eventplanner.domain.bus import EventBus
from eventplanner.domain.events import EventCreated, EventDeleted, EventUpdated
from eventplanner.domain.models import TimelineEntry, TimelineEntryType
from eventplanner.repos.memory import EventRepository, TimelineRepository

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Wires timeline handlers to the bus with access to the repositories."""

    def __init__(
        self,
        bus: EventBus,
        event_repo: EventRepository,
        timeline_repo: TimelineRepository,
    ) -> None:
        self.bus = bus
        self.event_repo = event_repo
        self.timeline_repo = timeline_repo
        self._register()

    def _register(self) -> None:
        self.bus.subscribe(EventCreated, self.on_event_created)
        self.bus.subscribe(EventUpdated, self.on_event_updated)
        self.bus.subscribe(EventDeleted, self.on_event_deleted)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def on_event_created(self, message: EventCreated) -> None:
        stored = self.event_repo.get(message.event_id)
        if stored is None:
            return

        self.timeline_repo.add(
            TimelineEntry(
                event_id=stored.id,
                type=TimelineEntryType.CREATED,
                actor_id=message.actor_id,
                payload={
                    "date": stored.date.isoformat(),
                    "start_time": stored.start_time,
                    "end_time": stored.end_time,
                },
            )
        )
        logger.info(
            "Event %s created by %s for %s %s-%s",
            stored.id,
            message.actor_id,
            stored.date.isoformat(),
            stored.start_time,
            stored.end_time,
        )

    def on_event_updated(self, message: EventUpdated) -> None:
        stored = self.event_repo.get(message.event_id)
        if stored is None:
            return

        payload: dict = {"changed_fields": message.changed_fields}
        entry_type = TimelineEntryType.UPDATED
        if message.rescheduled:
            entry_type = TimelineEntryType.RESCHEDULED
            payload.update(
                date=stored.date.isoformat(),
                start_time=stored.start_time,
                end_time=stored.end_time,
            )

        self.timeline_repo.add(
            TimelineEntry(
                event_id=stored.id,
                type=entry_type,
                actor_id=message.actor_id,
                payload=payload,
            )
        )
        logger.info(
            "Event %s %s by %s (%s)",
            stored.id,
            entry_type,
            message.actor_id,
            ", ".join(message.changed_fields) or "no fields",
        )

    def on_event_deleted(self, message: EventDeleted) -> None:
        # The event is already gone; record what we were told about it.
        self.timeline_repo.add(
            TimelineEntry(
                event_id=message.event_id,
                type=TimelineEntryType.DELETED,
                actor_id=message.actor_id,
                payload={"owner_id": message.owner_id, "title": message.title},
            )
        )
        logger.info("Event %s deleted by %s", message.event_id, message.actor_id)
