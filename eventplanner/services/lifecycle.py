"""Event lifecycle orchestration: validate, authorize, persist, publish."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import date, datetime, time, timezone

from eventplanner.domain.bus import EventBus
from eventplanner.domain.errors import EventInPastError, NotFoundError
from eventplanner.domain.events import EventCreated, EventDeleted, EventUpdated
from eventplanner.domain.models import (
    ConflictCheck,
    ConflictCheckRequest,
    DayGroup,
    Event,
    EventCreate,
    EventQuery,
    EventUpdate,
    ScheduleCandidate,
    TimelineEntry,
    User,
)
from eventplanner.repos.memory import MemoryStore
from eventplanner.services.conflicts import (
    check_conflict,
    ensure_no_conflict,
    find_conflicts,
)
from eventplanner.services.policy import (
    AuthorizationPolicy,
    ensure_can_create,
    ensure_can_modify,
)
from eventplanner.services.timeparse import (
    TimeWindow,
    normalize_time_of_day,
    parse_time_of_day,
)

logger = logging.getLogger(__name__)

SCHEDULE_FIELDS = ("date", "start_time", "end_time")


class EventLifecycleService:
    """Create, update and delete events on behalf of a user.

    Create and update re-read the owner's events for the target day and run
    the conflict validator before writing.  They and delete hold
    ``_write_lock`` across check and write so two requests in this process
    cannot double-book the same slot.  Separate processes sharing one
    database would still need a storage-level guard.
    """

    def __init__(
        self,
        store: MemoryStore,
        bus: EventBus,
        policy: AuthorizationPolicy,
        allow_past_events: bool = True,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.bus = bus
        self.policy = policy
        self.allow_past_events = allow_past_events
        self.clock = clock
        self._write_lock = threading.RLock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, event_id: str) -> Event:
        event = self.store.events.get(event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    def list_events(self) -> list[Event]:
        return self.store.events.list_all()

    def events_by_day(self) -> list[DayGroup]:
        """Group every event by calendar date, earliest day first.

        Within a day events are ordered by start time.
        """
        groups: dict[date, list[Event]] = {}
        for event in self.store.events.list_all():
            groups.setdefault(event.date, []).append(event)
        return [DayGroup(date=day, events=events) for day, events in groups.items()]

    def timeline(self, event_id: str) -> list[TimelineEntry]:
        entries = self.store.timeline.list_for_event(event_id)
        if not entries and self.store.events.get(event_id) is None:
            raise NotFoundError("Event not found")
        return entries

    def check_availability(self, request: ConflictCheckRequest, actor: User) -> ConflictCheck:
        """Run the conflict validator without writing anything.

        When ``exclude_event_id`` names an existing event the check is made
        against that event's owner, as an update would be.
        """
        owner_id = actor.id
        if request.exclude_event_id:
            excluded = self.store.events.get(request.exclude_event_id)
            if excluded is not None:
                owner_id = excluded.owner_id

        candidate = ScheduleCandidate(
            owner_id=owner_id,
            date=request.date,
            start_time=normalize_time_of_day(request.start_time),
            end_time=normalize_time_of_day(request.end_time),
            exclude_event_id=request.exclude_event_id,
        )
        pool = self.store.events.find(
            EventQuery(
                owner_id=owner_id,
                on_date=request.date,
                exclude_event_id=request.exclude_event_id,
            )
        )
        result = check_conflict(candidate, pool)
        if not result.ok:
            result.conflicting_event_ids = [
                e.id for e in find_conflicts(candidate, pool)
            ]
        return result

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, payload: EventCreate, actor: User) -> Event:
        ensure_can_create(self.policy, actor)

        start_time = normalize_time_of_day(payload.start_time)
        end_time = normalize_time_of_day(payload.end_time)
        TimeWindow.from_strings(start_time, end_time)
        self._ensure_not_past(payload.date, start_time)

        candidate = ScheduleCandidate(
            owner_id=actor.id,
            date=payload.date,
            start_time=start_time,
            end_time=end_time,
        )
        fields = payload.model_dump(exclude={"start_time", "end_time"})

        with self._write_lock:
            existing = self.store.events.find(
                EventQuery(owner_id=actor.id, on_date=payload.date)
            )
            ensure_no_conflict(candidate, existing)
            event = Event(
                owner_id=actor.id,
                start_time=start_time,
                end_time=end_time,
                **fields,
            )
            self.store.events.add(event)

        self.bus.publish(EventCreated(event_id=event.id, actor_id=actor.id))
        return event

    def update(self, event_id: str, payload: EventUpdate, actor: User) -> Event:
        event = self.get(event_id)
        ensure_can_modify(self.policy, actor, event, "update")

        changes = payload.changes()
        for field in ("start_time", "end_time"):
            if field in changes:
                changes[field] = normalize_time_of_day(changes[field])
        rescheduled = any(field in changes for field in SCHEDULE_FIELDS)

        with self._write_lock:
            current = self.get(event_id)
            if rescheduled:
                candidate = ScheduleCandidate(
                    owner_id=current.owner_id,
                    date=changes.get("date", current.date),
                    start_time=changes.get("start_time", current.start_time),
                    end_time=changes.get("end_time", current.end_time),
                    exclude_event_id=current.id,
                )
                TimeWindow.from_strings(candidate.start_time, candidate.end_time)
                self._ensure_not_past(candidate.date, candidate.start_time)
                existing = self.store.events.find(
                    EventQuery(
                        owner_id=current.owner_id,
                        on_date=candidate.date,
                        exclude_event_id=current.id,
                    )
                )
                ensure_no_conflict(candidate, existing)

            updated = Event.model_validate(
                {
                    **current.model_dump(),
                    **changes,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            self.store.events.replace(updated)

        self.bus.publish(
            EventUpdated(
                event_id=updated.id,
                actor_id=actor.id,
                changed_fields=sorted(changes),
                rescheduled=rescheduled,
            )
        )
        return updated

    def delete(self, event_id: str, actor: User) -> None:
        with self._write_lock:
            event = self.get(event_id)
            ensure_can_modify(self.policy, actor, event, "delete")
            self.store.events.delete(event_id)
        self.bus.publish(
            EventDeleted(
                event_id=event.id,
                actor_id=actor.id,
                owner_id=event.owner_id,
                title=event.title,
            )
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_not_past(self, day: date, start_time: str) -> None:
        if self.allow_past_events:
            return
        minutes = parse_time_of_day(start_time)
        starts_at = datetime.combine(day, time(minutes // 60, minutes % 60))
        now = self.clock()
        if now.tzinfo is not None:
            now = now.astimezone().replace(tzinfo=None)
        if starts_at < now:
            raise EventInPastError(
                f"Event cannot start in the past ({day.isoformat()} {start_time})"
            )
