"""In-memory repositories for events, users and the activity timeline."""

from __future__ import annotations

import logging
import threading
from datetime import date, timedelta

from eventplanner.domain.errors import NotFoundError
from eventplanner.domain.models import (
    Event,
    EventQuery,
    TimelineEntry,
    User,
    UserRole,
)
from eventplanner.services.timeparse import parse_time_of_day

logger = logging.getLogger(__name__)


def _schedule_key(event: Event) -> tuple[date, int]:
    return event.date, parse_time_of_day(event.start_time)


class EventRepository:
    """Dict-backed store for Event instances, keyed by id."""

    def __init__(self) -> None:
        self._store: dict[str, Event] = {}
        self._lock = threading.Lock()

    def add(self, event: Event) -> None:
        with self._lock:
            self._store[event.id] = event

    def replace(self, event: Event) -> None:
        with self._lock:
            if event.id not in self._store:
                raise NotFoundError("Event not found")
            self._store[event.id] = event

    def get(self, event_id: str) -> Event | None:
        return self._store.get(event_id)

    def list_all(self) -> list[Event]:
        """All events ordered by date, then start time."""
        with self._lock:
            events = list(self._store.values())
        return sorted(events, key=_schedule_key)

    def find(self, query: EventQuery) -> list[Event]:
        """Return the owner's events on ``query.on_date``, minus any excluded id."""
        with self._lock:
            events = list(self._store.values())
        return [
            e
            for e in events
            if e.owner_id == query.owner_id
            and e.date == query.on_date
            and e.id != query.exclude_event_id
        ]

    def delete(self, event_id: str) -> None:
        with self._lock:
            self._store.pop(event_id, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


class UserRepository:
    """Dict-backed store for User instances, keyed by id."""

    def __init__(self) -> None:
        self._store: dict[str, User] = {}
        self._lock = threading.Lock()

    def add(self, user: User) -> None:
        with self._lock:
            self._store[user.id] = user

    def get(self, user_id: str) -> User | None:
        return self._store.get(user_id)

    def _email_taken(self, email: str, exclude_id: str) -> bool:
        wanted = email.lower()
        return any(
            u.email.lower() == wanted and u.id != exclude_id
            for u in self._store.values()
        )

    def add_unique(self, user: User) -> bool:
        """Add *user* unless another user holds the same email; report success."""
        with self._lock:
            if self._email_taken(user.email, user.id):
                return False
            self._store[user.id] = user
            return True

    def replace_unique(self, user: User) -> bool:
        with self._lock:
            if self._email_taken(user.email, user.id):
                return False
            self._store[user.id] = user
            return True

    def list_all(self, role: UserRole | None = None) -> list[User]:
        """Users newest first, optionally limited to one role."""
        with self._lock:
            users = list(self._store.values())
        if role is not None:
            users = [u for u in users if u.role == role]
        return sorted(users, key=lambda u: u.created_at, reverse=True)

    def delete(self, user_id: str) -> None:
        with self._lock:
            self._store.pop(user_id, None)

    def count(self) -> int:
        return len(self._store)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


class TimelineRepository:
    """List-backed store for TimelineEntry instances."""

    def __init__(self) -> None:
        self._entries: list[TimelineEntry] = []
        self._lock = threading.Lock()

    def add(self, entry: TimelineEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def list_for_event(self, event_id: str) -> list[TimelineEntry]:
        with self._lock:
            entries = [e for e in self._entries if e.event_id == event_id]
        return sorted(entries, key=lambda e: e.timestamp)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class MemoryStore:
    """Storage handle bundling the repositories.

    Created explicitly and handed to the services; ``open``/``close`` are
    driven by the application lifespan.
    """

    def __init__(self) -> None:
        self.events = EventRepository()
        self.users = UserRepository()
        self.timeline = TimelineRepository()
        self.is_open = False

    def open(self) -> None:
        self.is_open = True
        logger.info("Opened in-memory store")

    def close(self) -> None:
        self.events.clear()
        self.users.clear()
        self.timeline.clear()
        self.is_open = False
        logger.info("Closed in-memory store")


# ---------------------------------------------------------------------------
# Seed data: an admin and a few same-day events useful for conflict testing
# ---------------------------------------------------------------------------


def seed_sample_data(store: MemoryStore, today: date | None = None) -> User:
    """Load an admin user and a handful of events; return the admin."""
    today = today or date.today()
    admin = User(name="Admin", email="admin@example.com", role=UserRole.ADMIN)
    store.users.add(admin)
    store.users.add(User(name="Regular User", email="user@example.com"))

    samples = [
        ("Team standup", "Work", 0, "09:00", "09:30", "Conference Room A"),
        ("Design review", "Work", 0, "10:00", "11:30", "Conference Room B"),
        ("Lunch and learn", "Education", 0, "12:00", "13:00", "Cafeteria"),
        ("Community meetup", "Social", 1, "18:00", "20:00", "Main Hall"),
        ("Yoga in the park", "Health", 2, "07:00", "08:00", "City Park"),
    ]
    for title, category, offset, start, end, location in samples:
        store.events.add(
            Event(
                owner_id=admin.id,
                title=title,
                description=f"{title} (sample event)",
                date=today + timedelta(days=offset),
                start_time=start,
                end_time=end,
                location=location,
                category=category,
            )
        )
    logger.info("Seeded %d sample events", len(samples))
    return admin
