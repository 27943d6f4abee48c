"""FastAPI application factory for the event planner service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI

from eventplanner.api.errors import register_exception_handlers
from eventplanner.api.events import router as events_router
from eventplanner.api.users import admin_router, auth_router, users_router
from eventplanner.config import Settings, load_settings
from eventplanner.domain.bus import EventBus
from eventplanner.domain.handlers import HandlerRegistry
from eventplanner.logging_config import setup_logging
from eventplanner.repos.memory import MemoryStore, seed_sample_data
from eventplanner.services.lifecycle import EventLifecycleService
from eventplanner.services.policy import OwnerOrAdminPolicy
from eventplanner.services.users import UserService

log = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: MemoryStore | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> FastAPI:
    """Build the application with its own store, bus and services.

    Nothing is shared between two apps built by separate calls.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)
    store = store or MemoryStore()

    bus = EventBus()
    HandlerRegistry(bus=bus, event_repo=store.events, timeline_repo=store.timeline)
    event_service = EventLifecycleService(
        store=store,
        bus=bus,
        policy=OwnerOrAdminPolicy(admin_only_writes=settings.admin_only_writes),
        allow_past_events=settings.allow_past_events,
        clock=clock,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.open()
        if settings.seed_sample_data:
            seed_sample_data(store)
        log.info("%s started (environment=%s)", settings.app_name, settings.environment)
        yield
        store.close()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.bus = bus
    app.state.event_service = event_service
    app.state.user_service = UserService(store)

    register_exception_handlers(app)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(admin_router)
    app.include_router(events_router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "store_open": store.is_open}

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = load_settings()
    uvicorn.run(
        "eventplanner.main:create_app",
        factory=True,
        host=_settings.api_host,
        port=_settings.api_port,
    )
