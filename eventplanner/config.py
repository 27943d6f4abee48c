"""Application settings, read from the environment (prefix ``EVENTPLANNER_``)."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EVENTPLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field("Event Planner", description="Title shown in the API docs")
    environment: str = Field("dev", description="Application environment (dev, test, prod)")
    log_level: str = Field("INFO", description="Root log level")

    # --- Scheduling rules ---
    admin_only_writes: bool = Field(
        True, description="Only admins may create, update or delete events"
    )
    allow_past_events: bool = Field(
        True, description="Accept events whose start lies before the current time"
    )

    # --- Startup ---
    seed_sample_data: bool = Field(False, description="Load sample users and events on startup")

    # --- Server ---
    api_host: str = Field("0.0.0.0", description="Bind address for uvicorn")
    api_port: int = Field(8000, description="Bind port for uvicorn")


def load_settings() -> Settings:
    settings = Settings()
    log.debug(
        "Loaded settings for ENVIRONMENT=%s (admin_only_writes=%s, allow_past_events=%s)",
        settings.environment,
        settings.admin_only_writes,
        settings.allow_past_events,
    )
    return settings
