"""Shared fixtures: a fresh application per test and registered users."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from eventplanner.config import Settings
from eventplanner.main import create_app


def make_settings(**overrides) -> Settings:
    defaults = dict(environment="test", log_level="WARNING", seed_sample_data=False)
    defaults.update(overrides)
    return Settings(**defaults)


@pytest.fixture()
def app_settings() -> Settings:
    return make_settings()


@pytest.fixture()
def client(app_settings):
    app = create_app(settings=app_settings)
    with TestClient(app) as test_client:
        yield test_client


def register(client: TestClient, name: str, email: str, role: str = "user") -> dict:
    resp = client.post("/auth/register", json={"name": name, "email": email, "role": role})
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth(user: dict) -> dict:
    return {"X-User-Id": user["id"]}


@pytest.fixture()
def admin(client) -> dict:
    return register(client, "Ada Admin", "ada@example.com", role="admin")


@pytest.fixture()
def regular_user(client) -> dict:
    return register(client, "Uma User", "uma@example.com")
