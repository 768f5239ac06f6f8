"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ride_tracking.web.app import app, registry


@pytest.fixture
def client():
    """FastAPI test client with an empty session registry."""
    registry.clear()
    with TestClient(app) as c:
        yield c
    registry.clear()


def make_route(n: int = 30) -> list[dict]:
    """Route payload heading due north, ~11 m between vertices."""
    return [{"latitude": 12.9 + i * 0.0001, "longitude": 77.6} for i in range(n)]


@pytest.fixture
def session_id(client) -> str:
    resp = client.post("/api/sessions", json={"route": make_route(), "phase": "started"})
    assert resp.status_code == 201
    return resp.json()["session_id"]
