from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from core import db
from main import app
from sightings import service


def test_health_ok(monkeypatch: pytest.MonkeyPatch):
    async def fake_ping():
        return None

    monkeypatch.setattr(db, "ping", fake_ping)

    r = TestClient(app).get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "API is running and database is connected"
    assert body["timestamp"].endswith("Z")


def test_health_without_pool_returns_failure_envelope():
    # Lifespan not run, so there is no pool.
    r = TestClient(app).get("/api/health")
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Database connection failed"}


def test_startup_survives_missing_database(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with TestClient(app) as client:
        r = client.get("/api/health")
        assert r.status_code == 500
        assert r.json()["success"] is False


def test_initialize_storage_is_repeatable(fake_store):
    assert asyncio.run(service.initialize_storage()) is True
    assert asyncio.run(service.initialize_storage()) is True
    assert fake_store.ensure_calls == 2


def test_initialize_storage_logs_and_swallows_failure(monkeypatch: pytest.MonkeyPatch, caplog):
    async def boom():
        raise db.StorageError("relation permission denied")

    monkeypatch.setattr(service.repository, "ensure_table", boom)

    with caplog.at_level("ERROR"):
        assert asyncio.run(service.initialize_storage()) is False
    assert "database_init_failed" in caplog.text
