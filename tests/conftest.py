from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]

# The API modules import each other as top-level packages (`core`, `sightings`).
API_DIR = ROOT / "api"
if str(API_DIR) not in sys.path:
    sys.path.insert(0, str(API_DIR))

from sightings import repository  # noqa: E402


class FakeSightingStore:
    """In-memory stand-in for the sightings table."""

    def __init__(self) -> None:
        self.rows: list[dict[str, Any]] = []
        self.ensure_calls = 0

    async def ensure_table(self) -> None:
        self.ensure_calls += 1

    async def insert_sighting(self, *, animal, location, notes) -> dict:
        # Both timestamps come from one clock, as in the database.
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        row = {
            "id": len(self.rows) + 1,
            "animal": animal,
            "date_time": now,
            "location": location,
            "notes": notes,
            "photo_url": None,
            "audio_url": None,
            "created_at": now,
        }
        self.rows.append(row)
        return dict(row)

    async def list_sightings(self) -> list[dict]:
        ordered = sorted(self.rows, key=lambda r: (r["created_at"], r["id"]), reverse=True)
        return [
            {**row, "date_time": row["date_time"].strftime("%B %d, %Y, %I:%M %p")}
            for row in ordered
        ]


@pytest.fixture()
def fake_store(monkeypatch: pytest.MonkeyPatch) -> FakeSightingStore:
    store = FakeSightingStore()
    monkeypatch.setattr(repository, "ensure_table", store.ensure_table)
    monkeypatch.setattr(repository, "insert_sighting", store.insert_sighting)
    monkeypatch.setattr(repository, "list_sightings", store.list_sightings)
    return store
