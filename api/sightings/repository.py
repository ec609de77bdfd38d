"""
Sighting persistence (raw SQL).
"""

from __future__ import annotations

from core import db

SIGHTING_COLUMNS = "id, animal, date_time, location, notes, photo_url, audio_url, created_at"

# Postgres TO_CHAR pattern; rendered in the database so the format does not
# depend on the API process locale. Sessions run in UTC (see core.db.init_pool).
DISPLAY_DATE_FORMAT = "Month DD, YYYY, HH12:MI AM"


async def ensure_table() -> None:
    await db.execute(
        """
        CREATE TABLE IF NOT EXISTS sightings (
            id SERIAL PRIMARY KEY,
            animal VARCHAR(100) NOT NULL,
            date_time TIMESTAMP NOT NULL,
            location TEXT NOT NULL,
            notes TEXT,
            photo_url TEXT,
            audio_url TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
        """
    )


async def insert_sighting(
    *,
    animal: str,
    location: str,
    notes: str,
) -> dict:
    # date_time and created_at both come from the transaction clock.
    row = await db.fetch_one(
        f"""
        INSERT INTO sightings (animal, date_time, location, notes)
        VALUES ($1, LOCALTIMESTAMP, $2, $3)
        RETURNING {SIGHTING_COLUMNS}
        """,
        animal,
        location,
        notes,
    )
    if row is None:
        raise db.StorageError("Insert returned no row.")
    return row


async def list_sightings() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT
            id,
            animal,
            TO_CHAR(date_time, $1) AS date_time,
            location,
            notes,
            photo_url,
            audio_url,
            created_at
        FROM sightings
        ORDER BY created_at DESC, id DESC
        """,
        DISPLAY_DATE_FORMAT,
    )
