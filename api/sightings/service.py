"""
Sighting business logic.

Scope:
- table bootstrap at process start
- create one sighting (server-stamped time)
- list every sighting, newest first
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core import db
from core.envelope import iso_timestamp

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_sighting(row: dict[str, Any]) -> dict[str, Any]:
    date_time = row["date_time"]
    if not isinstance(date_time, str):
        date_time = iso_timestamp(date_time)
    return {
        "id": int(row["id"]),
        "animal": row["animal"],
        "dateTime": date_time,
        "location": row["location"],
        "notes": row["notes"] if row["notes"] is not None else "",
        "photoUrl": row.get("photo_url"),
        "audioUrl": row.get("audio_url"),
        "createdAt": iso_timestamp(row.get("created_at")),
    }


async def initialize_storage() -> bool:
    """
    Create the sightings table if it is missing.

    Never raises: a failure is logged and the API keeps serving, so requests
    report storage errors individually.
    """
    try:
        await repository.ensure_table()
    except Exception:
        logger.exception("database_init_failed table=sightings")
        return False
    logger.info("Database table initialized")
    return True


async def create_sighting(payload: schemas.SightingCreate) -> dict[str, Any]:
    try:
        row = await repository.insert_sighting(
            animal=payload.animal,
            location=payload.location,
            notes=payload.notes or "",
        )
    except db.StorageError as exc:
        logger.error("sighting_create_failed animal=%r error=%s", payload.animal, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit sighting",
        ) from exc

    sighting = _to_sighting(row)
    logger.info("sighting_created id=%s animal=%r", sighting["id"], sighting["animal"])
    return sighting


async def list_sightings() -> list[dict[str, Any]]:
    try:
        rows = await repository.list_sightings()
    except db.StorageError as exc:
        logger.error("sighting_list_failed error=%s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch sightings",
        ) from exc
    return [_to_sighting(row) for row in rows]
