"""
Sighting API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from core.envelope import success

from . import schemas, service

router = APIRouter()


@router.post("/sightings", status_code=status.HTTP_201_CREATED)
async def create_sighting(request: schemas.SightingCreate) -> dict:
    sighting = await service.create_sighting(request)
    return success(data=sighting, message="Sighting reported successfully")


@router.get("/sightings")
async def list_sightings() -> dict:
    """
    Every stored sighting, newest first. No filtering or pagination.
    """
    sightings = await service.list_sightings()
    return success(data=sightings)
