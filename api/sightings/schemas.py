"""
Pydantic schemas for sighting endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

ANIMAL_MAX_LENGTH = 100


class SightingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    # Matches the VARCHAR(100) column in repository.ensure_table.
    animal: str = Field(..., min_length=1, max_length=ANIMAL_MAX_LENGTH)
    location: str = Field(..., min_length=1)
    notes: str | None = Field(default="")
    # Accepted for client compatibility; the server always stamps the time.
    date_time: Any = Field(default=None, alias="dateTime")

    @field_validator("notes")
    @classmethod
    def _notes_default(cls, value: str | None) -> str:
        return value or ""
