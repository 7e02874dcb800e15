"""Pydantic schemas for tasting sessions."""

from datetime import datetime
from typing import Any

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from winejournal.schemas.common import UTCDateTime


class TastingSessionCreate(BaseModel):
    """Schema for scheduling a tasting session."""

    name: str = Field(..., min_length=1, max_length=255)
    date: UTCDateTime
    location: str | None = Field(None, max_length=255)
    participants: list[str] = Field(default_factory=list)
    wine_ids: list[str] = Field(default_factory=list)
    notes: str = ""
    rating: float | None = Field(None, ge=0, le=5)


class TastingSessionUpdate(BaseModel):
    """Schema for updating a tasting session."""

    name: str | None = Field(None, min_length=1, max_length=255)
    date: UTCDateTime | None = None
    location: str | None = Field(None, max_length=255)
    participants: list[str] | None = None
    wine_ids: list[str] | None = None
    notes: str | None = None
    rating: float | None = Field(None, ge=0, le=5)


class SessionWine(BaseModel):
    """Minimal wine info embedded in a session response."""

    id: str
    name: str
    grape: str | None = None
    region: str | None = None
    vintage: int | None = None
    rating: float = 0.0

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", mode="before")
    @classmethod
    def convert_objectid_to_str(cls, v: Any) -> str:
        if isinstance(v, PydanticObjectId):
            return str(v)
        return v


class TastingSessionResponse(BaseModel):
    """Tasting session as returned by the API."""

    id: str
    name: str
    date: datetime
    location: str | None = None
    participants: list[str] = []
    wine_ids: list[str] = []
    notes: str = ""
    rating: float | None = None
    created_at: datetime
    updated_at: datetime
    wines: list[SessionWine] = []

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", mode="before")
    @classmethod
    def convert_objectid_to_str(cls, v: Any) -> str:
        if isinstance(v, PydanticObjectId):
            return str(v)
        return v

    @field_validator("wine_ids", mode="before")
    @classmethod
    def convert_objectid_list(cls, v: Any) -> list[str]:
        return [str(item) for item in v or []]
