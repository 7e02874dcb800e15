"""Pydantic schemas for Wine model."""

from datetime import datetime
from typing import Any

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from winejournal.models.wine import TastingNotes
from winejournal.schemas.common import UTCDateTime


class WineBase(BaseModel):
    """Base wine schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    grape: str | None = Field(None, max_length=255)
    region: str | None = Field(None, max_length=255)
    vintage: int | None = Field(None, ge=1800, le=2100)
    rating: float = Field(0.0, ge=0, le=5, description="Star rating, 0 when unrated")
    price: float | None = Field(None, ge=0)
    winery: str | None = Field(None, max_length=255)
    barcode: str | None = Field(None, max_length=64)
    notes: str | None = None
    in_cellar: bool = False


class WineCreate(WineBase):
    """Schema for logging a wine."""

    timestamp: UTCDateTime | None = Field(None, description="When the wine was tasted; defaults to now")
    tasting: TastingNotes = Field(default_factory=TastingNotes)


class WineUpdate(BaseModel):
    """Schema for updating wine metadata. Only supplied fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    grape: str | None = Field(None, max_length=255)
    region: str | None = Field(None, max_length=255)
    vintage: int | None = Field(None, ge=1800, le=2100)
    rating: float | None = Field(None, ge=0, le=5)
    price: float | None = Field(None, ge=0)
    winery: str | None = Field(None, max_length=255)
    barcode: str | None = Field(None, max_length=64)
    notes: str | None = None
    in_cellar: bool | None = None
    timestamp: UTCDateTime | None = None
    tasting: TastingNotes | None = None


class WineResponse(WineBase):
    """Wine as returned by the API."""

    id: str
    owner_id: str
    image_url: str | None = None
    tasting: TastingNotes
    timestamp: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", "owner_id", mode="before")
    @classmethod
    def convert_objectid_to_str(cls, v: Any) -> str:
        """Convert ObjectId to string."""
        if isinstance(v, PydanticObjectId):
            return str(v)
        return v
