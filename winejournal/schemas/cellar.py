"""Pydantic schemas for cellars and cellar inventory."""

from datetime import datetime
from typing import Any

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from winejournal.schemas.common import UTCDateTime


class CellarCreate(BaseModel):
    """Schema for creating a cellar."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    location: str = Field("", max_length=255)
    temperature: float | None = Field(None, ge=-10, le=40, description="Celsius")
    humidity: float | None = Field(None, ge=0, le=100, description="Relative humidity percent")
    capacity: int = Field(0, ge=0)


class CellarUpdate(BaseModel):
    """Schema for updating a cellar."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    location: str | None = Field(None, max_length=255)
    temperature: float | None = Field(None, ge=-10, le=40)
    humidity: float | None = Field(None, ge=0, le=100)
    capacity: int | None = Field(None, ge=0)


class CellarResponse(CellarCreate):
    """Cellar as returned by the API."""

    id: str
    bottle_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", mode="before")
    @classmethod
    def convert_objectid_to_str(cls, v: Any) -> str:
        """Convert ObjectId to string."""
        if isinstance(v, PydanticObjectId):
            return str(v)
        return v


class CellarWineCreate(BaseModel):
    """Schema for adding bottles to a cellar."""

    name: str = Field(..., min_length=1, max_length=255)
    grape: str | None = Field(None, max_length=255)
    region: str | None = Field(None, max_length=255)
    vintage: int | None = Field(None, ge=1800, le=2100)
    winery: str | None = Field(None, max_length=255)
    quantity: int = Field(1, ge=1, le=1000)
    purchase_date: UTCDateTime | None = None
    purchase_price: float = Field(0.0, ge=0)
    current_value: float | None = Field(None, ge=0)
    storage_location: str = Field("", max_length=255)
    aging_potential: float = Field(0.0, ge=0, le=100, description="Years from purchase")
    drink_by_date: UTCDateTime | None = None
    notes: str | None = None
    is_sustainable: bool = False


class CellarWineUpdate(BaseModel):
    """Schema for updating cellar bottles. Only supplied fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    grape: str | None = Field(None, max_length=255)
    region: str | None = Field(None, max_length=255)
    vintage: int | None = Field(None, ge=1800, le=2100)
    winery: str | None = Field(None, max_length=255)
    quantity: int | None = Field(None, ge=0, le=1000)
    purchase_date: UTCDateTime | None = None
    purchase_price: float | None = Field(None, ge=0)
    current_value: float | None = Field(None, ge=0)
    storage_location: str | None = Field(None, max_length=255)
    aging_potential: float | None = Field(None, ge=0, le=100)
    drink_by_date: UTCDateTime | None = None
    notes: str | None = None
    is_sustainable: bool | None = None
    is_opened: bool | None = None


class CellarWineResponse(CellarWineCreate):
    """Cellar wine as returned by the API."""

    id: str
    cellar_id: str
    quantity: int
    purchase_date: datetime
    is_opened: bool = False
    opened_date: datetime | None = None
    drink_alert_dismissed: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", "cellar_id", mode="before")
    @classmethod
    def convert_objectid_to_str(cls, v: Any) -> str:
        """Convert ObjectId to string."""
        if isinstance(v, PydanticObjectId):
            return str(v)
        return v
