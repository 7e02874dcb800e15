"""Cellar and cellar inventory document models."""

from datetime import datetime, timezone
from typing import Optional

from beanie import Document, Indexed, PydanticObjectId
from pydantic import Field


class Cellar(Document):
    """A user-defined named collection of physical bottles."""

    owner_id: Indexed(PydanticObjectId)

    name: str
    description: Optional[str] = None
    location: str = ""
    temperature: Optional[float] = None  # Celsius
    humidity: Optional[float] = None  # percent
    capacity: int = 0  # bottles

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "cellars"
        indexes = ["owner_id"]

    def __repr__(self) -> str:
        return f"<Cellar(id={self.id}, name={self.name})>"


class CellarWine(Document):
    """Bottles of one wine stored in a cellar."""

    cellar_id: Indexed(PydanticObjectId)
    owner_id: Indexed(PydanticObjectId)

    name: str
    grape: Optional[str] = None
    region: Optional[str] = None
    vintage: Optional[int] = None
    winery: Optional[str] = None

    quantity: int = Field(default=1, ge=0)
    purchase_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    purchase_price: float = Field(default=0.0, ge=0)
    current_value: Optional[float] = None
    storage_location: str = ""
    aging_potential: float = 0.0  # years from purchase
    drink_by_date: Optional[datetime] = None
    notes: Optional[str] = None
    is_sustainable: bool = False

    is_opened: bool = False
    opened_date: Optional[datetime] = None
    drink_alert_dismissed: bool = False

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "cellar_wines"
        indexes = [
            "cellar_id",
            "owner_id",
            [("owner_id", 1), ("drink_by_date", 1)],
        ]

    def __repr__(self) -> str:
        return f"<CellarWine(id={self.id}, name={self.name}, quantity={self.quantity})>"
