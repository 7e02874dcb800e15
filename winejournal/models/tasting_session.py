"""Tasting session document model."""

from datetime import datetime, timezone
from typing import Optional

from beanie import Document, Indexed, PydanticObjectId
from pydantic import Field


class TastingSession(Document):
    """A dated, multi-participant tasting of several logged wines."""

    owner_id: Indexed(PydanticObjectId)

    name: str
    date: datetime
    location: Optional[str] = None
    participants: list[str] = Field(default_factory=list)
    wine_ids: list[PydanticObjectId] = Field(default_factory=list)
    notes: str = ""
    rating: Optional[float] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "tasting_sessions"
        indexes = [
            "owner_id",
            [("owner_id", 1), ("date", -1)],
        ]

    def __repr__(self) -> str:
        return f"<TastingSession(id={self.id}, name={self.name}, wines={len(self.wine_ids)})>"
