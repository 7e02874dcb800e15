"""User document model for authentication with fastapi-users integration."""

from datetime import datetime, timezone
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class UserPreferences(BaseModel):
    """Embedded subdocument: stated tasting preferences."""

    favorite_regions: list[str] = Field(default_factory=list)
    favorite_grapes: list[str] = Field(default_factory=list)
    price_min: float = 0.0
    price_max: float = 0.0
    preferred_styles: list[str] = Field(default_factory=list)


class User(Document):
    """User document model for authentication.

    Compatible with fastapi-users BeanieUserDatabase: the first five fields
    are the ones fastapi-users reads and writes.
    """

    email: Indexed(str, unique=True)
    hashed_password: str
    is_active: bool = True
    is_superuser: bool = False
    is_verified: bool = False

    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    preferences: UserPreferences = Field(default_factory=UserPreferences)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_login: Optional[datetime] = None

    class Settings:
        name = "users"
        email_collation = None

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, is_active={self.is_active})>"
