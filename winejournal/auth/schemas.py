"""Custom Pydantic schemas for fastapi-users with MongoDB/Beanie."""

from datetime import datetime

from beanie import PydanticObjectId
from fastapi_users import schemas
from pydantic import ConfigDict, Field

from winejournal.models.user import UserPreferences


class UserRead(schemas.BaseUser[PydanticObjectId]):
    """User as returned by the auth endpoints."""

    display_name: str | None = None
    photo_url: str | None = None
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    created_at: datetime
    last_login: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserCreate(schemas.BaseUserCreate):
    display_name: str | None = Field(None, max_length=100)


class UserUpdate(schemas.BaseUserUpdate):
    display_name: str | None = Field(None, max_length=100)
    photo_url: str | None = None
    preferences: UserPreferences | None = None
