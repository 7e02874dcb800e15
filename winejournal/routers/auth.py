"""Authentication endpoints with fastapi-users integration."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, Field
from slowapi import Limiter
from slowapi.util import get_remote_address

from winejournal.auth import (
    UserCreate,
    UserRead,
    auth_backend,
    fastapi_users,
)
from winejournal.config import settings
from winejournal.models.user import User, UserPreferences
from winejournal.services.auth import (
    RequireAuth,
    get_password_hash,
    revoke_token,
    verify_password,
)

router = APIRouter()

security_logger = logging.getLogger("winejournal.security")

# Stricter than the global limit
limiter = Limiter(key_func=get_remote_address)

# POST /login and POST /logout (logout revokes the bearer token)
router.include_router(fastapi_users.get_auth_router(auth_backend))

if settings.registration_enabled:
    router.include_router(fastapi_users.get_register_router(UserRead, UserCreate))

# POST /forgot-password and POST /reset-password
router.include_router(fastapi_users.get_reset_password_router())

# POST /request-verify-token and POST /verify
router.include_router(fastapi_users.get_verify_router(UserRead))


class UserResponse(BaseModel):
    """Current user profile."""

    id: str
    email: str
    display_name: str | None
    photo_url: str | None
    preferences: UserPreferences
    is_verified: bool
    created_at: datetime
    last_login: datetime | None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            email=user.email,
            display_name=user.display_name,
            photo_url=user.photo_url,
            preferences=user.preferences,
            is_verified=user.is_verified,
            created_at=user.created_at,
            last_login=user.last_login,
        )


class ProfileUpdate(BaseModel):
    display_name: str | None = Field(None, max_length=100)
    photo_url: str | None = Field(None, max_length=500)
    preferences: UserPreferences | None = None


class PasswordChangeRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: RequireAuth) -> UserResponse:
    return UserResponse.from_user(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_profile(
    profile: ProfileUpdate,
    current_user: RequireAuth,
) -> UserResponse:
    """Update display name, photo or tasting preferences."""
    for field, value in profile.model_dump(exclude_unset=True).items():
        if field == "preferences":
            value = profile.preferences or UserPreferences()
        setattr(current_user, field, value)
    current_user.updated_at = datetime.now(timezone.utc)
    await current_user.save()
    return UserResponse.from_user(current_user)


@router.put("/password")
@limiter.limit("5/minute;20/hour")
async def change_password(
    request: Request,
    password_request: PasswordChangeRequest,
    current_user: RequireAuth,
) -> dict:
    """Change the current user's password and revoke the token used for the call."""
    if not verify_password(password_request.current_password, current_user.hashed_password):
        security_logger.warning(
            "Password change failed - invalid current password: user_id=%s, ip=%s",
            str(current_user.id),
            get_remote_address(request),
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )

    current_user.hashed_password = get_password_hash(password_request.new_password)
    current_user.updated_at = datetime.now(timezone.utc)
    await current_user.save()

    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        await revoke_token(
            token=auth_header[7:],
            user_id=str(current_user.id),
            reason="password_change",
        )

    security_logger.info(
        "Password changed successfully: user_id=%s, ip=%s",
        str(current_user.id),
        get_remote_address(request),
    )
    return {"message": "Password updated successfully. Please log in again."}
