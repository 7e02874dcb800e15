"""Revoked JWT tokens, kept until they would have expired anyway."""

from datetime import datetime, timezone

from beanie import Document, Indexed
from pydantic import Field


class RevokedToken(Document):
    """A logged-out or otherwise revoked access token."""

    jti: Indexed(str, unique=True)
    expires_at: Indexed(datetime)
    revoked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    reason: str = "logout"

    class Settings:
        name = "revoked_tokens"

    @classmethod
    async def is_revoked(cls, jti: str) -> bool:
        return await cls.find_one(cls.jti == jti) is not None

    @classmethod
    async def revoke(
        cls,
        jti: str,
        expires_at: datetime,
        user_id: str | None = None,
        reason: str = "logout",
    ) -> "RevokedToken":
        """Add a token to the blacklist. Revoking twice is a no-op."""
        existing = await cls.find_one(cls.jti == jti)
        if existing is not None:
            return existing
        token = cls(jti=jti, expires_at=expires_at, user_id=user_id, reason=reason)
        await token.insert()
        return token

    @classmethod
    async def cleanup_expired(cls) -> int:
        """Remove tokens past their expiry. Returns the number removed."""
        result = await cls.find(cls.expires_at < datetime.now(timezone.utc)).delete()
        return result.deleted_count if result else 0
