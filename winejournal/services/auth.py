"""Authentication helpers: password hashing, JWT tokens and auth dependencies."""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Annotated

from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher

from winejournal.config import settings
from winejournal.models.token_blacklist import RevokedToken
from winejournal.models.user import User

security_logger = logging.getLogger("winejournal.security")

# Argon2, the same hasher fastapi-users uses by default
password_hash = PasswordHash((Argon2Hasher(),))

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

ALGORITHM = "HS256"


def token_lifetime_seconds() -> int:
    return settings.token_lifetime_minutes * 60


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return password_hash.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return password_hash.hash(password)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token carrying a unique ``jti`` for revocation."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(seconds=token_lifetime_seconds()))
    to_encode.update({"exp": expire, "jti": uuid.uuid4().hex})
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and verify a token.

    The audience claim set by fastapi-users is not checked here so tokens
    from both issuers are accepted.

    Raises:
        JWTError: If the signature or expiry is invalid.
    """
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[ALGORITHM],
        options={"verify_aud": False},
    )


async def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> User | None:
    """Resolve the user for a bearer token.

    The token subject may be an email address or a user id. Revoked tokens
    and inactive users resolve to None.
    """
    if not token:
        return None

    try:
        payload = decode_token(token)
    except JWTError:
        return None

    subject: str | None = payload.get("sub")
    if subject is None:
        return None

    jti: str | None = payload.get("jti")
    if jti and await RevokedToken.is_revoked(jti):
        return None

    user = await User.find_one(User.email == subject)
    if user is None:
        try:
            user = await User.get(PydanticObjectId(subject))
        except (InvalidId, TypeError, ValueError):
            user = None

    if user is None or not user.is_active:
        return None
    return user


async def require_auth(
    user: Annotated[User | None, Depends(get_current_user)],
) -> User:
    """Require authentication; raises 401 otherwise."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def revoke_token(token: str, user_id: str | None = None, reason: str = "logout") -> bool:
    """Blacklist a token until its natural expiry.

    Returns:
        True if the token was revoked, False if it was invalid or had no jti.
    """
    try:
        payload = decode_token(token)
    except JWTError:
        security_logger.warning("Token revocation failed - invalid JWT: user_id=%s", user_id)
        return False

    jti: str | None = payload.get("jti")
    exp: int | None = payload.get("exp")
    if not jti or not exp:
        return False

    await RevokedToken.revoke(
        jti=jti,
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        user_id=user_id,
        reason=reason,
    )
    security_logger.info(
        "Token revoked: user_id=%s, reason=%s, jti=%s",
        user_id or "unknown",
        reason,
        jti,
    )
    return True


CurrentUser = Annotated[User | None, Depends(get_current_user)]
RequireAuth = Annotated[User, Depends(require_auth)]
