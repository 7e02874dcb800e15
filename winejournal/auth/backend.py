"""JWT authentication backend for fastapi-users."""

import uuid
from typing import Optional

from fastapi_users import models
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    JWTStrategy,
)
from fastapi_users.jwt import generate_jwt
from fastapi_users.manager import BaseUserManager

from winejournal.config import settings

bearer_transport = BearerTransport(tokenUrl="/api/auth/login")


class RevocableJWTStrategy(JWTStrategy):
    """JWT strategy whose tokens carry a ``jti`` and can be revoked on logout."""

    async def write_token(self, user: models.UP) -> str:
        data = {
            "sub": str(user.id),
            "aud": self.token_audience,
            "jti": uuid.uuid4().hex,
        }
        return generate_jwt(data, self.encode_key, self.lifetime_seconds, algorithm=self.algorithm)

    async def read_token(
        self,
        token: Optional[str],
        user_manager: BaseUserManager[models.UP, models.ID],
    ) -> Optional[models.UP]:
        from winejournal.services.auth import decode_token
        from winejournal.models.token_blacklist import RevokedToken

        user = await super().read_token(token, user_manager)
        if user is None or token is None:
            return user
        jti = decode_token(token).get("jti")
        if jti and await RevokedToken.is_revoked(jti):
            return None
        return user

    async def destroy_token(self, token: str, user: models.UP) -> None:
        from winejournal.services.auth import revoke_token

        await revoke_token(token, user_id=str(user.id), reason="logout")


def get_jwt_strategy() -> RevocableJWTStrategy:
    from winejournal.services.auth import token_lifetime_seconds

    return RevocableJWTStrategy(
        secret=settings.secret_key,
        lifetime_seconds=token_lifetime_seconds(),
    )


auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)
