"""
Authentication Dependencies

FastAPI dependencies that resolve the caller from a JWT.

Dependency Hierarchy:
=====================
    get_current_user_token()  ← Find the token and verify its signature
           │
           ▼
    get_current_user()        ← Check the user still exists

Token Sources (first match wins):
=================================
    1. Authorization: Bearer <token>
    2. x-access-token: <token>
    3. ?token=<token>           (lets <img src> fetch /media/{id})

Handlers never accept an owner id from the request; ownership is always
taken from the AuthenticatedUser returned here.

Usage:
======
    from locket.api.dependencies.auth import CurrentUser

    @router.get("/me")
    async def get_me(current_user: CurrentUser):
        return current_user.user_id
"""

from dataclasses import dataclass
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header, Query
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from locket.api.dependencies.database import DbSession
from locket.config.settings import settings
from locket.shared.core.exceptions import AuthenticationError
from locket.shared.repositories.user_repository import UserRepository
from locket.shared.utils.security import SecurityUtils


# Bearer scheme that leaves a missing header to us
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity resolved from a verified token."""

    user_id: UUID
    email: Optional[str] = None


async def get_current_user_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
    x_access_token: Annotated[Optional[str], Header()] = None,
    token: Annotated[Optional[str], Query(description="Access token")] = None,
) -> dict:
    """
    Extract and validate the JWT.

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If no token was sent or it does not verify
    """
    raw_token = (credentials.credentials if credentials else None) or x_access_token or token
    if not raw_token:
        raise AuthenticationError("token not provided")

    try:
        return SecurityUtils.decode_access_token(
            raw_token,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError("invalid token", details={"reason": str(e)}) from e


async def get_current_user(
    token: Annotated[dict, Depends(get_current_user_token)],
    db: DbSession,
) -> AuthenticatedUser:
    """
    Resolve the token's user.

    Raises:
        AuthenticationError: If the payload has no usable user_id or the
            user no longer exists
    """
    try:
        user_id = UUID(str(token.get("user_id")))
    except ValueError as e:
        raise AuthenticationError("invalid token") from e

    user = await UserRepository(db).get(user_id)
    if user is None:
        raise AuthenticationError("invalid token")

    return AuthenticatedUser(user_id=user.id, email=user.email)


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
