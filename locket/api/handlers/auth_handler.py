"""
Authentication Handler

Handles user registration and login endpoints. Both are public.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers only parse the request, call the service and wrap the result in
the reply envelope. Service errors (DuplicateResourceError,
AuthenticationError) propagate to the exception handlers.
"""

from fastapi import APIRouter, Depends

from locket.api.dependencies.services import get_auth_service
from locket.shared.models.user import User
from locket.shared.schemas.common import Reply
from locket.shared.schemas.user import (
    AuthResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from locket.shared.services.auth_service import AuthService


router = APIRouter()


def _auth_response(user: User, access_token: str, expires_in: int) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        expires_in=expires_in,
    )


@router.post("/register", response_model=Reply[AuthResponse])
async def register(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.

    Creates a new user account and returns an access token.

    Raises:
        409: If the email is already registered
    """
    user, access_token, expires_in = await auth_service.register_user(
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
    )
    return Reply.success(_auth_response(user, access_token, expires_in))


@router.post("/login", response_model=Reply[AuthResponse])
async def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate a user and return an access token.

    Raises:
        401: If the credentials are invalid
    """
    user, access_token, expires_in = await auth_service.login_user(
        email=credentials.email,
        password=credentials.password,
    )
    return Reply.success(_auth_response(user, access_token, expires_in))
