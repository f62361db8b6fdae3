"""
Authentication Service

Business logic for user registration and login.

Usage:
======
    from locket.shared.services.auth_service import AuthService

    service = AuthService(db)
    user, token, expires = await service.register_user(email, password)
"""

from datetime import timedelta
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from locket.config.settings import settings
from locket.shared.core.exceptions import AuthenticationError
from locket.shared.core.logging import logger
from locket.shared.models.user import User
from locket.shared.repositories.user_repository import UserRepository
from locket.shared.utils.security import SecurityUtils


class AuthService:
    """
    Service for authentication-related business logic.

    Handles:
    - User registration with email/password
    - User authentication (login)
    - JWT token generation
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    @staticmethod
    def issue_token(user: User) -> Tuple[str, int]:
        """
        Create an access token for a user.

        Returns:
            Tuple of (access_token, expires_in_seconds)
        """
        access_token = SecurityUtils.create_access_token(
            data={"user_id": str(user.id), "email": user.email},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )
        return access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    async def register_user(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
    ) -> Tuple[User, str, int]:
        """
        Register a new user and log them in.

        Returns:
            Tuple of (user, access_token, expires_in_seconds)

        Raises:
            DuplicateResourceError: If email already registered
        """
        user = await self.repo.store({"email": email, "password": password, "name": name})
        logger.info("User registered", user_id=str(user.id))

        access_token, expires_in = self.issue_token(user)
        return user, access_token, expires_in

    async def login_user(
        self,
        email: str,
        password: str,
    ) -> Tuple[User, str, int]:
        """
        Verify credentials and return a token.

        Raises:
            AuthenticationError: If credentials are invalid
        """
        user = await self.repo.get_by_email(email)
        if not user or not SecurityUtils.verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        access_token, expires_in = self.issue_token(user)
        return user, access_token, expires_in
