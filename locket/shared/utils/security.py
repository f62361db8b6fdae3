"""
Security Utilities

Password hashing and JWT token management.

Password Hashing:
=================
bcrypt through passlib, salt generated per hash.

JWT Tokens:
===========
PyJWT, HS256 by default. Tokens carry `user_id` and `email`; the API only
trusts the `user_id` claim to decide who owns what.

Usage:
======
    from locket.shared.utils.security import SecurityUtils

    hashed = SecurityUtils.hash_password("password123")
    SecurityUtils.verify_password("password123", hashed)

    token = SecurityUtils.create_access_token(
        data={"user_id": "123"},
        secret_key="secret",
        expires_delta=timedelta(hours=1),
    )
    payload = SecurityUtils.decode_access_token(token, "secret")
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)


class SecurityUtils:
    """
    Security utilities for authentication.

    Provides:
    - Password hashing with bcrypt
    - JWT token creation and validation
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash password using bcrypt (the hash embeds its salt)."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify password against bcrypt hash."""
        return pwd_context.verify(plain_password, hashed_password)

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create JWT access token.

        Args:
            data: Payload data to encode (user_id, email)
            secret_key: Secret key for signing
            expires_delta: Token lifetime (default: 7 days)
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Encoded JWT token string
        """
        now = datetime.now(timezone.utc)
        to_encode = data.copy()
        to_encode.update({
            "exp": now + (expires_delta or timedelta(days=7)),
            "iat": now,
        })
        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict:
        """
        Decode and verify JWT token.

        Raises:
            ValueError: If token is expired or invalid
        """
        try:
            return jwt.decode(token, secret_key, algorithms=[algorithm])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")
