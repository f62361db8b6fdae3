"""
User Schemas

Request/response models for user and authentication endpoints.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from locket.shared.schemas.common import BaseSchema, TimestampMixin


class UserBase(BaseModel):
    """Base user schema."""

    email: EmailStr


class UserCreate(UserBase):
    """Schema for user registration and creation."""

    password: str = Field(
        min_length=8,
        description="Password (minimum 8 characters)",
    )
    name: Optional[str] = Field(default=None, max_length=255)


class UserLogin(UserBase):
    """Schema for user login."""

    password: str = Field(min_length=8)


class UserUpdate(BaseModel):
    """Schema for updating the authenticated user."""

    name: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, min_length=8)


class UserResponse(BaseSchema, TimestampMixin):
    """Schema for user response."""

    id: UUID
    email: str
    name: Optional[str] = None


class AuthResponse(BaseModel):
    """Schema for authentication response."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
