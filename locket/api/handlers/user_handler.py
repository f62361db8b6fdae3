"""
User Handler

Generic resource routes for users. A user owns their own row, so every
query is scoped to the caller and other users are reported as not found.
Creating a user here hashes the supplied password; self-service sign-up
goes through /api/auth/register.
"""

from locket.api.handlers.resource_handler import build_resource_router
from locket.shared.repositories.user_repository import UserRepository
from locket.shared.schemas.user import UserCreate, UserResponse, UserUpdate


router = build_resource_router(
    repository=UserRepository,
    resource_name="User",
    response_schema=UserResponse,
    create_schema=UserCreate,
    update_schema=UserUpdate,
)
