"""
User Repository

Database operations specific to the User model.

A user is its own owner (Ownership.SELF): when the generic router scopes a
query to the authenticated user, a caller only ever sees their own row.

Common Operations:
==================
- get_by_email()   → Find user by email address
- email_exists()   → Check if email is already registered
- store()          → Create, hashing a plain `password` field on the way in
"""

from typing import Any, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from locket.shared.core.exceptions import DuplicateResourceError, ValidationError
from locket.shared.models.enums import Ownership
from locket.shared.models.user import User
from locket.shared.repositories.base import BaseRepository
from locket.shared.utils.security import SecurityUtils


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    ownership = Ownership.SELF
    owner_field = "id"
    searchable_fields = ("email", "name")
    filterable_fields = ("email", "name")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        SQL Generated:
            SELECT * FROM users WHERE email = 'user@example.com'
        """
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if email is already registered."""
        return await self.get_by_email(email) is not None

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def store(self, fields: Mapping[str, Any]) -> User:
        """
        Create a user from plain fields.

        A `password` entry is replaced by its bcrypt hash; a pre-hashed
        `password_hash` is accepted as is.

        Raises:
            ValidationError: If neither password nor password_hash is given
            DuplicateResourceError: If the email is already registered
        """
        values = dict(fields)
        password = values.pop("password", None)
        if password is not None:
            values["password_hash"] = SecurityUtils.hash_password(password)
        if not values.get("password_hash"):
            raise ValidationError("Password is required", details={"field": "password"})

        if await self.email_exists(values.get("email", "")):
            raise DuplicateResourceError("Email already registered")

        return await super().store(values)

    async def update(self, record_id, fields: Mapping[str, Any], owner_id=None) -> Optional[User]:
        """Partial update; a new `password` is hashed before it is stored."""
        values = dict(fields)
        password = values.pop("password", None)
        if password is not None:
            values["password_hash"] = SecurityUtils.hash_password(password)
        return await super().update(record_id, values, owner_id=owner_id)
