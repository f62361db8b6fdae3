"""
Device Entity Model

A device registered by a user (a phone, a photo frame). Devices carry no
behaviour of their own and are served entirely by the generic resource router.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from locket.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from locket.shared.models.user import User


class Device(Base, TimestampMixin):
    """
    Device owned by exactly one user.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owning user
        name: Human label
        identifier: Hardware or push identifier reported by the device
        platform: Optional platform string ("ios", "android", ...)
    """

    __tablename__ = "devices"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    identifier: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    platform: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="devices")

    def __repr__(self) -> str:
        return f"<Device(id={self.id}, user_id={self.user_id}, name={self.name})>"
