"""
Base Model Classes

Declarative base and the timestamp mixin shared by every Locket model.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Column types are the dialect-neutral ones (Uuid, JSON) so the same models run
on PostgreSQL in deployment and SQLite in tests.

Usage:
======
    from locket.shared.models.base import Base, TimestampMixin

    class Device(Base, TimestampMixin):
        __tablename__ = "devices"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Maps free-form dict and list annotations to a JSON column.
    """

    type_annotation_map = {
        dict[str, Any]: JSON,
        list[str]: JSON,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    - created_at: Set by the database on INSERT
    - updated_at: Set on INSERT, refreshed by SQLAlchemy on UPDATE
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
