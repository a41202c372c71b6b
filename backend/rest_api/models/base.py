"""
Base class and lifecycle mixins for all SQLAlchemy ORM models.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class LifecycleMixin:
    """
    Mixin providing identity, audit timestamps and the soft delete marker.

    Fields added:
    - id: UUID string primary key
    - created_at, updated_at: Audit timestamps
    - deleted: Soft delete marker (None = active, timestamp = soft-deleted)

    Only presence of ``deleted`` matters; its value is informational.
    """

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=utcnow, nullable=True
    )
    deleted: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted is not None

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id='{self.id}', deleted={self.deleted})>"


class FieldOwnedMixin(LifecycleMixin):
    """
    Lifecycle mixin for records owned by a field (tenant).

    ``field_id`` changes only through a WEB_MASTER update.
    """

    @declared_attr
    def field_id(cls) -> Mapped[str]:
        return mapped_column(
            String(36), ForeignKey("field.id"), nullable=False, index=True
        )
