"""
Field: the organizational unit (tenant) that owns every resource.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, LifecycleMixin


class Field(LifecycleMixin, Base):
    """
    A regional field of the organization.
    Resources reference it by ``field_id``; it is managed outside the
    lifecycle engine.
    """

    __tablename__ = "field"

    continent: Mapped[str] = mapped_column(Text, nullable=False)
    country: Mapped[str] = mapped_column(Text, nullable=False)
    state: Mapped[str] = mapped_column(Text, nullable=False)
    abbreviation: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    designation: Mapped[str] = mapped_column(Text, nullable=False)
    street_relief: Mapped[Optional[str]] = mapped_column(Text)
    collection_point: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Field(id='{self.id}', abbreviation='{self.abbreviation}')>"
