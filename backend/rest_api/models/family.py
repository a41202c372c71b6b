"""
Families supported by or offering support to a field.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, FieldOwnedMixin


class OfferorFamily(FieldOwnedMixin, Base):
    """Family committed to regular donations."""

    __tablename__ = "offeror_family"

    representative: Mapped[str] = mapped_column(Text, nullable=False)
    commitment: Mapped[str] = mapped_column(Text, nullable=False)
    church_denomination: Mapped[Optional[str]] = mapped_column(Text)
    group: Mapped[str] = mapped_column(String(32), nullable=False)


class WelcomedFamily(FieldOwnedMixin, Base):
    """Family receiving assistance."""

    __tablename__ = "welcomed_family"

    representative: Mapped[str] = mapped_column(Text, nullable=False)
    family_name: Mapped[str] = mapped_column(Text, nullable=False)
    observation: Mapped[Optional[str]] = mapped_column(Text)
