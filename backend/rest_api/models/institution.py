"""
Partner institutions: churches, collaborators and recovery houses.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, FieldOwnedMixin


class Church(FieldOwnedMixin, Base):
    __tablename__ = "church"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    images: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)


class Collaborator(FieldOwnedMixin, Base):
    __tablename__ = "collaborator"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[Optional[str]] = mapped_column(Text)


class RecoveryHouse(FieldOwnedMixin, Base):
    __tablename__ = "recovery_house"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[Optional[str]] = mapped_column(Text)
