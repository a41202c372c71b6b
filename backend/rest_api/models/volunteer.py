"""
Volunteer: a person serving in a field.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, FieldOwnedMixin


class Volunteer(FieldOwnedMixin, Base):
    __tablename__ = "volunteer"

    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[Optional[str]] = mapped_column(Text)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    avatar: Mapped[Optional[str]] = mapped_column(Text)
    joined_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    occupation: Mapped[str] = mapped_column(String(32), default="OTHER", nullable=False)
    church: Mapped[Optional[str]] = mapped_column(Text)
    priest: Mapped[Optional[str]] = mapped_column(Text)
