"""
Outreach content: announcements, agenda events and testimonials.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, FieldOwnedMixin


class Announcement(FieldOwnedMixin, Base):
    """
    Field announcement. ``fixed`` announcements are pinned and always
    listed by the range query.
    """

    __tablename__ = "announcement"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    attachments: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    fixed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)


class Agenda(FieldOwnedMixin, Base):
    """Scheduled field event."""

    __tablename__ = "agenda"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    attachments: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)


class Testimonial(FieldOwnedMixin, Base):
    __tablename__ = "testimonial"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    text: Mapped[str] = mapped_column(Text, nullable=False)
