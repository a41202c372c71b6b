"""
Contact: message sent through the public contact form.
"""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, LifecycleMixin


class Contact(LifecycleMixin, Base):
    """Not owned by any field; managed by WEB_MASTER only."""

    __tablename__ = "contact"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
