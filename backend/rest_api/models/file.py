"""
File: metadata of an uploaded object. Storage itself is external.
"""

from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, FieldOwnedMixin


class File(FieldOwnedMixin, Base):
    __tablename__ = "file"

    name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    mime_type: Mapped[str] = mapped_column(String(128), nullable=False)
    size: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
