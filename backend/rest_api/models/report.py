"""
Periodic field records: activity reports and monthly offer totals.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import JSON, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, FieldOwnedMixin


class Report(FieldOwnedMixin, Base):
    """Monthly or annual activity report of a field."""

    __tablename__ = "report"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    short_description: Mapped[str] = mapped_column(Text, nullable=False)
    text: Mapped[Optional[str]] = mapped_column(Text)
    attachments: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    month: Mapped[Optional[int]] = mapped_column(Integer)
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(16), default="ORDINARY", nullable=False)


class MonthlyOffer(FieldOwnedMixin, Base):
    """Offers collected by a field in one month."""

    __tablename__ = "monthly_offer"

    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    food_qnt: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    monetary_value: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    others_qnt: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
