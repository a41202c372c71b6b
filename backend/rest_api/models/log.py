"""
Log: audit row of one mutating request.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, LifecycleMixin


class Log(LifecycleMixin, Base):
    """
    Written by the request middleware for every non-GET request.

    Not owned by any field; readable by WEB_MASTER only. ``user_id`` is
    the token subject, empty for anonymous requests.
    """

    __tablename__ = "log"

    ip: Mapped[Optional[str]] = mapped_column(String(64), index=True)
    method: Mapped[str] = mapped_column(String(10), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    query: Mapped[Optional[str]] = mapped_column(Text)
    body: Mapped[Optional[Any]] = mapped_column(JSON)
    status_code: Mapped[str] = mapped_column(String(3), nullable=False)
    user_id: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    user_role: Mapped[Optional[str]] = mapped_column(String(16))
    request_id: Mapped[Optional[str]] = mapped_column(String(64))
