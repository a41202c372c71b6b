"""
Outreach services: announcements and agenda events.

Both expose a public date-range read used by the field landing pages, on
top of the generic lifecycle.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.orm import Session

from rest_api.models import Agenda, Announcement
from rest_api.services.base_service import FieldScopedService
from rest_api.services.crud.registry import get_resource


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AnnouncementService(FieldScopedService):
    """
    Business rules:
    - Fixed announcements are always listed by the range read
    - Range results show fixed announcements first, then newest first
    """

    def __init__(self, db: Session):
        super().__init__(db, get_resource("announcement"))

    def find_by_range(self, gte: datetime, lte: datetime) -> list[Announcement]:
        """Active announcements created within [gte, lte], plus every fixed one."""
        return list(
            self._repo.find_many(
                or_(
                    Announcement.created_at.between(as_utc(gte), as_utc(lte)),
                    Announcement.fixed.is_(True),
                ),
                order_by=[Announcement.fixed.desc(), Announcement.created_at.desc()],
            )
        )


class AgendaService(FieldScopedService):
    def __init__(self, db: Session):
        super().__init__(db, get_resource("agenda"))

    def find_by_range(self, gte: datetime, lte: datetime) -> list[Agenda]:
        """Active events whose date falls within [gte, lte], earliest first."""
        return list(
            self._repo.find_many(
                Agenda.date.between(as_utc(gte), as_utc(lte)),
                order_by=[Agenda.date.asc(), Agenda.id.asc()],
            )
        )
