"""
Domain Services - per-resource application layer.

Every resource shares the generic lifecycle of FieldScopedService; the
services here add the resource-specific reads and commands.

Structure:
    Router (thin controller)
        ↓
    Service (lifecycle + resource reads)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import get_service

    service = get_service("report", db)
    years = service.get_reported_years(field_id)
"""

from __future__ import annotations

from typing import Callable

from sqlalchemy.orm import Session

from rest_api.services.base_service import FieldScopedService
from rest_api.services.crud.registry import get_resource

from .outreach_service import AnnouncementService, AgendaService
from .report_service import ReportService, MonthlyOfferService
from .file_service import FileService
from .contact_service import ContactService
from .log_service import LogService

# Resources with behavior beyond the generic lifecycle
SERVICES: dict[str, Callable[[Session], FieldScopedService]] = {
    "announcement": AnnouncementService,
    "agenda": AgendaService,
    "report": ReportService,
    "monthly-offer": MonthlyOfferService,
    "file": FileService,
    "contact": ContactService,
    "log": LogService,
}


def get_service(key: str, db: Session) -> FieldScopedService:
    """Service of a registered resource."""
    factory = SERVICES.get(key)
    if factory is not None:
        return factory(db)
    return FieldScopedService(db, get_resource(key))


__all__ = [
    "AnnouncementService",
    "AgendaService",
    "ReportService",
    "MonthlyOfferService",
    "FileService",
    "ContactService",
    "LogService",
    "SERVICES",
    "get_service",
]
