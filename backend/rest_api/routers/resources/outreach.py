"""
Announcement, agenda and testimonial endpoints.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.routers.resources._lifecycle import register_lifecycle_routes
from rest_api.services.domain import AgendaService, AnnouncementService
from shared.infrastructure.db import get_db
from shared.utils.exceptions import ValidationError
from shared.utils.schemas import (
    AgendaCreate,
    AgendaOutput,
    AgendaUpdate,
    AnnouncementCreate,
    AnnouncementOutput,
    AnnouncementUpdate,
    TestimonialCreate,
    TestimonialOutput,
    TestimonialUpdate,
)


def _check_range(gte: datetime, lte: datetime) -> None:
    if gte > lte:
        raise ValidationError("'gte' deve ser anterior a 'lte'.", gte=str(gte), lte=str(lte))


# =============================================================================
# Announcements
# =============================================================================

announcement_router = APIRouter(prefix="/api/announcement", tags=["announcement"])


@announcement_router.get("/range", response_model=list[AnnouncementOutput])
def find_announcements_by_range(
    gte: datetime = Query(..., description="Start of the creation window"),
    lte: datetime = Query(..., description="End of the creation window"),
    db: Session = Depends(get_db),
) -> list[AnnouncementOutput]:
    """Announcements created in [gte, lte] plus every fixed announcement."""
    _check_range(gte, lte)
    announcements = AnnouncementService(db).find_by_range(gte, lte)
    return [AnnouncementOutput.model_validate(a) for a in announcements]


register_lifecycle_routes(
    announcement_router,
    "announcement",
    output_schema=AnnouncementOutput,
    create_schema=AnnouncementCreate,
    update_schema=AnnouncementUpdate,
)


# =============================================================================
# Agenda
# =============================================================================

agenda_router = APIRouter(prefix="/api/agenda", tags=["agenda"])


@agenda_router.get("/range", response_model=list[AgendaOutput])
def find_events_by_range(
    gte: datetime = Query(..., description="Start of the event window"),
    lte: datetime = Query(..., description="End of the event window"),
    db: Session = Depends(get_db),
) -> list[AgendaOutput]:
    """Events scheduled in [gte, lte]."""
    _check_range(gte, lte)
    events = AgendaService(db).find_by_range(gte, lte)
    return [AgendaOutput.model_validate(e) for e in events]


register_lifecycle_routes(
    agenda_router,
    "agenda",
    output_schema=AgendaOutput,
    create_schema=AgendaCreate,
    update_schema=AgendaUpdate,
)


# =============================================================================
# Testimonials
# =============================================================================

testimonial_router = register_lifecycle_routes(
    APIRouter(prefix="/api/testimonial", tags=["testimonial"]),
    "testimonial",
    output_schema=TestimonialOutput,
    create_schema=TestimonialCreate,
    update_schema=TestimonialUpdate,
)
