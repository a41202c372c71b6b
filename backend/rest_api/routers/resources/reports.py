"""
Report and monthly offer endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rest_api.routers.resources._lifecycle import register_lifecycle_routes
from rest_api.services.domain import MonthlyOfferService, ReportService
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    MonthlyOfferCreate,
    MonthlyOfferOutput,
    MonthlyOfferUpdate,
    ReportCreate,
    ReportOutput,
    ReportUpdate,
)

# =============================================================================
# Reports
# =============================================================================

report_router = APIRouter(prefix="/api/report", tags=["report"])


@report_router.get("/reported-years/{field_id}", response_model=list[int])
def get_reported_years(field_id: str, db: Session = Depends(get_db)) -> list[int]:
    """Years with at least one active report of the field, ascending."""
    return ReportService(db).get_reported_years(field_id)


register_lifecycle_routes(
    report_router,
    "report",
    output_schema=ReportOutput,
    create_schema=ReportCreate,
    update_schema=ReportUpdate,
)


# =============================================================================
# Monthly offers
# =============================================================================

monthly_offer_router = APIRouter(prefix="/api/monthly-offer", tags=["monthly-offer"])


@monthly_offer_router.get("/collected-period/{field_id}", response_model=dict[int, list[int]])
def get_collected_period(field_id: str, db: Session = Depends(get_db)) -> dict[int, list[int]]:
    """Months with active offers of the field, grouped by year."""
    return MonthlyOfferService(db).get_collected_period(field_id)


register_lifecycle_routes(
    monthly_offer_router,
    "monthly-offer",
    output_schema=MonthlyOfferOutput,
    create_schema=MonthlyOfferCreate,
    update_schema=MonthlyOfferUpdate,
)
