"""
Report and monthly offer services.

Both add per-field period reads used to build the report archive menus.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import MonthlyOffer, Report
from rest_api.services.base_service import FieldScopedService
from rest_api.services.crud.registry import get_resource


class ReportService(FieldScopedService):
    def __init__(self, db: Session):
        super().__init__(db, get_resource("report"))

    def get_reported_years(self, field_id: str) -> list[int]:
        """Distinct years with active reports of a field, ascending."""
        query = (
            select(Report.year)
            .where(Report.field_id == field_id, Report.deleted.is_(None))
            .distinct()
            .order_by(Report.year.asc())
        )
        return list(self._db.scalars(query).all())


class MonthlyOfferService(FieldScopedService):
    def __init__(self, db: Session):
        super().__init__(db, get_resource("monthly-offer"))

    def get_collected_period(self, field_id: str) -> dict[int, list[int]]:
        """
        Months with active offers of a field, grouped by year.

        Returns:
            ``{year: [month, ...]}``, years and months ascending.
        """
        query = (
            select(MonthlyOffer.year, MonthlyOffer.month)
            .where(MonthlyOffer.field_id == field_id, MonthlyOffer.deleted.is_(None))
            .distinct()
            .order_by(MonthlyOffer.year.asc(), MonthlyOffer.month.asc())
        )
        period: dict[int, list[int]] = {}
        for year, month in self._db.execute(query):
            period.setdefault(year, []).append(month)
        return period
