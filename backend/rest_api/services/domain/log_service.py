"""
Request log service.

Rows are written by the request middleware, never through the API; the
API only lists them. Rows older than the retention window are purged by
``field-ops logs-purge``.
"""

from __future__ import annotations

import calendar
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Log
from rest_api.models.base import utcnow
from rest_api.services.base_service import FieldScopedService
from rest_api.services.crud.registry import get_resource
from shared.config.logging import get_logger
from shared.utils.exceptions import ValidationError

logger = get_logger(__name__)


def months_before(moment: datetime, months: int) -> datetime:
    """
    ``moment`` moved back ``months`` calendar months.

    The day is clamped to the target month's length (31 Mar - 1 month is
    28 or 29 Feb).
    """
    index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class LogService(FieldScopedService):
    def __init__(self, db: Session):
        super().__init__(db, get_resource("log"))

    def record(self, entry: dict[str, Any]) -> Log:
        """Store one request log row."""
        with self._repo.transaction():
            log = self._repo.create(entry)
        return log

    def purge_older_than(self, months: int, *, now: datetime | None = None) -> int:
        """
        Physically delete rows created ``months`` or more months ago.

        Returns:
            Number of rows deleted.

        Raises:
            ValidationError: If ``months`` is below 1.
        """
        if months < 1:
            raise ValidationError("months deve ser maior ou igual a 1", months=months)

        cutoff = months_before(now or utcnow(), months)
        with self._repo.transaction():
            count = self._repo.delete_where(Log.created_at <= cutoff)

        logger.info("Old request logs purged", cutoff=cutoff.isoformat(), count=count)
        return count
