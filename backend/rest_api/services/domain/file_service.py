"""
File metadata service.

Object storage is external; this service only tracks metadata and its
lifecycle.
"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.orm import Session

from rest_api.models import File
from rest_api.models.base import utcnow
from rest_api.services.base_service import FieldScopedService
from rest_api.services.crud.registry import get_resource
from shared.config.constants import Messages
from shared.config.logging import lifecycle_logger as logger
from shared.security.principal import Principal
from shared.utils.exceptions import ValidationError


class FileService(FieldScopedService):
    def __init__(self, db: Session):
        super().__init__(db, get_resource("file"))

    def bulk_remove(self, names: Sequence[str], principal: Principal) -> dict[str, int]:
        """
        Soft delete active files by name.

        Files of other fields are silently skipped unless the principal is
        WEB_MASTER.

        Returns:
            ``{"count": n}`` with the number of files removed.
        """
        names = list(dict.fromkeys(names))
        if not names:
            raise ValidationError(Messages.EMPTY_IDS, resource=self._config.key)

        criteria = [File.name.in_(names)]
        if not principal.is_web_master:
            criteria.append(File.field_id == principal.field_id)

        with self._repo.transaction():
            ids = [f.id for f in self._repo.find_many(*criteria)]
            count = self._repo.update_many(ids, {"deleted": utcnow()}) if ids else 0

        logger.info(
            "Files soft-deleted by name",
            resource=self._config.key,
            requested=len(names),
            count=count,
            **principal.log_context(),
        )
        return {"count": count}
