"""
Contact service.

Contacts arrive through the public site form, belong to no field, and are
managed by WEB_MASTER only.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Contact
from rest_api.services.base_service import FieldScopedService
from rest_api.services.crud.registry import get_resource
from shared.config.constants import PROTECTED_KEYS
from shared.config.logging import lifecycle_logger as logger, mask_email


class ContactService(FieldScopedService):
    def __init__(self, db: Session):
        super().__init__(db, get_resource("contact"))

    def create_public(self, payload: dict[str, Any]) -> Contact:
        """Store a message sent by an anonymous visitor."""
        data = {k: v for k, v in payload.items() if k not in PROTECTED_KEYS}
        data.pop("field_id", None)

        with self._repo.transaction():
            contact = self._repo.create(data)
            contact_id = contact.id

        logger.info(
            "Contact received",
            resource=self._config.key,
            entity_id=contact_id,
            email=mask_email(data.get("email")),
        )
        return contact
