"""
Field-scoped access policy.

Pure decision functions over data already fetched by the lifecycle engine:
who may act on which record, and which payload substitutions apply.

Rules:
- WEB_MASTER is exempt from every field check and must name the field
  explicitly when creating.
- Every other role acts only inside its own field; the field of a create
  payload is forced to the principal's and update payloads can never move
  a record to another field.
- Existence is checked before ownership: an absent record is always
  NotFound, never Forbidden.
- Batch operations are all-or-nothing.
"""

from __future__ import annotations

from typing import Any, Sequence

from rest_api.models import Base
from rest_api.services.crud.registry import ResourceConfig
from shared.config.constants import Limits, Messages, PROTECTED_KEYS, Templates
from shared.config.logging import audit_access_denied
from shared.security.principal import Principal
from shared.utils.exceptions import ForbiddenError, ValidationError


class AccessPolicy:
    """Access rules of one resource type."""

    def __init__(self, config: ResourceConfig):
        self._config = config

    @property
    def config(self) -> ResourceConfig:
        return self._config

    # =========================================================================
    # Role gate
    # =========================================================================

    def check_role(self, principal: Principal, action: str) -> None:
        """
        Reject non-WEB_MASTER principals on WEB_MASTER-only resources.

        Raises:
            ForbiddenError: If the resource is WEB_MASTER-only.
        """
        if self._config.web_master_only and not principal.is_web_master:
            audit_access_denied(
                action=action,
                resource=self._config.key,
                principal_id=principal.id,
                role=principal.role.value,
                field_id=principal.field_id,
                reason="web_master_only",
            )
            raise ForbiddenError(resource=self._config.key, action=action)

    # =========================================================================
    # Payload rules
    # =========================================================================

    def prepare_create(self, principal: Principal, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Apply the create-time field rule.

        Returns:
            The payload to persist.

        Raises:
            ValidationError: If a WEB_MASTER did not name the field.
        """
        data = {k: v for k, v in payload.items() if k not in PROTECTED_KEYS}

        if not self._config.field_scoped:
            data.pop("field_id", None)
            return data

        if principal.is_web_master:
            if not data.get("field_id"):
                raise ValidationError(
                    Templates.is_not_empty("field"),
                    resource=self._config.key,
                    **principal.log_context(),
                )
        else:
            data["field_id"] = principal.field_id

        return data

    def prepare_update(self, principal: Principal, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Apply the update-time field rule.

        Only WEB_MASTER may re-assign a record to another field; the field
        key is silently dropped for everyone else. An explicit null clears
        a nullable column.

        Raises:
            ValidationError: If a null targets a required column.
        """
        data = {k: v for k, v in payload.items() if k not in PROTECTED_KEYS}

        if not (self._config.field_scoped and principal.is_web_master):
            data.pop("field_id", None)
        elif data.get("field_id") is None:
            data.pop("field_id", None)

        cleared = sorted(
            key for key, value in data.items()
            if value is None and key in self._config.required_columns
        )
        if cleared:
            raise ValidationError(
                Templates.is_not_empty(cleared[0]),
                resource=self._config.key,
                keys=cleared,
            )

        return data

    # =========================================================================
    # Record checks
    # =========================================================================

    def authorize(
        self,
        principal: Principal,
        entity: Base | None,
        *,
        action: str,
        entity_id: str,
    ) -> Base:
        """
        Check a single target record.

        Returns:
            The entity, when the principal may act on it.

        Raises:
            NotFoundError: If the entity does not exist in scope.
            ForbiddenError: If it belongs to another field.
        """
        if entity is None:
            raise self._config.not_found(entity_id=entity_id, action=action)

        if self._config.field_scoped and not principal.owns(entity.field_id):
            audit_access_denied(
                action=action,
                resource=self._config.key,
                principal_id=principal.id,
                role=principal.role.value,
                field_id=principal.field_id,
                reason="field_mismatch",
                entity_id=entity_id,
                entity_field_id=entity.field_id,
            )
            raise ForbiddenError(resource=self._config.key, entity_id=entity_id)

        return entity

    def check_ids(self, ids: Sequence[str]) -> list[str]:
        """
        Validate and de-duplicate a batch id list, preserving order.

        Raises:
            ValidationError: If the list is empty or too long.
        """
        unique = list(dict.fromkeys(ids))
        if not unique:
            raise ValidationError(Messages.EMPTY_IDS, resource=self._config.key)
        if len(unique) > Limits.MAX_BATCH_IDS:
            raise ValidationError(
                f"Máximo de {Limits.MAX_BATCH_IDS} ids por operação.",
                resource=self._config.key,
                count=len(unique),
            )
        return unique

    def authorize_batch(
        self,
        principal: Principal,
        ids: Sequence[str],
        entities: Sequence[Base],
        *,
        action: str,
    ) -> Sequence[Base]:
        """
        Check every target of a batch operation.

        Every requested id must have been fetched, and for non-WEB_MASTER
        principals every fetched record must belong to their field. A
        single failure rejects the entire batch.

        Raises:
            NotFoundError: Plural message, if any id is absent.
            ForbiddenError: If any record belongs to another field.
        """
        found = {entity.id for entity in entities}
        missing = [entity_id for entity_id in ids if entity_id not in found]
        if missing:
            raise self._config.not_found_plural(
                action=action, requested=len(ids), missing=missing
            )

        if self._config.field_scoped and not principal.is_web_master:
            foreign = [e.id for e in entities if not principal.owns(e.field_id)]
            if foreign:
                audit_access_denied(
                    action=action,
                    resource=self._config.key,
                    principal_id=principal.id,
                    role=principal.role.value,
                    field_id=principal.field_id,
                    reason="field_mismatch",
                    foreign_ids=foreign,
                )
                raise ForbiddenError(resource=self._config.key, foreign_ids=foreign)

        return entities
