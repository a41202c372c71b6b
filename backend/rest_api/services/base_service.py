"""
Generic lifecycle engine for field-scoped resources.

Every resource type shares one implementation of create, read, update,
soft delete, restore and hard delete, parameterized by its
ResourceConfig.

Architecture:
    Router (thin) → FieldScopedService (lifecycle) → AccessPolicy (rules)
                                                   → ResourceRepository (data access)

Lifecycle per record:
    create → ACTIVE --remove--> SOFT_DELETED --hard_remove--> purged
                    <--restore--

Usage:
    from rest_api.services.base_service import FieldScopedService
    from rest_api.services.crud.registry import get_resource

    service = FieldScopedService(db, get_resource("report"))
    report = service.create(principal, {"title": "Março", ...})
    service.remove(report.id, principal)
    service.restore([report.id], principal)
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.models.base import utcnow
from rest_api.services.crud.policy import AccessPolicy
from rest_api.services.crud.query import ListQuery, Page, paginate
from rest_api.services.crud.registry import ResourceConfig
from rest_api.services.crud.repository import ResourceRepository
from shared.config.logging import lifecycle_logger as logger
from shared.security.principal import Principal


class FieldScopedService:
    """
    Lifecycle and query engine of one resource type.

    Mutations run their existence check, authorization and write inside a
    single transaction, with the target rows locked (SELECT ... FOR UPDATE)
    so concurrent transitions on the same id are serialized.
    """

    def __init__(self, db: Session, config: ResourceConfig):
        self._db = db
        self._config = config
        self._repo: ResourceRepository = ResourceRepository(config.model, db)
        self._policy = AccessPolicy(config)

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def config(self) -> ResourceConfig:
        return self._config

    @property
    def repo(self) -> ResourceRepository:
        """Repository for data access."""
        return self._repo

    @property
    def policy(self) -> AccessPolicy:
        return self._policy

    def _log(self, message: str, principal: Principal | None, **context: Any) -> None:
        principal_context = principal.log_context() if principal else {}
        logger.info(message, resource=self._config.key, **context, **principal_context)

    # =========================================================================
    # Read Operations (public)
    # =========================================================================

    def find_one(self, entity_id: str) -> Base | None:
        """Return the active record, or None. Never raises on absence."""
        return self._repo.find_unique(entity_id)

    def find_all(
        self,
        query: ListQuery | None = None,
        *,
        include_deleted: bool = False,
    ) -> Page:
        """
        Paginated listing.

        Args:
            query: Pagination, sort, search and filter parameters.
            include_deleted: Widen the scope to soft-deleted records. Never
                exposed through public endpoints.

        Raises:
            SearchParityError: Filter fields and values differ in length.
            ValidationError: Unknown sort or filter key.
        """
        return paginate(
            self._repo,
            self._config,
            query or ListQuery(),
            include_deleted=include_deleted,
        )

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, principal: Principal, payload: dict[str, Any]) -> Base:
        """
        Create an active record.

        Raises:
            ValidationError: WEB_MASTER did not name the field.
            ForbiddenError: Resource is WEB_MASTER-only.
        """
        self._policy.check_role(principal, "create")
        data = self._policy.prepare_create(principal, payload)

        with self._repo.transaction():
            entity = self._repo.create(data)
            entity_id = entity.id

        self._log(
            "Resource created",
            principal,
            entity_id=entity_id,
            field_id=data.get("field_id"),
        )
        return entity

    def update(self, entity_id: str, principal: Principal, payload: dict[str, Any]) -> Base:
        """
        Partially update an active record.

        Raises:
            NotFoundError: No active record with this id, or it vanished
                before the write.
            ForbiddenError: Record belongs to another field.
        """
        self._policy.check_role(principal, "update")
        data = self._policy.prepare_update(principal, payload)

        with self._repo.transaction():
            entity = self._repo.find_first(self._config.model.id == entity_id, lock=True)
            self._policy.authorize(principal, entity, action="update", entity_id=entity_id)

            if data and self._repo.update(entity_id, data) == 0:
                raise self._config.not_found(entity_id=entity_id, reason="no row matched")

            entity = self._repo.find_unique(entity_id, refresh=True)

        self._log(
            "Resource updated",
            principal,
            entity_id=entity_id,
            keys=sorted(data),
        )
        return entity

    def remove(self, entity_id: str, principal: Principal) -> Base:
        """
        Soft delete an active record.

        A second remove of the same id raises NotFound: soft-deleted rows
        are outside the default scope.

        Raises:
            NotFoundError: No active record with this id.
            ForbiddenError: Record belongs to another field.
        """
        self._policy.check_role(principal, "remove")

        with self._repo.transaction():
            entity = self._repo.find_first(self._config.model.id == entity_id, lock=True)
            self._policy.authorize(principal, entity, action="remove", entity_id=entity_id)

            if self._repo.update(entity_id, {"deleted": utcnow()}) == 0:
                raise self._config.not_found(entity_id=entity_id, reason="no row matched")

            entity = self._repo.find_unique(entity_id, include_deleted=True, refresh=True)

        self._log("Resource soft-deleted", principal, entity_id=entity_id)
        return entity

    def restore(self, ids: Sequence[str], principal: Principal) -> dict[str, int]:
        """
        Clear the soft delete marker of every id, all or nothing.

        Raises:
            ValidationError: Empty id list.
            NotFoundError: Any id does not exist.
            ForbiddenError: Any record belongs to another field.
        """
        self._policy.check_role(principal, "restore")
        ids = self._policy.check_ids(ids)

        with self._repo.transaction():
            entities = self._repo.find_by_ids(ids, include_deleted=True, lock=True)
            self._policy.authorize_batch(principal, ids, entities, action="restore")

            count = self._repo.update_many(ids, {"deleted": None})
            if count != len(ids):
                raise self._config.not_found_plural(
                    action="restore", requested=len(ids), affected=count
                )

        self._log("Resources restored", principal, ids=ids, count=count)
        return {"count": count}

    def hard_remove(self, ids: Sequence[str], principal: Principal) -> dict[str, int]:
        """
        Physically delete every id, all or nothing. Irreversible.

        Raises:
            ValidationError: Empty id list.
            NotFoundError: Any id does not exist.
            ForbiddenError: Any record belongs to another field.
        """
        self._policy.check_role(principal, "hard_remove")
        ids = self._policy.check_ids(ids)

        with self._repo.transaction():
            entities = self._repo.find_by_ids(ids, include_deleted=True, lock=True)
            self._policy.authorize_batch(principal, ids, entities, action="hard_remove")

            count = self._repo.delete_many(ids)
            if count != len(ids):
                raise self._config.not_found_plural(
                    action="hard_remove", requested=len(ids), affected=count
                )

        self._log("Resources purged", principal, ids=ids, count=count)
        return {"count": count}
