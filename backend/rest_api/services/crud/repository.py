"""
Repository Pattern for database access.

Provides the persistence collaborator of the lifecycle engine: a thin,
model-generic layer over a SQLAlchemy Session whose default scope hides
soft-deleted rows.

Usage:
    from rest_api.services.crud.repository import ResourceRepository

    repo = ResourceRepository(Report, db)

    report = repo.find_unique(report_id)
    reports = repo.find_many(Report.field_id == field_id, limit=20)
    total = repo.count(Report.year == 2024)

    # Soft-deleted rows are only visible on request
    repo.find_by_ids(ids, include_deleted=True, lock=True)

    # Multi-statement operations
    with repo.transaction():
        repo.update_many(ids, {"deleted": None})
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from rest_api.models import Base
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class ResourceRepository(Generic[ModelT]):
    """
    Repository for models carrying the ``deleted`` soft delete marker.

    Reads exclude soft-deleted rows unless ``include_deleted=True``.
    Writes never commit on their own; use ``transaction()``.
    """

    def __init__(self, model: type[ModelT], session: Session):
        self._model = model
        self._session = session
        self._columns = frozenset(model.__table__.columns.keys())

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    # =========================================================================
    # Query helpers
    # =========================================================================

    def _base_query(self, include_deleted: bool) -> Select:
        """Create base select query in the requested scope."""
        query = select(self._model)
        return self._apply_scope(query, include_deleted)

    def _apply_scope(self, query: Select, include_deleted: bool) -> Select:
        if not include_deleted:
            query = query.where(self._model.deleted.is_(None))
        return query

    def _columns_only(self, data: dict[str, Any]) -> dict[str, Any]:
        """Drop keys that are not columns of the model."""
        return {k: v for k, v in data.items() if k in self._columns}

    # =========================================================================
    # Reads
    # =========================================================================

    def find_unique(
        self,
        entity_id: str,
        *,
        include_deleted: bool = False,
        refresh: bool = False,
    ) -> ModelT | None:
        """
        Find entity by primary key.

        Args:
            entity_id: The primary key value.
            include_deleted: Include soft-deleted entities.
            refresh: Overwrite an already loaded instance with database state.
        """
        query = self._base_query(include_deleted).where(self._model.id == entity_id)
        if refresh:
            query = query.execution_options(populate_existing=True)
        return self._session.scalar(query)

    def find_first(
        self,
        *criteria: Any,
        include_deleted: bool = False,
        lock: bool = False,
    ) -> ModelT | None:
        """
        Find the first entity matching all criteria.

        Args:
            criteria: SQLAlchemy boolean expressions.
            include_deleted: Include soft-deleted entities.
            lock: Lock the row until the transaction ends (SELECT ... FOR UPDATE).
        """
        query = self._base_query(include_deleted).where(*criteria)
        if lock:
            query = query.with_for_update()
        return self._session.scalars(query.limit(1)).first()

    def find_many(
        self,
        *criteria: Any,
        include_deleted: bool = False,
        offset: int | None = None,
        limit: int | None = None,
        order_by: Sequence[Any] | None = None,
    ) -> Sequence[ModelT]:
        """
        Find entities matching all criteria.

        Args:
            criteria: SQLAlchemy boolean expressions.
            include_deleted: Include soft-deleted entities.
            offset: Number of results to skip.
            limit: Maximum number of results.
            order_by: Columns or expressions to order by.

        Returns:
            Sequence of entities.
        """
        query = self._base_query(include_deleted).where(*criteria)

        if order_by:
            query = query.order_by(*order_by)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        return self._session.scalars(query).all()

    def find_by_ids(
        self,
        ids: Sequence[str],
        *,
        include_deleted: bool = False,
        lock: bool = False,
    ) -> Sequence[ModelT]:
        """Find every entity whose id is in ``ids``, optionally row-locked."""
        query = self._base_query(include_deleted).where(self._model.id.in_(ids))
        if lock:
            query = query.with_for_update()
        return self._session.scalars(query).all()

    def count(self, *criteria: Any, include_deleted: bool = False) -> int:
        """Count entities matching all criteria."""
        query = select(func.count()).select_from(self._model).where(*criteria)
        query = self._apply_scope(query, include_deleted)
        return self._session.scalar(query) or 0

    # =========================================================================
    # Writes (not committed)
    # =========================================================================

    def create(self, data: dict[str, Any]) -> ModelT:
        """Insert a new entity and flush it so defaults are populated."""
        entity = self._model(**self._columns_only(data))
        self._session.add(entity)
        self._session.flush()
        return entity

    def update(
        self,
        entity_id: str,
        data: dict[str, Any],
        *,
        include_deleted: bool = False,
    ) -> int:
        """
        Partially update one entity.

        Returns:
            Number of rows matched (0 or 1).
        """
        values = self._columns_only(data)
        query = update(self._model).where(self._model.id == entity_id)
        if not include_deleted:
            query = query.where(self._model.deleted.is_(None))
        if not values:
            # Nothing to write; still report whether the row matched
            return self.count(self._model.id == entity_id, include_deleted=include_deleted)
        result = self._session.execute(query.values(**values))
        return result.rowcount

    def update_many(self, ids: Sequence[str], data: dict[str, Any]) -> int:
        """Update every entity in ``ids`` regardless of lifecycle state."""
        query = (
            update(self._model)
            .where(self._model.id.in_(ids))
            .values(**self._columns_only(data))
        )
        return self._session.execute(query).rowcount

    def delete_many(self, ids: Sequence[str]) -> int:
        """Physically delete every entity in ``ids``."""
        query = delete(self._model).where(self._model.id.in_(ids))
        return self._session.execute(query).rowcount

    def delete_where(self, *criteria: Any) -> int:
        """Physically delete every entity matching all criteria, in any state."""
        query = delete(self._model).where(*criteria)
        return self._session.execute(query).rowcount

    # =========================================================================
    # Transactions
    # =========================================================================

    @contextmanager
    def transaction(self) -> Iterator["ResourceRepository[ModelT]"]:
        """
        Run a block atomically.

        Commits when the block completes and rolls back on any exception,
        which is re-raised unchanged.
        """
        try:
            yield self
        except Exception:
            self._session.rollback()
            logger.debug("Transaction rolled back", model=self._model.__name__)
            raise
        safe_commit(self._session)
