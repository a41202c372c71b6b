"""
Generic listing engine: pagination, sorting, free-text search and
structured filters over any registered resource.

Usage:
    from rest_api.services.crud.query import ListQuery, paginate

    query = ListQuery(page=2, items_per_page=10, search="bazar")
    page = paginate(repo, config, query)
    page.total_count, page.total_pages, page.data
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, Numeric, String, cast, or_
from sqlalchemy.orm import InstrumentedAttribute

from rest_api.services.crud.registry import ResourceConfig
from rest_api.services.crud.repository import ResourceRepository
from shared.config.constants import Limits, SortDirection, Templates
from shared.config.settings import settings
from shared.utils.exceptions import SearchParityError, ValidationError

# Operators of the full-text syntax the search box must not inject
_SEARCH_OPERATORS = re.compile(r"<->|[!&|]")
_WHITESPACE = re.compile(r"\s+")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

DEFAULT_SORT_KEY = "created_at"


@dataclass
class ListQuery:
    """
    Listing parameters.

    ``search_specific_field`` and ``search_specific_value`` are parallel
    arrays: the i-th value filters the i-th field.
    """

    page: int = 1
    items_per_page: int = field(default_factory=lambda: settings.items_per_page)
    sort_by: str | None = None
    sort_direction: SortDirection = SortDirection.DESC
    search: str = ""
    search_specific_field: list[str] = field(default_factory=list)
    search_specific_value: list[str] = field(default_factory=list)

    def __post_init__(self):
        """
        Reject out-of-range pagination.

        Raises:
            ValidationError: Page below 1, or page size outside 1..max_items_per_page.
        """
        if self.page < 1:
            raise ValidationError("page deve ser maior ou igual a 1", page=self.page)
        if not 1 <= self.items_per_page <= settings.max_items_per_page:
            raise ValidationError(
                f"itemsPerPage deve estar entre 1 e {settings.max_items_per_page}",
                items_per_page=self.items_per_page,
            )
        self.sort_direction = SortDirection(self.sort_direction)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.items_per_page


@dataclass
class Page:
    """One page of a listing."""

    data: list[Any]
    total_count: int
    total_pages: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
        }


def total_pages(total_count: int, items_per_page: int) -> int:
    """ceil(total_count / items_per_page); 0 for an empty listing."""
    return -(-total_count // items_per_page)


# =============================================================================
# Input normalization
# =============================================================================


def clean_search(search: str) -> str:
    """Strip search operators and collapse repeated whitespace."""
    cleaned = _SEARCH_OPERATORS.sub(" ", search or "")
    return _WHITESPACE.sub(" ", cleaned).strip()


def column_key(key: str) -> str:
    """Accept both ``createdAt`` and ``created_at`` spellings."""
    return _CAMEL_BOUNDARY.sub("_", key.strip()).lower()


def check_search_parity(fields: Sequence[str], values: Sequence[str]) -> None:
    """
    Structured filters must pair every field with exactly one value.

    Raises:
        SearchParityError: If the arrays differ in length.
    """
    if len(fields) != len(values):
        raise SearchParityError(len(fields), len(values))


def _column(config: ResourceConfig, key: str, kind: str) -> InstrumentedAttribute:
    """Resolve a sortable, filterable column. JSON columns are neither."""
    name = column_key(key)
    if name not in config.columns:
        raise ValidationError(Templates.invalid_key(kind, key), resource=config.key)
    column = getattr(config.model, name)
    if isinstance(column.property.columns[0].type, JSON):
        raise ValidationError(Templates.invalid_key(kind, key), resource=config.key)
    return column


def coerce_value(column: InstrumentedAttribute, raw: str) -> Any:
    """
    Convert a filter value to the column's Python type.

    Numeric columns get numbers, boolean columns accept true/false and
    datetime columns accept ISO 8601. Other columns compare as text.

    Raises:
        ValidationError: If the value cannot be converted.
    """
    column_type = column.property.columns[0].type
    try:
        if isinstance(column_type, Boolean):
            lowered = raw.strip().lower()
            if lowered not in ("true", "false", "1", "0"):
                raise ValueError(raw)
            return lowered in ("true", "1")
        if isinstance(column_type, Integer):
            return int(raw)
        if isinstance(column_type, (Float, Numeric)):
            return float(raw)
        if isinstance(column_type, DateTime):
            return datetime.fromisoformat(raw)
    except ValueError:
        raise ValidationError(
            f"Valor inválido para '{column.key}': '{raw}'", column=column.key
        )
    return raw


# =============================================================================
# Criteria builders
# =============================================================================


def search_criteria(config: ResourceConfig, search: str) -> list[Any]:
    """
    Case-insensitive containment over the resource's search keys.

    Searches shorter than ``min_search_length`` after cleaning are ignored.
    """
    term = clean_search(search)[: Limits.MAX_SEARCH_LENGTH]
    if not config.search_keys or len(term) < settings.min_search_length:
        return []

    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"

    clauses = []
    for key in config.search_keys:
        column = getattr(config.model, key)
        if not isinstance(column.property.columns[0].type, String):
            column = cast(column, String)
        clauses.append(column.ilike(pattern, escape="\\"))

    return [or_(*clauses)]


def filter_criteria(
    config: ResourceConfig,
    fields: Sequence[str],
    values: Sequence[str],
) -> list[Any]:
    """Equality filter for each (field, value) pair."""
    check_search_parity(fields, values)
    if len(fields) > Limits.MAX_FILTER_TERMS:
        raise ValidationError(
            f"Máximo de {Limits.MAX_FILTER_TERMS} filtros por consulta.",
            resource=config.key,
        )

    criteria = []
    for key, raw in zip(fields, values):
        column = _column(config, key, "filtro")
        criteria.append(column == coerce_value(column, raw))
    return criteria


def order_by(config: ResourceConfig, sort_by: str | None, direction: SortDirection) -> list[Any]:
    """Requested ordering, with id as a stable tie-breaker."""
    column = _column(config, sort_by or DEFAULT_SORT_KEY, "ordenação")
    primary = column.asc() if direction == SortDirection.ASC else column.desc()
    return [primary, config.model.id.asc()]


# =============================================================================
# Pagination
# =============================================================================


def paginate(
    repo: ResourceRepository,
    config: ResourceConfig,
    query: ListQuery,
    *,
    include_deleted: bool = False,
    extra_criteria: Sequence[Any] = (),
) -> Page:
    """
    Run a listing query.

    Validation (search parity, sort and filter keys) happens before any
    statement reaches the database.

    Returns:
        The requested page plus total count and total page count.
    """
    criteria = [
        *extra_criteria,
        *filter_criteria(config, query.search_specific_field, query.search_specific_value),
        *search_criteria(config, query.search),
    ]
    ordering = order_by(config, query.sort_by, query.sort_direction)

    total_count = repo.count(*criteria, include_deleted=include_deleted)
    data = repo.find_many(
        *criteria,
        include_deleted=include_deleted,
        offset=query.offset,
        limit=query.items_per_page,
        order_by=ordering,
    )

    return Page(
        data=list(data),
        total_count=total_count,
        total_pages=total_pages(total_count, query.items_per_page),
    )
