"""
Standardized listing parameters for all resource routers.

Usage:
    from rest_api.routers._common.pagination import get_list_query, paginated

    @router.get("")
    def list_reports(
        response: Response,
        query: ListQuery = Depends(get_list_query),
        db: Session = Depends(get_db),
    ):
        page = ReportService(db).find_all(query)
        return paginated(response, page, ReportOutput)
"""

from typing import Any

from fastapi import Query, Response
from pydantic import BaseModel

from rest_api.services.crud.query import ListQuery, Page
from shared.config.constants import Limits, SortDirection
from shared.config.settings import settings

TOTAL_COUNT_HEADER = "X-Total-Count"
TOTAL_PAGES_HEADER = "X-Total-Pages"


def split_csv(raw: str | None) -> list[str]:
    """Split a comma-separated query value; empty input yields []."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",")]


def get_list_query(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    items_per_page: int | None = Query(
        default=None,
        ge=1,
        le=settings.max_items_per_page,
        alias="itemsPerPage",
        description="Page size; defaults to the configured items_per_page",
    ),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_direction: SortDirection = Query(default=SortDirection.DESC, alias="sortDirection"),
    search: str = Query(default="", max_length=Limits.MAX_SEARCH_LENGTH),
    search_specific_field: str | None = Query(
        default=None,
        alias="searchSpecificField",
        description="Comma-separated column names",
    ),
    search_specific_value: str | None = Query(
        default=None,
        alias="searchSpecificValue",
        description="Comma-separated values, one per field",
    ),
) -> ListQuery:
    """
    FastAPI dependency for listing parameters.

    Field/value parity is not checked here: the listing engine rejects a
    mismatch with 400 before querying.
    """
    return ListQuery(
        page=page,
        items_per_page=items_per_page or settings.items_per_page,
        sort_by=sort_by,
        sort_direction=sort_direction,
        search=search,
        search_specific_field=split_csv(search_specific_field),
        search_specific_value=split_csv(search_specific_value),
    )


def paginated(response: Response, page: Page, output_schema: type[BaseModel]) -> list[Any]:
    """
    Render a page: totals go to headers, the body is the data array.
    """
    response.headers[TOTAL_COUNT_HEADER] = str(page.total_count)
    response.headers[TOTAL_PAGES_HEADER] = str(page.total_pages)
    return [output_schema.model_validate(entity) for entity in page.data]
