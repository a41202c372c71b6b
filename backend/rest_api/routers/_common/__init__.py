"""
Common utilities shared across routers.
"""

from .pagination import (
    TOTAL_COUNT_HEADER,
    TOTAL_PAGES_HEADER,
    get_list_query,
    paginated,
    split_csv,
)

__all__ = [
    "TOTAL_COUNT_HEADER",
    "TOTAL_PAGES_HEADER",
    "get_list_query",
    "paginated",
    "split_csv",
]
