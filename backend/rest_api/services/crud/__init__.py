"""
CRUD building blocks of the lifecycle engine.

Provides:
- ResourceRepository: Data access with soft delete scoping
- AccessPolicy: Field (tenant) ownership rules
- ListQuery / paginate: Pagination, sorting, search and filters
- ResourceConfig / RESOURCES: Registry of served resource types
"""

from .registry import ResourceConfig, RESOURCES, get_resource
from .repository import ResourceRepository
from .policy import AccessPolicy
from .query import (
    ListQuery,
    Page,
    paginate,
    clean_search,
    check_search_parity,
    total_pages,
)

__all__ = [
    # Registry
    "ResourceConfig",
    "RESOURCES",
    "get_resource",
    # Repository
    "ResourceRepository",
    # Policy
    "AccessPolicy",
    # Query
    "ListQuery",
    "Page",
    "paginate",
    "clean_search",
    "check_search_parity",
    "total_pages",
]
