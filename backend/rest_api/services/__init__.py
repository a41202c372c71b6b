"""
Services module for business logic.

CLEAN ARCHITECTURE:
- base_service: FieldScopedService, the generic lifecycle engine
- domain/: Resource-specific services - USE THESE from routers
- crud/: Repository, access policy, listing engine, resource registry

Usage:
    from rest_api.services import get_service

    service = get_service("report", db)
    page = service.find_all(ListQuery(page=2))
"""

from .base_service import FieldScopedService
from .domain import get_service

__all__ = [
    "FieldScopedService",
    "get_service",
]
