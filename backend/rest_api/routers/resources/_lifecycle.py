"""
Generic lifecycle endpoints shared by every resource router.

Each resource gets the same seven routes, backed by FieldScopedService:

    POST   /                create        any role, not restricted
    GET    /                find_all      public
    GET    /{id}            find_one      public, null when absent
    PUT    /restore         restore       ADMIN+, not restricted
    PUT    /{id}            update        any role, not restricted
    DELETE /hard-remove     hard_remove   ADMIN+, not restricted
    DELETE /{id}            remove        any role, not restricted

Options can put the GET routes behind a role, or leave out the update
and delete routes (see ``register_lifecycle_routes``).

Resource-specific routes must be declared on the router before calling
``register_lifecycle_routes`` so that they win over ``/{id}``.
"""

from typing import Callable, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from rest_api.routers._common.pagination import get_list_query, paginated
from rest_api.services.base_service import FieldScopedService
from rest_api.services.crud.query import ListQuery
from rest_api.services.crud.registry import get_resource
from rest_api.services.domain import get_service
from shared.config.constants import Role
from shared.infrastructure.db import get_db
from shared.security.auth import require_read_role, require_role, writing_principal
from shared.security.principal import Principal
from shared.utils.schemas import CountOutput, IdsBody


def service_dependency(key: str) -> Callable[..., FieldScopedService]:
    """FastAPI dependency building the registered service of resource ``key``."""
    # Unknown keys fail at import time
    get_resource(key)

    def dependency(db: Session = Depends(get_db)) -> FieldScopedService:
        return get_service(key, db)

    return dependency


def register_lifecycle_routes(
    router: APIRouter,
    key: str,
    *,
    output_schema: type[BaseModel],
    create_schema: type[BaseModel] | None = None,
    update_schema: type[BaseModel] | None = None,
    read_role: Role | None = None,
    read_only: bool = False,
) -> APIRouter:
    """
    Add the lifecycle routes of resource ``key`` to ``router``.

    Omitting ``create_schema`` or ``update_schema`` skips that route.
    ``read_role`` puts both GET routes behind a bearer token of at least
    that role. ``read_only`` keeps only create and the GET routes.
    """
    service_provider = service_dependency(key)
    read_guard = [Depends(require_read_role(read_role))] if read_role is not None else []

    if create_schema is not None:

        @router.post("", response_model=output_schema, status_code=status.HTTP_201_CREATED)
        def create(
            body: create_schema,
            principal: Principal = Depends(writing_principal),
            service: FieldScopedService = Depends(service_provider),
        ):
            """Create a record. The field is taken from the principal unless WEB_MASTER."""
            entity = service.create(principal, body.model_dump())
            return output_schema.model_validate(entity)

    @router.get("", response_model=list[output_schema], dependencies=read_guard)
    def find_all(
        response: Response,
        query: ListQuery = Depends(get_list_query),
        service: FieldScopedService = Depends(service_provider),
    ):
        """List active records. Totals are returned in X-Total-Count / X-Total-Pages."""
        return paginated(response, service.find_all(query), output_schema)

    @router.get("/{entity_id}", response_model=Optional[output_schema], dependencies=read_guard)
    def find_one(
        entity_id: str,
        service: FieldScopedService = Depends(service_provider),
    ):
        """Get an active record, or null."""
        entity = service.find_one(entity_id)
        return output_schema.model_validate(entity) if entity is not None else None

    if read_only:
        return router

    @router.put("/restore", response_model=CountOutput)
    def restore(
        body: IdsBody,
        principal: Principal = Depends(require_role(Role.ADMIN)),
        service: FieldScopedService = Depends(service_provider),
    ):
        """Restore soft-deleted records. Requires ADMIN role."""
        return service.restore(body.ids, principal)

    if update_schema is not None:

        @router.put("/{entity_id}", response_model=output_schema)
        def update(
            entity_id: str,
            body: update_schema,
            principal: Principal = Depends(writing_principal),
            service: FieldScopedService = Depends(service_provider),
        ):
            """Partially update an active record."""
            payload = body.model_dump(exclude_unset=True)
            entity = service.update(entity_id, principal, payload)
            return output_schema.model_validate(entity)

    @router.delete("/hard-remove", response_model=CountOutput)
    def hard_remove(
        body: IdsBody,
        principal: Principal = Depends(require_role(Role.ADMIN)),
        service: FieldScopedService = Depends(service_provider),
    ):
        """Permanently delete records. Requires ADMIN role."""
        return service.hard_remove(body.ids, principal)

    @router.delete("/{entity_id}", response_model=output_schema)
    def remove(
        entity_id: str,
        principal: Principal = Depends(writing_principal),
        service: FieldScopedService = Depends(service_provider),
    ):
        """Soft delete an active record."""
        entity = service.remove(entity_id, principal)
        return output_schema.model_validate(entity)

    return router
