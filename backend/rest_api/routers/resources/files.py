"""
File metadata endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rest_api.routers.resources._lifecycle import register_lifecycle_routes
from rest_api.services.domain import FileService
from shared.infrastructure.db import get_db
from shared.security.auth import writing_principal
from shared.security.principal import Principal
from shared.utils.schemas import (
    CountOutput,
    FileBulkRemove,
    FileCreate,
    FileOutput,
    FileUpdate,
)

file_router = APIRouter(prefix="/api/file", tags=["file"])


@file_router.delete("/bulk-remove", response_model=CountOutput)
def bulk_remove_files(
    body: FileBulkRemove,
    principal: Principal = Depends(writing_principal),
    db: Session = Depends(get_db),
) -> dict[str, int]:
    """Soft delete files by name, within the principal's field unless WEB_MASTER."""
    return FileService(db).bulk_remove(body.files, principal)


register_lifecycle_routes(
    file_router,
    "file",
    output_schema=FileOutput,
    create_schema=FileCreate,
    update_schema=FileUpdate,
)
