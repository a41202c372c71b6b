"""
Request log endpoints.

Rows are written by the request middleware; the API only reads them, and
only WEB_MASTER may.
"""

from fastapi import APIRouter

from rest_api.routers.resources._lifecycle import register_lifecycle_routes
from shared.config.constants import Role
from shared.utils.schemas import LogOutput

log_router = APIRouter(prefix="/api/log", tags=["log"])

register_lifecycle_routes(
    log_router,
    "log",
    output_schema=LogOutput,
    read_role=Role.WEB_MASTER,
    read_only=True,
)
