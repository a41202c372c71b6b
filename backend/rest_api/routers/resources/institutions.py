"""
Church, collaborator and recovery house endpoints.
"""

from fastapi import APIRouter

from rest_api.routers.resources._lifecycle import register_lifecycle_routes
from shared.utils.schemas import (
    ChurchCreate,
    ChurchOutput,
    ChurchUpdate,
    CollaboratorCreate,
    CollaboratorOutput,
    CollaboratorUpdate,
    RecoveryHouseCreate,
    RecoveryHouseOutput,
    RecoveryHouseUpdate,
)

church_router = register_lifecycle_routes(
    APIRouter(prefix="/api/church", tags=["church"]),
    "church",
    output_schema=ChurchOutput,
    create_schema=ChurchCreate,
    update_schema=ChurchUpdate,
)

collaborator_router = register_lifecycle_routes(
    APIRouter(prefix="/api/collaborator", tags=["collaborator"]),
    "collaborator",
    output_schema=CollaboratorOutput,
    create_schema=CollaboratorCreate,
    update_schema=CollaboratorUpdate,
)

recovery_house_router = register_lifecycle_routes(
    APIRouter(prefix="/api/recovery-house", tags=["recovery-house"]),
    "recovery-house",
    output_schema=RecoveryHouseOutput,
    create_schema=RecoveryHouseCreate,
    update_schema=RecoveryHouseUpdate,
)
