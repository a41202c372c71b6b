"""
Offeror family, welcomed family and volunteer endpoints.
"""

from fastapi import APIRouter

from rest_api.routers.resources._lifecycle import register_lifecycle_routes
from shared.utils.schemas import (
    OfferorFamilyCreate,
    OfferorFamilyOutput,
    OfferorFamilyUpdate,
    VolunteerCreate,
    VolunteerOutput,
    VolunteerUpdate,
    WelcomedFamilyCreate,
    WelcomedFamilyOutput,
    WelcomedFamilyUpdate,
)

offeror_family_router = register_lifecycle_routes(
    APIRouter(prefix="/api/offeror-family", tags=["offeror-family"]),
    "offeror-family",
    output_schema=OfferorFamilyOutput,
    create_schema=OfferorFamilyCreate,
    update_schema=OfferorFamilyUpdate,
)

welcomed_family_router = register_lifecycle_routes(
    APIRouter(prefix="/api/welcomed-family", tags=["welcomed-family"]),
    "welcomed-family",
    output_schema=WelcomedFamilyOutput,
    create_schema=WelcomedFamilyCreate,
    update_schema=WelcomedFamilyUpdate,
)

volunteer_router = register_lifecycle_routes(
    APIRouter(prefix="/api/volunteer", tags=["volunteer"]),
    "volunteer",
    output_schema=VolunteerOutput,
    create_schema=VolunteerCreate,
    update_schema=VolunteerUpdate,
)
