"""
Contact endpoints.

Anyone may send a contact message (rate limited per client IP); only
WEB_MASTER may remove, restore or purge them.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from rest_api.routers.resources._lifecycle import register_lifecycle_routes
from rest_api.services.domain import ContactService
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter
from shared.utils.schemas import ContactCreate, ContactOutput

contact_router = APIRouter(prefix="/api/contact", tags=["contact"])


@contact_router.post("", response_model=ContactOutput, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.contact_rate_limit)
def create_contact(
    request: Request,
    body: ContactCreate,
    db: Session = Depends(get_db),
) -> ContactOutput:
    """Public contact form."""
    contact = ContactService(db).create_public(body.model_dump())
    return ContactOutput.model_validate(contact)


register_lifecycle_routes(
    contact_router,
    "contact",
    output_schema=ContactOutput,
)
