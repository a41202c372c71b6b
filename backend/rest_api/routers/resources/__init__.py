"""
Resource API router - combines all resource sub-routers.

Every resource is served under /api/<resource-key> with the generic
lifecycle routes (see _lifecycle.py) plus its own extras:

- announcement: GET /range
- agenda: GET /range
- report: GET /reported-years/{field_id}
- monthly-offer: GET /collected-period/{field_id}
- file: DELETE /bulk-remove
- contact: public POST /
- log: GET only, WEB_MASTER
"""

from fastapi import APIRouter

from .outreach import announcement_router, agenda_router, testimonial_router
from .institutions import church_router, collaborator_router, recovery_house_router
from .families import offeror_family_router, welcomed_family_router, volunteer_router
from .reports import report_router, monthly_offer_router
from .files import file_router
from .contacts import contact_router
from .logs import log_router

router = APIRouter()

router.include_router(announcement_router)
router.include_router(agenda_router)
router.include_router(testimonial_router)
router.include_router(church_router)
router.include_router(collaborator_router)
router.include_router(recovery_house_router)
router.include_router(offeror_family_router)
router.include_router(welcomed_family_router)
router.include_router(volunteer_router)
router.include_router(report_router)
router.include_router(monthly_offer_router)
router.include_router(file_router)
router.include_router(contact_router)
router.include_router(log_router)

__all__ = ["router"]
