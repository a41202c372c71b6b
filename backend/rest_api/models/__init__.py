"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class, LifecycleMixin, FieldOwnedMixin
- field: Field (tenant)
- outreach: Announcement, Agenda, Testimonial
- institution: Church, Collaborator, RecoveryHouse
- family: OfferorFamily, WelcomedFamily
- report: Report, MonthlyOffer
- volunteer: Volunteer
- contact: Contact
- file: File
- log: Log (request audit)
"""

# Base classes
from .base import Base, LifecycleMixin, FieldOwnedMixin

# Tenant
from .field import Field

# Field-owned resources
from .outreach import Announcement, Agenda, Testimonial
from .institution import Church, Collaborator, RecoveryHouse
from .family import OfferorFamily, WelcomedFamily
from .report import Report, MonthlyOffer
from .volunteer import Volunteer
from .file import File

# Unowned resources
from .contact import Contact
from .log import Log

__all__ = [
    # Base
    "Base",
    "LifecycleMixin",
    "FieldOwnedMixin",
    # Tenant
    "Field",
    # Resources
    "Announcement",
    "Agenda",
    "Testimonial",
    "Church",
    "Collaborator",
    "RecoveryHouse",
    "OfferorFamily",
    "WelcomedFamily",
    "Report",
    "MonthlyOffer",
    "Volunteer",
    "File",
    "Contact",
    "Log",
]
