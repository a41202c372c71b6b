"""
Pydantic schemas for the resource API.
Centralized to avoid circular imports and improve maintainability.

Each resource has three schemas:
- <Resource>Create: request body of POST
- <Resource>Update: request body of PUT (every key optional)
- <Resource>Output: response body, read from the ORM model

Create and update bodies accept the owning field as ``field_id`` or
``field``. Whether it is honored is decided by the access policy.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

from shared.config.constants import Limits


# =============================================================================
# Common Types
# =============================================================================

ChurchType = Literal["PENTECOSTAL", "PRESBYTERIAN", "BAPTIST", "METHODIST", "LUTHERAN", "CATHOLIC", "OTHER"]
OfferorFamilyGroup = Literal["CHURCH", "COMMUNITY", "EXTERIOR"]
ReportType = Literal["ORDINARY", "ANNUAL"]
Occupation = Literal[
    "ACADEMIC",
    "ADMINISTRATOR",
    "COMMUNICATION",
    "EXECUTIVE",
    "FINANCIAL",
    "HEALTH",
    "RELIGIOUS",
    "OTHER",
]


def _field_ref() -> Any:
    return Field(default=None, validation_alias=AliasChoices("field_id", "field"))


# =============================================================================
# Base Schemas
# =============================================================================


class ResourceOutput(BaseModel):
    """Lifecycle columns shared by every resource."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime | None = None
    deleted: datetime | None = None


class FieldOwnedOutput(ResourceOutput):
    field_id: str


class IdsBody(BaseModel):
    """Target ids of a batch restore or hard remove."""

    ids: list[str] = Field(min_length=1, max_length=Limits.MAX_BATCH_IDS)


class CountOutput(BaseModel):
    count: int


# =============================================================================
# Announcement Schemas
# =============================================================================


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    attachments: list[str] = []
    fixed: bool = False
    field_id: Optional[str] = _field_ref()


class AnnouncementUpdate(BaseModel):
    title: str | None = None
    message: str | None = None
    attachments: list[str] | None = None
    fixed: bool | None = None
    field_id: Optional[str] = _field_ref()


class AnnouncementOutput(FieldOwnedOutput):
    title: str
    message: str
    attachments: list[str]
    fixed: bool


# =============================================================================
# Agenda Schemas
# =============================================================================


class AgendaCreate(BaseModel):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    attachments: list[str] = []
    date: datetime
    field_id: Optional[str] = _field_ref()


class AgendaUpdate(BaseModel):
    title: str | None = None
    message: str | None = None
    attachments: list[str] | None = None
    date: datetime | None = None
    field_id: Optional[str] = _field_ref()


class AgendaOutput(FieldOwnedOutput):
    title: str
    message: str
    attachments: list[str]
    date: datetime


# =============================================================================
# Church Schemas
# =============================================================================


class ChurchCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    images: list[str] = []
    type: ChurchType
    field_id: Optional[str] = _field_ref()


class ChurchUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    images: list[str] | None = None
    type: ChurchType | None = None
    field_id: Optional[str] = _field_ref()


class ChurchOutput(FieldOwnedOutput):
    name: str
    description: str
    images: list[str]
    type: str


# =============================================================================
# Collaborator / Recovery House Schemas
# =============================================================================


class CollaboratorCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    image: str | None = None
    field_id: Optional[str] = _field_ref()


class CollaboratorUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    image: str | None = None
    field_id: Optional[str] = _field_ref()


class CollaboratorOutput(FieldOwnedOutput):
    title: str
    description: str
    image: str | None = None


class RecoveryHouseCreate(CollaboratorCreate):
    pass


class RecoveryHouseUpdate(CollaboratorUpdate):
    pass


class RecoveryHouseOutput(CollaboratorOutput):
    pass


# =============================================================================
# Contact Schemas
# =============================================================================


class ContactCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    message: str = Field(min_length=1)


class ContactOutput(ResourceOutput):
    name: str
    email: str
    message: str


# =============================================================================
# Log Schemas
# =============================================================================


class LogOutput(ResourceOutput):
    """Read-only: rows are written by the request middleware."""

    ip: str | None = None
    method: str
    url: str
    query: str | None = None
    body: Any = None
    status_code: str
    user_id: str | None = None
    user_role: str | None = None
    request_id: str | None = None


# =============================================================================
# File Schemas
# =============================================================================


class FileCreate(BaseModel):
    name: str = Field(min_length=1)
    mime_type: str = Field(min_length=1)
    size: int = Field(default=0, ge=0)
    field_id: Optional[str] = _field_ref()


class FileUpdate(BaseModel):
    name: str | None = None
    mime_type: str | None = None
    size: int | None = Field(default=None, ge=0)
    field_id: Optional[str] = _field_ref()


class FileOutput(FieldOwnedOutput):
    name: str
    mime_type: str
    size: int


class FileBulkRemove(BaseModel):
    """Names of the files to remove."""

    files: list[str] = Field(min_length=1, max_length=Limits.MAX_BATCH_IDS)


# =============================================================================
# Monthly Offer Schemas
# =============================================================================


class MonthlyOfferCreate(BaseModel):
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1900)
    food_qnt: int = Field(default=0, ge=0)
    monetary_value: float = Field(default=0, ge=0)
    others_qnt: int = Field(default=0, ge=0)
    field_id: Optional[str] = _field_ref()


class MonthlyOfferUpdate(BaseModel):
    month: int | None = Field(default=None, ge=1, le=12)
    year: int | None = Field(default=None, ge=1900)
    food_qnt: int | None = Field(default=None, ge=0)
    monetary_value: float | None = Field(default=None, ge=0)
    others_qnt: int | None = Field(default=None, ge=0)
    field_id: Optional[str] = _field_ref()


class MonthlyOfferOutput(FieldOwnedOutput):
    month: int
    year: int
    food_qnt: int
    monetary_value: float
    others_qnt: int


# =============================================================================
# Family Schemas
# =============================================================================


class OfferorFamilyCreate(BaseModel):
    representative: str = Field(min_length=1)
    commitment: str = Field(min_length=1)
    church_denomination: str | None = None
    group: OfferorFamilyGroup
    field_id: Optional[str] = _field_ref()


class OfferorFamilyUpdate(BaseModel):
    representative: str | None = None
    commitment: str | None = None
    church_denomination: str | None = None
    group: OfferorFamilyGroup | None = None
    field_id: Optional[str] = _field_ref()


class OfferorFamilyOutput(FieldOwnedOutput):
    representative: str
    commitment: str
    church_denomination: str | None = None
    group: str


class WelcomedFamilyCreate(BaseModel):
    representative: str = Field(min_length=1)
    family_name: str = Field(min_length=1)
    observation: str | None = None
    field_id: Optional[str] = _field_ref()


class WelcomedFamilyUpdate(BaseModel):
    representative: str | None = None
    family_name: str | None = None
    observation: str | None = None
    field_id: Optional[str] = _field_ref()


class WelcomedFamilyOutput(FieldOwnedOutput):
    representative: str
    family_name: str
    observation: str | None = None


# =============================================================================
# Report Schemas
# =============================================================================


class ReportCreate(BaseModel):
    title: str = Field(min_length=1)
    short_description: str = Field(min_length=1)
    text: str | None = None
    attachments: list[str] = []
    month: int | None = Field(default=None, ge=1, le=12)
    year: int = Field(ge=1900)
    type: ReportType = "ORDINARY"
    field_id: Optional[str] = _field_ref()


class ReportUpdate(BaseModel):
    title: str | None = None
    short_description: str | None = None
    text: str | None = None
    attachments: list[str] | None = None
    month: int | None = Field(default=None, ge=1, le=12)
    year: int | None = Field(default=None, ge=1900)
    type: ReportType | None = None
    field_id: Optional[str] = _field_ref()


class ReportOutput(FieldOwnedOutput):
    title: str
    short_description: str
    text: str | None = None
    attachments: list[str]
    month: int | None = None
    year: int
    type: str


# =============================================================================
# Testimonial Schemas
# =============================================================================


class TestimonialCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr | None = None
    text: str = Field(min_length=1)
    field_id: Optional[str] = _field_ref()


class TestimonialUpdate(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    text: str | None = None
    field_id: Optional[str] = _field_ref()


class TestimonialOutput(FieldOwnedOutput):
    name: str
    email: str | None = None
    text: str


# =============================================================================
# Volunteer Schemas
# =============================================================================


class VolunteerCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str | None = None
    email: EmailStr | None = None
    avatar: str | None = None
    joined_date: datetime
    occupation: Occupation = "OTHER"
    church: str | None = None
    priest: str | None = None
    field_id: Optional[str] = _field_ref()


class VolunteerUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: EmailStr | None = None
    avatar: str | None = None
    joined_date: datetime | None = None
    occupation: Occupation | None = None
    church: str | None = None
    priest: str | None = None
    field_id: Optional[str] = _field_ref()


class VolunteerOutput(FieldOwnedOutput):
    first_name: str
    last_name: str | None = None
    email: str | None = None
    avatar: str | None = None
    joined_date: datetime
    occupation: str
    church: str | None = None
    priest: str | None = None
