"""
Resource registry.

Every resource type served by the lifecycle engine is described by one
ResourceConfig: its URL key, ORM model, display names for error messages
and the columns free-text search runs over.

Usage:
    from rest_api.services.crud.registry import get_resource

    config = get_resource("report")
    raise config.not_found(entity_id=report_id)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rest_api.models import (
    Agenda,
    Announcement,
    Base,
    Church,
    Collaborator,
    Contact,
    File,
    Log,
    MonthlyOffer,
    OfferorFamily,
    RecoveryHouse,
    Report,
    Testimonial,
    Volunteer,
    WelcomedFamily,
)
from shared.config.constants import Templates
from shared.utils.exceptions import NotFoundError, ValidationError


@dataclass(frozen=True)
class ResourceConfig:
    """
    Per-resource configuration for the generic lifecycle engine.

    Attributes:
        key: URL segment and registry key ("monthly-offer").
        model: SQLAlchemy model class.
        singular: Display name used in not-found messages ("relatório").
        plural: Display name used by batch operations ("relatórios").
        gender: Grammatical gender suffix of the display name ("o"/"a").
        search_keys: Columns matched by free-text search.
        field_scoped: Records are owned by a field (tenant).
        web_master_only: Every mutation requires WEB_MASTER.
    """

    key: str
    model: type[Base]
    singular: str
    plural: str
    gender: str = "o"
    search_keys: tuple[str, ...] = ()
    field_scoped: bool = True
    web_master_only: bool = False

    @property
    def columns(self) -> frozenset[str]:
        return frozenset(self.model.__table__.columns.keys())

    @property
    def required_columns(self) -> frozenset[str]:
        """Columns an update may not clear with null."""
        return frozenset(c.key for c in self.model.__table__.columns if not c.nullable)

    def not_found(self, **log_context: Any) -> NotFoundError:
        return NotFoundError(
            self.singular, self.gender, resource=self.key, **log_context
        )

    def not_found_plural(self, **log_context: Any) -> NotFoundError:
        return NotFoundError(
            self.plural, self.gender, plural=True, resource=self.key, **log_context
        )


RESOURCES: dict[str, ResourceConfig] = {
    config.key: config
    for config in (
        ResourceConfig(
            key="announcement",
            model=Announcement,
            singular="anúncio",
            plural="anúncios",
            search_keys=("title", "message"),
        ),
        ResourceConfig(
            key="agenda",
            model=Agenda,
            singular="evento",
            plural="eventos",
            search_keys=("title", "message"),
        ),
        ResourceConfig(
            key="church",
            model=Church,
            singular="igreja",
            plural="igrejas",
            gender="a",
            search_keys=("name", "description"),
        ),
        ResourceConfig(
            key="collaborator",
            model=Collaborator,
            singular="colaborador",
            plural="colaboradores",
            search_keys=("title", "description"),
        ),
        ResourceConfig(
            key="contact",
            model=Contact,
            singular="contato",
            plural="contatos",
            search_keys=("name", "email", "message"),
            field_scoped=False,
            web_master_only=True,
        ),
        ResourceConfig(
            key="file",
            model=File,
            singular="arquivo",
            plural="arquivos",
            search_keys=("name", "mime_type"),
        ),
        ResourceConfig(
            key="log",
            model=Log,
            singular="log",
            plural="logs",
            search_keys=("ip", "method", "url", "query", "status_code"),
            field_scoped=False,
            web_master_only=True,
        ),
        ResourceConfig(
            key="monthly-offer",
            model=MonthlyOffer,
            singular="oferta mensal",
            plural="ofertas mensais",
            gender="a",
            search_keys=("field_id", "year", "month"),
        ),
        ResourceConfig(
            key="offeror-family",
            model=OfferorFamily,
            singular="família ofertante",
            plural="famílias ofertantes",
            gender="a",
            search_keys=("representative", "commitment", "church_denomination"),
        ),
        ResourceConfig(
            key="recovery-house",
            model=RecoveryHouse,
            singular="casa de recuperação",
            plural="casas de recuperação",
            gender="a",
            search_keys=("title", "description"),
        ),
        ResourceConfig(
            key="report",
            model=Report,
            singular="relatório",
            plural="relatórios",
            search_keys=("title", "text", "short_description"),
        ),
        ResourceConfig(
            key="testimonial",
            model=Testimonial,
            singular="testemunho",
            plural="testemunhos",
            search_keys=("name", "email", "text"),
        ),
        ResourceConfig(
            key="volunteer",
            model=Volunteer,
            singular="voluntário",
            plural="voluntários",
            search_keys=("first_name", "last_name", "email", "church", "priest"),
        ),
        ResourceConfig(
            key="welcomed-family",
            model=WelcomedFamily,
            singular="família acolhida",
            plural="famílias acolhidas",
            gender="a",
            search_keys=("representative",),
        ),
    )
}


def get_resource(key: str) -> ResourceConfig:
    """
    Look up a registered resource.

    Raises:
        ValidationError: If no resource is registered under ``key``.
    """
    try:
        return RESOURCES[key]
    except KeyError:
        raise ValidationError(Templates.invalid_key("recurso", key))
