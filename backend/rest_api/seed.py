"""
Seed data for development and testing.
Creates the regional fields every other record is attached to.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Field
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit

logger = get_logger(__name__)


DEMO_FIELDS: list[dict[str, str]] = [
    {"state": "Rondônia", "designation": "Porto Velho", "abbreviation": "AMEBRRO01"},
    {"state": "Amazonas", "designation": "Manaus", "abbreviation": "AMEBRAM01"},
    {"state": "Acre", "designation": "Rio Branco", "abbreviation": "AMEBRAC01"},
    {"state": "Mato Grosso do Sul", "designation": "Campo Grande", "abbreviation": "AMEBRMS01"},
    {"state": "Amapá", "designation": "Macapá", "abbreviation": "AMEBRAP01"},
    {"state": "Distrito Federal", "designation": "Brasília", "abbreviation": "AMEBRDF01"},
    {"state": "Roraima", "designation": "Boa Vista", "abbreviation": "AMEBRRR01"},
]


def seed_fields(db: Session) -> list[Field]:
    """
    Insert the demo fields.
    Idempotent: fields are matched by abbreviation.
    """
    existing = set(db.scalars(select(Field.abbreviation)).all())
    created = []

    for data in DEMO_FIELDS:
        if data["abbreviation"] in existing:
            continue
        field = Field(continent="América", country="Brasil", **data)
        db.add(field)
        created.append(field)

    safe_commit(db)
    logger.info("Fields seeded", created=len(created), skipped=len(DEMO_FIELDS) - len(created))
    return created
