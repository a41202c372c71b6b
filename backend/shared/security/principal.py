"""
The acting principal resolved from a verified access token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shared.config.constants import Role


@dataclass(frozen=True)
class Principal:
    """
    Authenticated actor performing an operation.

    ``field_id`` is None only for WEB_MASTER; every other role is bound to
    exactly one field.
    """

    id: str
    role: Role
    field_id: str | None = None
    restricted: bool = False

    @property
    def is_web_master(self) -> bool:
        return self.role == Role.WEB_MASTER

    def has_role(self, minimum: Role) -> bool:
        return self.role.covers(minimum)

    def owns(self, field_id: str | None) -> bool:
        """True if the principal may act on records of ``field_id``."""
        return self.is_web_master or (
            self.field_id is not None and self.field_id == field_id
        )

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Principal":
        return cls(
            id=str(claims["sub"]),
            role=Role(claims["role"]),
            field_id=claims.get("field_id"),
            restricted=bool(claims.get("restricted", False)),
        )

    def log_context(self) -> dict[str, Any]:
        return {
            "principal_id": self.id,
            "role": self.role.value,
            "principal_field_id": self.field_id,
        }
