"""
Centralized constants for the backend application.

Usage:
    from shared.config.constants import Role, Messages, Templates

    if principal.role == Role.WEB_MASTER:
        ...

    raise ValidationError(Templates.is_not_empty("field"))
"""

from enum import Enum
from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Role(str, Enum):
    """
    Principal roles, ordered by privilege.

    WEB_MASTER is the only role not bound to a field (tenant).
    """

    VOLUNTEER = "VOLUNTEER"
    ADMIN = "ADMIN"
    WEB_MASTER = "WEB_MASTER"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def covers(self, minimum: "Role") -> bool:
        """True if this role is at least as privileged as ``minimum``."""
        return self.rank >= minimum.rank


_ROLE_RANK: Final[dict[Role, int]] = {
    Role.VOLUNTEER: 0,
    Role.ADMIN: 1,
    Role.WEB_MASTER: 2,
}


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# =============================================================================
# Limits
# =============================================================================


class Limits:
    """Input size limits."""

    MAX_BATCH_IDS: Final[int] = 500
    MAX_SEARCH_LENGTH: Final[int] = 200
    MAX_FILTER_TERMS: Final[int] = 20


# Payload keys that never reach the store through create/update
PROTECTED_KEYS: Final[frozenset[str]] = frozenset({"id", "deleted", "created_at", "updated_at"})

# Request body keys redacted from request logs
SENSITIVE_KEYS: Final[frozenset[str]] = frozenset(
    {"password", "access_token", "accessToken", "refresh_token", "refreshToken"}
)


# =============================================================================
# Messages
# =============================================================================


class Messages:
    """Fixed human-readable messages."""

    NOT_AUTHENTICATED: Final[str] = "Você não está autenticado."
    NOT_AUTHORIZED: Final[str] = "Você não está autorizado."
    FORBIDDEN: Final[str] = "Você não possui acesso a este recurso."
    TOO_MANY_REQUESTS: Final[str] = "Você já fez muitas requisições! Aguarde um pouco."
    RESTRICTED: Final[str] = (
        "Você está com acesso restrito! Fale com o administrador do seu campo para mais informações."
    )
    SEARCH_QUERY_PARITY: Final[str] = (
        "A query de pesquisa especifica deve possuir o mesmo número de valores como de campos."
    )
    EMPTY_IDS: Final[str] = "A lista de ids não pode estar vazia."


class Templates:
    """Resource-name and gender parameterized messages."""

    @staticmethod
    def not_found(name: str, gender: str) -> str:
        return f"{name} não encontrad{gender}"

    @staticmethod
    def not_found_plural(plural: str, gender: str) -> str:
        return f"{plural} não encontrad{gender}s"

    @staticmethod
    def is_not_empty(field: str) -> str:
        return f"{field} não deve estar vazio"

    @staticmethod
    def invalid_key(kind: str, key: str) -> str:
        return f"Chave de {kind} inválida: '{key}'"
