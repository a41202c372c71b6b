"""
Authentication and authorization utilities.

Access tokens are issued by the identity service; this API verifies them
and turns their claims into a Principal. ``sign_jwt`` is kept for
development tooling and tests.
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Callable

import jwt
from fastapi import Depends, Header, Request

from shared.config.constants import Role
from shared.config.settings import (
    JWT_SECRET,
    JWT_ISSUER,
    JWT_AUDIENCE,
    settings,
)
from shared.config.logging import get_logger
from shared.security.principal import Principal
from shared.utils.exceptions import (
    InsufficientRoleError,
    RestrictedError,
    UnauthorizedError,
)

logger = get_logger(__name__)

# Methods a restricted principal may not perform
RESTRICTED_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


# =============================================================================
# JWT Functions
# =============================================================================


def sign_jwt(
    payload: dict[str, Any],
    ttl_seconds: int | None = None,
) -> str:
    """
    Sign an access token with the given payload.

    Args:
        payload: Claims to include (sub, role, field_id, restricted).
        ttl_seconds: Token lifetime in seconds. Defaults to access token expiry.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": "access",
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Required claims: ``sub``, ``role`` (a known Role) and, for every role
    except WEB_MASTER, ``field_id``.

    Raises:
        UnauthorizedError: If the token is invalid, expired or incomplete.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=["HS256"],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expirado.")
    except jwt.InvalidTokenError as e:
        # Log the actual error, return a generic message to the client
        logger.warning("JWT validation failed", error=str(e))
        raise UnauthorizedError("Token inválido.")

    if not payload.get("sub"):
        raise UnauthorizedError("Token inválido.", reason="missing subject claim")

    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise UnauthorizedError("Token inválido.", reason="invalid role claim")

    if role != Role.WEB_MASTER and not payload.get("field_id"):
        raise UnauthorizedError("Token inválido.", reason="missing field_id claim")

    if payload.get("type") not in ("access", None):
        raise UnauthorizedError("Token inválido.", reason="invalid type claim")

    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        UnauthorizedError: If header is missing or malformed.
    """
    if not authorization:
        raise UnauthorizedError()
    if not authorization.startswith("Bearer "):
        raise UnauthorizedError(reason="malformed Authorization header")
    return authorization.split(" ", 1)[1].strip()


# =============================================================================
# FastAPI dependencies
# =============================================================================


def current_principal(
    request: Request,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> Principal:
    """
    FastAPI dependency resolving the acting principal from the bearer token.

    The principal is also kept on ``request.state`` for the request log.

    Usage:
        @router.post("")
        def create(principal: Principal = Depends(current_principal)):
            ...
    """
    token = get_bearer_token(authorization)
    principal = Principal.from_claims(verify_jwt(token))
    request.state.principal = principal
    return principal


def writing_principal(
    request: Request,
    principal: Principal = Depends(current_principal),
) -> Principal:
    """
    Principal allowed to mutate data.

    Restricted principals keep read access but every write is rejected.
    """
    if principal.restricted and request.method.upper() in RESTRICTED_METHODS:
        raise RestrictedError(method=request.method, **principal.log_context())
    return principal


def require_role(minimum: Role) -> Callable[..., Principal]:
    """
    Dependency factory requiring at least ``minimum`` role for a write.

    Usage:
        @router.put("/restore")
        def restore(principal: Principal = Depends(require_role(Role.ADMIN))):
            ...
    """

    def dependency(principal: Principal = Depends(writing_principal)) -> Principal:
        if not principal.has_role(minimum):
            raise InsufficientRoleError(minimum.value, **principal.log_context())
        return principal

    return dependency


def require_read_role(minimum: Role) -> Callable[..., Principal]:
    """
    Dependency factory requiring at least ``minimum`` role for a read.

    Restricted principals pass: the restriction only covers writes.
    """

    def dependency(principal: Principal = Depends(current_principal)) -> Principal:
        if not principal.has_role(minimum):
            raise InsufficientRoleError(minimum.value, **principal.log_context())
        return principal

    return dependency
