"""
Security module: principal resolution, role guards, rate limiting.
"""

from shared.security.principal import Principal
from shared.security.auth import (
    sign_jwt,
    verify_jwt,
    get_bearer_token,
    current_principal,
    writing_principal,
    require_role,
    require_read_role,
)
from shared.security.rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
)

__all__ = [
    "Principal",
    # auth
    "sign_jwt",
    "verify_jwt",
    "get_bearer_token",
    "current_principal",
    "writing_principal",
    "require_role",
    "require_read_role",
    # rate limiting
    "limiter",
    "rate_limit_exceeded_handler",
]
