"""
Utilities module: Exceptions.
"""

from shared.utils.exceptions import (
    AppException,
    NotFoundError,
    ForbiddenError,
    ValidationError,
    UnauthorizedError,
)

__all__ = [
    "AppException",
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "UnauthorizedError",
]
