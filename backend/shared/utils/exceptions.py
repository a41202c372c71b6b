"""
Centralized HTTP exceptions for consistent error handling.

Usage:
    from shared.utils.exceptions import NotFoundError, ForbiddenError, ValidationError

    raise NotFoundError("relatório", "o")
    raise NotFoundError("relatórios", "o", plural=True)
    raise ForbiddenError(resource="report", entity_id=report_id)
    raise ValidationError(Templates.is_not_empty("field"))
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.constants import Messages, Templates
from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)

    def __str__(self) -> str:
        return str(self.detail)


# =============================================================================
# 401 Unauthorized
# =============================================================================


class UnauthorizedError(AppException):
    """Missing or invalid credentials (401)."""

    def __init__(self, detail: str = Messages.NOT_AUTHENTICATED, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="info",
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    The message is built from the resource's display name and grammatical
    gender ("o"/"a"); batch operations use the plural template.
    """

    def __init__(
        self,
        entity: str,
        gender: str = "o",
        *,
        plural: bool = False,
        **log_context: Any,
    ):
        if plural:
            detail = Templates.not_found_plural(entity, gender)
        else:
            detail = Templates.not_found(entity, gender)

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            **log_context,
        )


# =============================================================================
# 403 Forbidden Errors
# =============================================================================


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError(resource="report", entity_id=report.id)
    """

    def __init__(self, detail: str = Messages.FORBIDDEN, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class InsufficientRoleError(ForbiddenError):
    """Principal doesn't have the required role."""

    def __init__(self, required_role: str, **log_context: Any):
        super().__init__(
            Messages.NOT_AUTHORIZED,
            required_role=required_role,
            **log_context,
        )


class RestrictedError(ForbiddenError):
    """Principal is flagged as restricted and attempted a write."""

    def __init__(self, **log_context: Any):
        super().__init__(Messages.RESTRICTED, **log_context)


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError(Messages.SEARCH_QUERY_PARITY)
        raise ValidationError(Templates.is_not_empty("field"), resource="report")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class SearchParityError(ValidationError):
    """Structured filter declares a different number of fields and values."""

    def __init__(self, fields: int, values: int, **log_context: Any):
        super().__init__(
            Messages.SEARCH_QUERY_PARITY,
            fields=fields,
            values=values,
            **log_context,
        )

