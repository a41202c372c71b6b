"""
Request ids for the back-office API.

Every request carries one id, echoed in ``X-Request-ID``. It is attached
to each structured log line emitted while the request runs and stored on
the request's audit log row, so an operator can go from a log row
returned by ``GET /api/log`` to the matching stdout lines.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

# Caller-supplied ids are kept only when short and log-safe
_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    """Id of the request being served, or "" outside a request."""
    return request_id_var.get()


def resolve_request_id(header_value: str | None) -> str:
    """Reuse the caller's id when acceptable, otherwise mint a UUID."""
    if header_value and _ACCEPTED_ID.match(header_value):
        return header_value
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind the request id for the duration of the request and echo it back."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        token = request_id_var.set(request_id)
        try:
            request.state.request_id = request_id
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)


class CorrelationIdFilter(logging.Filter):
    """Stamp ``request_id`` on log records; "-" outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True
