"""
HTTP middlewares for the FastAPI application.
Implements security headers, content-type validation and request logging
(stdout plus a persisted ``log`` row).
"""

import json
import time
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from rest_api.services.domain import LogService
from shared.config.constants import SENSITIVE_KEYS
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.infrastructure.correlation import get_request_id
from shared.infrastructure.db import get_db

request_logger = get_logger("rest_api.requests")

REDACTED = "***redacted***"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all responses.

    Headers added:
    - X-Content-Type-Options: nosniff (prevent MIME sniffing)
    - X-Frame-Options: DENY (prevent clickjacking)
    - Referrer-Policy: strict-origin-when-cross-origin
    - Permissions-Policy: disable dangerous browser features
    - Content-Security-Policy: API responses are never rendered
    - Strict-Transport-Security: production only
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
        # Remove server header if present
        if "server" in response.headers:
            del response.headers["server"]

        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response


class ContentTypeValidationMiddleware(BaseHTTPMiddleware):
    """
    Validate Content-Type for requests with body.

    Ensures POST/PUT/PATCH/DELETE bodies are JSON.
    Returns 415 Unsupported Media Type if invalid.
    """

    METHODS_WITH_BODY = {"POST", "PUT", "PATCH", "DELETE"}

    async def dispatch(self, request: Request, call_next):
        if request.method in self.METHODS_WITH_BODY:
            content_type = request.headers.get("content-type", "")
            if content_type and not content_type.startswith("application/json"):
                return JSONResponse(
                    status_code=415,
                    content={"detail": "Unsupported Media Type. Use application/json"},
                )
        return await call_next(request)


def redact(body: Any) -> Any:
    """Replace sensitive values in a JSON body, one level deep."""
    if isinstance(body, dict):
        return {k: (REDACTED if k in SENSITIVE_KEYS else v) for k, v in body.items()}
    return body


def store_request_log(app: FastAPI, entry: dict[str, Any]) -> None:
    """
    Persist one request log row.

    The session comes from ``get_db`` (honoring dependency overrides). A
    failed write is logged and never changes the response.
    """
    provider = app.dependency_overrides.get(get_db, get_db)
    try:
        with contextmanager(provider)() as db:
            LogService(db).record(entry)
    except SQLAlchemyError as exc:
        request_logger.error(
            "Request log not stored",
            method=entry["method"],
            url=entry["url"],
            error=str(exc),
        )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every non-GET request once it completes.

    Each request produces a stdout line and a ``log`` row: client ip,
    method, path, query string, redacted JSON body, status code, the
    authenticated principal (if any) and the request id.
    """

    SKIPPED_METHODS = {"GET", "HEAD", "OPTIONS"}

    async def dispatch(self, request: Request, call_next):
        if request.method in self.SKIPPED_METHODS:
            return await call_next(request)

        body = None
        raw = await request.body()
        if raw and request.headers.get("content-type", "").startswith("application/json"):
            try:
                body = redact(json.loads(raw))
            except ValueError:
                body = "<invalid json>"

        started = time.perf_counter()
        response = await call_next(request)

        principal = getattr(request.state, "principal", None)
        entry = {
            "ip": request.client.host if request.client else None,
            "method": request.method,
            "url": request.url.path,
            "query": str(request.query_params) or None,
            "body": body,
            "status_code": str(response.status_code),
            "user_id": principal.id if principal else None,
            "user_role": principal.role.value if principal else None,
            "request_id": get_request_id() or None,
        }

        request_logger.info(
            "Request completed",
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            **entry,
        )
        await run_in_threadpool(store_request_log, request.app, entry)
        return response


def register_middlewares(app: FastAPI) -> None:
    """
    Register all HTTP middlewares on the FastAPI application.

    Order matters: middlewares are executed in reverse order of registration.
    ContentTypeValidation runs first, then RequestLogging, then SecurityHeaders.
    """
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ContentTypeValidationMiddleware)
