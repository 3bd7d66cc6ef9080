"""
API error types and the handlers that render them as JSON.

Every error response has the shape ``{"error": <message>}`` with an optional
``"code"`` tag so callers can tell failure kinds apart.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from signup_api.db import DatastoreUnavailableError

logger = logging.getLogger(__name__)

SIGNUP_FAILED_MESSAGE = "Invalid request or user already exists"


class ApiError(Exception):
    """Base exception for errors returned to API callers."""

    def __init__(
        self,
        error: str,
        status_code: int = 500,
        code: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        super().__init__(error)
        self.error = error
        self.status_code = status_code
        self.code = code
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.code:
            body["code"] = self.code
        return body


class UnauthorizedError(ApiError):
    def __init__(self):
        super().__init__(
            "Unauthorized",
            status_code=401,
            headers={"WWW-Authenticate": "Bearer"},
        )


class SignupValidationError(ApiError):
    """Body was not JSON, or a field was missing or had the wrong type."""

    def __init__(self):
        super().__init__(
            SIGNUP_FAILED_MESSAGE, status_code=400, code="validation_error"
        )


class SignupConflictError(ApiError):
    """A user with the submitted email already exists."""

    def __init__(self):
        super().__init__(SIGNUP_FAILED_MESSAGE, status_code=400, code="conflict")


class DatastoreUnavailableApiError(ApiError):
    def __init__(self):
        super().__init__(
            "Service temporarily unavailable",
            status_code=503,
            code="datastore_unavailable",
        )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers
    )


async def datastore_unavailable_handler(
    request: Request, exc: DatastoreUnavailableError
) -> JSONResponse:
    # Raised while building the DB client, before any route code runs.
    logger.error(
        "Datastore unavailable on %s %s: %s",
        request.method,
        request.url.path,
        exc,
    )
    return await api_error_handler(request, DatastoreUnavailableApiError())


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "code": "internal_error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(DatastoreUnavailableError, datastore_unavailable_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
