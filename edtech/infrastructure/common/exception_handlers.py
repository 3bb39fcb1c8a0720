"""
Translate domain and infrastructure errors into JSON responses.

Every error body has the same shape::

    {"detail": "...", "errors": [{"field": "...", "message": "..."}]}

``errors`` is only populated for validation failures.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from edtech.domain.common.exceptions import (
    BusinessRuleViolationError,
    ConflictError,
    DomainError,
    EntityNotFoundError,
    InvalidTransitionError,
    InvariantViolationError,
    ValidationError,
)
from edtech.exceptions import EdtechError

logger = logging.getLogger(__name__)


def _error_body(detail: str, errors: list[dict[str, str]] | None = None) -> dict[str, object]:
    return {"detail": detail, "errors": errors or []}


def status_code_for(exc: DomainError) -> int:
    """HTTP status used for a domain error."""
    if isinstance(exc, ValidationError | InvalidTransitionError):
        return status.HTTP_422_UNPROCESSABLE_CONTENT
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, BusinessRuleViolationError | InvariantViolationError):
        return status.HTTP_422_UNPROCESSABLE_CONTENT
    return status.HTTP_400_BAD_REQUEST


def register_exception_handlers(app: FastAPI) -> None:
    """Register the domain and infrastructure error handlers on ``app``."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        errors: list[dict[str, str]] = []
        if isinstance(exc, ValidationError):
            errors = [{"field": error.field, "message": error.message} for error in exc.errors]
        elif isinstance(exc, InvalidTransitionError):
            errors = [{"field": "status", "message": exc.message}]

        status_code = status_code_for(exc)
        logger.info(
            "Domain error on %s %s: %s (%s)",
            request.method,
            request.url.path,
            exc.message,
            status_code,
        )
        return JSONResponse(status_code=status_code, content=_error_body(exc.message, errors))

    @app.exception_handler(EdtechError)
    async def edtech_error_handler(request: Request, exc: EdtechError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Request %s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))
