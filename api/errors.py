"""
Exception handlers.

Maps each MygramError base class to one HTTP status code and renders
every failure in the {message, error} envelope. Infrastructure failures
are logged in full and answered with a generic body.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    MygramError,
    NotFoundError,
    ValidationError,
)

from .models import ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_MESSAGE = "internal server error"
INTERNAL_ERROR = "something went wrong"

_STATUS_BY_ERROR: tuple[tuple[type[MygramError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def status_for(exc: MygramError) -> int:
    """HTTP status for a domain error; anything unmapped is a 500."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    status_code: int,
    message: str,
    error: str,
    details: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, error=error, details=details or None)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain and request validation handlers on the app."""

    @app.exception_handler(MygramError)
    async def handle_mygram_error(request: Request, exc: MygramError) -> JSONResponse:
        status_code = status_for(exc)

        if status_code >= 500:
            logger.error(
                "%s %s failed: %s (%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code,
                exc_info=exc,
            )
            return error_response(status_code, INTERNAL_MESSAGE, INTERNAL_ERROR)

        logger.warning(
            "%s %s rejected with %d: %s",
            request.method,
            request.url.path,
            status_code,
            exc.code,
        )
        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        return error_response(status_code, exc.message, exc.code, exc.details, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("%s %s has an invalid body", request.method, request.url.path)
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "invalid body",
            "INVALID_BODY",
            {"errors": jsonable_encoder(exc.errors())},
        )
