"""Error Handlers — global exception handlers for the incident API.

Invariants:
    - CrimeApiError → plain text body, status taken from the error
    - RequestValidationError → 400 plain text naming the first violation
    - Exception (catch-all) → 500 plain text, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (CrimeApiError), validation (pydantic), catch-all (Exception)
    - Plain text over JSON envelopes: clients of this API read the body as a message
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from crime_api.core.errors import CrimeApiError, validation_error_from

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_crime_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_crime_api_error_handler(app: FastAPI) -> None:
    """Register domain/store error handler."""

    @app.exception_handler(CrimeApiError)
    async def crime_api_error_handler(request: Request, exc: CrimeApiError):
        """Handle all incident API domain and store errors."""
        logger.error(
            f"CrimeApiError: {exc.message}",
            extra={**exc.to_log_extra(), "path": request.url.path},
        )
        return PlainTextResponse(exc.to_response(), status_code=exc.http_status)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request validation errors with the first violation only."""
        error = validation_error_from(list(exc.errors()))
        logger.warning(
            f"Validation error on {request.url.path}: {error.message}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        return PlainTextResponse(
            error.to_response(), status_code=status.HTTP_400_BAD_REQUEST,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
