"""
Global exception handlers for consistent error responses.

A rejected key batch keeps the flat ``{"error": "..."}`` body the browser
UI reads. Everything else uses the envelope::

    {"error": {"code": "...", "message": "...", "details": {...}}}
"""

import traceback
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.middleware.request_context import get_request_id
from src.checker.validator import ValidationRequestError

logger = structlog.get_logger(__name__)

# (code, default message) for the statuses this service can return
STATUS_ERRORS: dict[int, tuple[str, str]] = {
    400: ("bad_request", "Bad request"),
    404: ("not_found", "Not found"),
    405: ("method_not_allowed", "Method not allowed"),
    422: ("validation_error", "Request validation failed"),
    500: ("internal_error", "An internal error occurred. Please try again later."),
}


def is_production_mode(request: Request) -> bool:
    """Check if the app serving this request runs in production mode."""
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.is_production)


def error_response(
    request: Request,
    status_code: int,
    message: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build an enveloped error response carrying the request ID."""
    code, default_message = STATUS_ERRORS.get(
        status_code, (f"error_{status_code}", f"Error {status_code}")
    )
    error: dict[str, Any] = {"code": code, "message": message or default_message}
    if details:
        error["details"] = details

    return JSONResponse(
        status_code=status_code,
        content={"error": error},
        headers=_get_error_headers(request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers on the FastAPI app.

    Args:
        app: The FastAPI application.
    """

    @app.exception_handler(ValidationRequestError)
    async def key_batch_exception_handler(
        request: Request, exc: ValidationRequestError
    ) -> JSONResponse:
        logger.warning("Key batch rejected", path=request.url.path, reason=exc.message)
        return JSONResponse(
            status_code=400,
            content={"error": exc.message},
            headers=_get_error_headers(request),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request bodies that are not valid JSON."""
        field_errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        logger.warning("Request validation error", path=request.url.path, errors=field_errors)
        return error_response(request, 422, details={"errors": field_errors})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle routing errors (unknown path, wrong method)."""
        logger.warning("HTTP error", status_code=exc.status_code, path=request.url.path)
        return error_response(request, exc.status_code, str(exc.detail) if exc.detail else None)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """
        Handle all unhandled exceptions.

        Never exposes stack traces in production.
        """
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )

        details = None
        if not is_production_mode(request):
            details = {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "traceback": traceback.format_exception(exc),
            }
        return error_response(request, 500, details=details)


def _get_error_headers(request: Request) -> dict[str, str]:
    request_id = getattr(request.state, "request_id", None) or get_request_id()
    return {"X-Request-ID": request_id} if request_id else {}
