"""
Exception handlers for the FastAPI application.

Application exceptions become JSON responses with a consistent error
envelope plus the notification the client should display.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import FitTrackError
from ..notifications import Notification, Severity

logger = logging.getLogger("fittrack.web")


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    notification: Notification,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
        },
        "notification": notification.to_dict(),
    }
    if details:
        content["error"]["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def fittrack_error_handler(request: Request, exc: FitTrackError) -> JSONResponse:
    """Handle all FitTrackError exceptions."""
    return create_error_response(
        status_code=exc.status_code,
        code=exc.code.value,
        message=exc.message,
        notification=exc.to_notification(),
        details=exc.details if exc.details else None,
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed request bodies and parameters."""
    errors = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error["loc"])
        errors.append({
            "field": loc,
            "message": error["msg"],
            "type": error["type"],
        })

    return create_error_response(
        status_code=422,
        code="VALIDATION_ERROR",
        message="Request validation failed",
        notification=Notification(
            title="Invalid input",
            description="Request validation failed",
            severity=Severity.DESTRUCTIVE,
        ),
        details={"errors": errors},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return create_error_response(
        status_code=500,
        code="INTERNAL_ERROR",
        message="An unexpected error occurred",
        notification=Notification(
            title="Something went wrong",
            description="An unexpected error occurred",
            severity=Severity.DESTRUCTIVE,
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(FitTrackError, fittrack_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    # Catch-all, checked last
    app.add_exception_handler(Exception, generic_exception_handler)
