"""Interface layer error handling.

Domain errors propagate out of the services untouched; the handlers below
turn each kind into its HTTP status with a ``{"detail": ...}`` body.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from dischord.domain.error import (
    AlreadyExistsError,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AlreadyExistsError: status.HTTP_409_CONFLICT,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: DomainError) -> int:
    """Map a domain error to an HTTP status code (500 when unmapped)."""
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a DomainError as a JSON response."""
    code = status_for(exc)

    if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logfire.error(
            "Request failed",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(status_code=code, content={"detail": "Internal error"})

    logfire.warn(
        "Request rejected",
        path=request.url.path,
        status=code,
        error=str(exc),
    )
    return JSONResponse(status_code=code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handlers on an application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
