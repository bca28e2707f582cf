"""Exception handlers translating errors into sanitized HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hrms_api.config import get_settings
from hrms_api.exceptions import (
    AccessDeniedError,
    ConflictError,
    HrmsAPIError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    500: "Internal server error",
}


def status_code_for(exc: HrmsAPIError) -> int:
    """Map a domain exception to its HTTP status code."""
    if isinstance(exc, AccessDeniedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_exception_handler(request: Request, exc: HrmsAPIError) -> JSONResponse:
    """Handle domain exceptions.

    Access denials of every kind surface as the same generic 403; the
    reason only reaches the security log.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with a safe message
    """
    status_code = status_code_for(exc)

    if isinstance(exc, AccessDeniedError):
        return JSONResponse(
            status_code=status_code,
            content={"detail": SAFE_ERROR_MESSAGES[403]},
        )

    if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Unmapped domain error for {request.url}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content={"detail": SAFE_ERROR_MESSAGES[500]},
        )

    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, **({"details": exc.details} if exc.details else {})},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions, replacing unknown details with generic messages."""
    detail = exc.detail
    if not get_settings().debug and detail not in SAFE_ERROR_MESSAGES.values():
        detail = SAFE_ERROR_MESSAGES.get(exc.status_code, detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors without echoing input values."""
    logger.warning(f"Validation error for {request.url}: {exc.errors()}")

    if get_settings().debug:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors()},
        )

    fields = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field = loc[-1] if loc else "field"
        if isinstance(field, str) and not field.startswith("_"):
            fields.append(f"{field}: {error.get('msg', 'Invalid value')}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "; ".join(fields[:3]) or SAFE_ERROR_MESSAGES[422]},
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details."""
    logger.error(f"Database error for {request.url}: {exc}", exc_info=True)

    if isinstance(exc, IntegrityError):
        message = str(exc).lower()
        if "unique" in message or "duplicate" in message:
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={"detail": "Resource already exists"},
            )
        if "foreign key" in message:
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={"detail": "Resource is still referenced"},
            )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error occurred"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information."""
    logger.error(f"Unhandled exception for {request.url}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": SAFE_ERROR_MESSAGES[500]},
    )
