"""Global exception handlers that map domain exceptions to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from booking.errors import (
    CONFIGURATION_ERROR,
    DUPLICATE_RESOURCE,
    LOCATION_INACTIVE,
    NOT_FOUND,
    POLICY_VIOLATION,
    VALIDATION_ERROR,
    ConfigurationError,
    DomainValidationError,
    DuplicateResourceError,
    LocationInactiveError,
    NotFoundError,
    PolicyViolationError,
)
from booking.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int, detail: str, code: str, violations: list[str] | None = None
) -> JSONResponse:
    """Return a standardized error response with detail and machine-readable code."""
    body = ErrorResponse(detail=detail, code=code, violations=violations)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True)
    )


def domain_validation_error_handler(
    _request: Request, exc: DomainValidationError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        VALIDATION_ERROR,
    )


def duplicate_resource_error_handler(
    _request: Request, exc: DuplicateResourceError
) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        DUPLICATE_RESOURCE,
    )


def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        str(exc),
        NOT_FOUND,
    )


def location_inactive_error_handler(
    _request: Request, exc: LocationInactiveError
) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        LOCATION_INACTIVE,
    )


def policy_violation_error_handler(
    _request: Request, exc: PolicyViolationError
) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        POLICY_VIOLATION,
        violations=exc.violations,
    )


def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    # Broken deployment or inconsistent data, not a bad request.
    logger.error("Policy configuration error on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc),
        CONFIGURATION_ERROR,
    )


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(DomainValidationError, domain_validation_error_handler)
    app.add_exception_handler(DuplicateResourceError, duplicate_resource_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(LocationInactiveError, location_inactive_error_handler)
    app.add_exception_handler(PolicyViolationError, policy_violation_error_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
