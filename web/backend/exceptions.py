#!/usr/bin/env python3
"""
Error handlers for the web application.

Domain exceptions live in core/exceptions.py; this module maps each
family to an HTTP status with a consistent JSON body.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import (
    ServiceException,
    InvalidWeightsException,
    DailySwipeLimitExceeded,
    SuperLikeLimitExceeded,
    InvalidSwipeException,
    InvariantViolation,
    NotFoundException,
    MatchAccessDenied,
)

logger = logging.getLogger(__name__)

# Checked in order, first isinstance match wins
STATUS_CODES = (
    (NotFoundException, 404),
    (MatchAccessDenied, 403),
    (InvariantViolation, 409),
    ((DailySwipeLimitExceeded, SuperLikeLimitExceeded), 429),
    ((InvalidWeightsException, InvalidSwipeException), 400),
)


def status_code_for(exc: ServiceException) -> int:
    for exc_types, status_code in STATUS_CODES:
        if isinstance(exc, exc_types):
            return status_code
    return 500


def _error_body(error, error_type: str) -> dict:
    return {
        "success": False,
        "error": error,
        "type": error_type
    }


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content=_error_body(str(exc), exc.__class__.__name__)
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, "HTTPException")
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request body/query validation failures with consistent format."""
    errors = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_error_body("; ".join(errors), "ValidationError")
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: The FastAPI request.
        exc: The exception.

    Returns:
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content=_error_body("Internal server error", "InternalError")
    )
