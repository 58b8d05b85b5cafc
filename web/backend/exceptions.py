#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class InvalidAnswersException(ServiceException):
    """Raised when the submitted answer list is missing, empty, too long or unusable."""
    pass


class InvalidQueryException(ServiceException):
    """Raised when a query parameter is missing or malformed."""
    pass


class CatalogEmptyException(ServiceException):
    """Raised when the catalog holds no data for the request (ingestion has not run)."""
    pass


class CatalogInvalidException(ServiceException):
    """Raised when catalog data exists but none of it passes validation."""
    pass


_STATUS_CODES = {
    InvalidAnswersException: 400,
    InvalidQueryException: 400,
    CatalogEmptyException: 404,
    CatalogInvalidException: 500,
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
    status_code = _STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.warning(f"Rejected request to {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Report unparseable request bodies as 400 in the common error format.
    """
    logger.warning(f"Malformed request to {request.url.path}: {exc.errors()}")

    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Invalid request body. Expected { answers: [...] }",
            "type": "RequestValidationError"
        }
    )
