#!/usr/bin/env python3
"""
Error handlers for the web application.

Service exceptions are defined in core.exceptions; this module maps them
to HTTP status codes with a consistent JSON body.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import (
    ServiceException,
    NotFoundException,
    StateConflictException,
    PermissionDeniedException,
    ValidationException,
    TransactionFailedException,
)

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins
STATUS_CODES = (
    (NotFoundException, 404),
    (StateConflictException, 409),
    (PermissionDeniedException, 403),
    (ValidationException, 400),
    (TransactionFailedException, 503),
)


def status_code_for(exc: ServiceException) -> int:
    for exc_type, status_code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


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
        logger.warning(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    content = {
        "success": False,
        "error": str(exc),
        "type": exc.__class__.__name__
    }
    current_state = getattr(exc, "current_state", None)
    if current_state is not None:
        content["current_state"] = getattr(current_state, "value", str(current_state))

    return JSONResponse(status_code=status_code, content=content)


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


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body/query validation failures.
    """
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Validation error",
            "type": "ValidationError",
            "details": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
                for err in exc.errors()
            ]
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
