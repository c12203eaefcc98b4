# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
FastAPI Error Handlers for SkillHub

Registers global error handlers to convert exceptions into standardized JSON responses.

Usage:
    from fastapi import FastAPI
    from skillhub.core.error_handlers import register_error_handlers

    app = FastAPI()
    register_error_handlers(app)
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from skillhub.core.exceptions import ConfigurationError, SkillHubException

logger = logging.getLogger(__name__)


# =============================================================================
# Error Response Format
# =============================================================================

def create_error_response(
    status_code: int,
    error_type: str,
    message: str,
    detail: dict = None
) -> JSONResponse:
    """
    Create standardized JSON error response.

    Format:
        {
            "error": "ResourceNotFoundError",
            "message": "Skill with id maven not found",
            "status_code": 404,
            "detail": {
                "resource_type": "Skill",
                "resource_id": "maven"
            }
        }
    """
    content = {
        "error": error_type,
        "message": message,
        "status_code": status_code
    }

    if detail:
        content["detail"] = detail

    return JSONResponse(
        status_code=status_code,
        content=content
    )


# =============================================================================
# Exception Handlers
# =============================================================================

async def skillhub_exception_handler(request: Request, exc: SkillHubException) -> JSONResponse:
    """
    Handle all SkillHubException subclasses.

    Logs errors with appropriate severity levels.
    """
    if isinstance(exc, ConfigurationError):
        logger.error(
            f"Configuration error on {request.method} {request.url.path}: {exc.message}",
            extra={"detail": exc.detail}
        )
    elif exc.status_code >= 500:
        logger.error(
            f"Server error: {exc.message}",
            exc_info=True,
            extra={
                "exception_type": exc.__class__.__name__,
                "status_code": exc.status_code
            }
        )
    elif exc.status_code >= 400:
        logger.warning(
            f"Client error: {exc.message}",
            extra={
                "exception_type": exc.__class__.__name__,
                "status_code": exc.status_code
            }
        )

    return create_error_response(
        status_code=exc.status_code,
        error_type=exc.__class__.__name__,
        message=exc.message,
        detail=exc.detail
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Convert FastAPI/Pydantic request validation errors to the standard format."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"]
        })

    logger.warning(
        f"Validation error: {len(errors)} fields failed validation",
        extra={"validation_errors": errors}
    )

    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        error_type="ValidationError",
        message="Request validation failed",
        detail={"errors": errors}
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all handler for unexpected exceptions.

    Logs full stack trace and returns generic error response.
    """
    logger.error(
        f"Unexpected error: {str(exc)}",
        exc_info=True,
        extra={
            "exception_type": exc.__class__.__name__,
            "request_path": request.url.path,
            "request_method": request.method
        }
    )

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_type="InternalServerError",
        message="An unexpected error occurred",
        detail={
            "exception_type": exc.__class__.__name__
        }
    )


# =============================================================================
# Registration
# =============================================================================

def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers with the FastAPI application."""
    app.add_exception_handler(SkillHubException, skillhub_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Error handlers registered successfully")

