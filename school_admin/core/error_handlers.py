from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from .exceptions import ErrorCodes, SchoolAdminException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_body(error_code: int, message: str) -> dict:
    return {"errorCode": int(error_code), "message": message}


async def school_admin_exception_handler(request: Request, exc: SchoolAdminException):
    """Handle domain exceptions; server-side failures never leak their detail."""
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc.message} - Path: {request.url.path}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.error_code, INTERNAL_ERROR_MESSAGE)
        )

    logger.warning(f"{exc.__class__.__name__}: {exc.message} - Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error_code, exc.message)
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Map FastAPI request validation failures to the service's error shape."""
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        logger.warning(f"Malformed JSON body - Path: {request.url.path}")
        return JSONResponse(
            status_code=400,
            content=error_body(ErrorCodes.MALFORMED_JSON_ERROR_CODE, "Malformed JSON in request body")
        )

    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = f"Invalid value for '{field}': {first.get('msg', 'invalid input')}" if field else "Invalid request"
    logger.warning(f"Request validation failed: {message} - Path: {request.url.path}")
    return JSONResponse(status_code=400, content=error_body(400, message))


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.exception(f"Unexpected error: {str(exc)} - Path: {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_body(ErrorCodes.RUNTIME_ERROR_CODE, INTERNAL_ERROR_MESSAGE)
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SchoolAdminException, school_admin_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
