from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
import logging

from .exceptions import SchoolHubException, DuplicateRecord

logger = logging.getLogger(__name__)


async def schoolhub_exception_handler(request: Request, exc: SchoolHubException):
    """Render application exceptions as {success, error, message}"""
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc.message} - Path: {request.url.path}")
    else:
        logger.info(f"{exc.__class__.__name__}: {exc.message} - Path: {request.url.path}")

    content = {
        "success": False,
        "error": exc.__class__.__name__,
        "message": exc.message,
    }
    content.update(exc.extra())
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Unique/foreign key violations that escaped the service layer"""
    logger.warning(f"Integrity error: {exc.orig} - Path: {request.url.path}")
    return await schoolhub_exception_handler(request, DuplicateRecord())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Body and query validation failures in the same shape as ValidationError"""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"].removeprefix("Value error, "),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "ValidationError",
            "message": errors[0]["message"] if errors else "Invalid request",
            "errors": errors,
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.exception(f"Unexpected error: {str(exc)} - Path: {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "InternalError", "message": "Internal server error"}
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(SchoolHubException, schoolhub_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
