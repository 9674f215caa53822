from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

from .schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with structured error response"""
    logger.warning(f"HTTP {exc.status_code}: {exc.detail} - {request.url.path}")

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            message=str(exc.detail),
            status_code=exc.status_code,
            path=str(request.url.path),
        ).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with detailed error information"""
    logger.warning(f"Validation error: {exc.errors()} - {request.url.path}")

    content = ErrorResponse(
        message="Validation error",
        status_code=422,
        path=str(request.url.path),
    ).model_dump()
    content["errors"] = jsonable_errors(exc)
    return JSONResponse(status_code=422, content=content)


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions without leaking internal detail"""
    logger.error(f"Unexpected error: {str(exc)} - {request.url.path}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            message="Internal server error.",
            status_code=500,
            path=str(request.url.path),
        ).model_dump(),
    )
