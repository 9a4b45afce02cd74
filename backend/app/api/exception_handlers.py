"""
Exception handlers for the FastAPI application.

Application errors are rendered as ``{"message": ...}`` with the status code
carried by the exception class.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import FitPlanError
from app.core.logger import setup_logger

logger = setup_logger(__name__)


def create_error_response(status_code: int, message: str) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(status_code=status_code, content={"message": message})


async def fitplan_error_handler(request: Request, exc: FitPlanError) -> JSONResponse:
    """Handle all FitPlanError exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return create_error_response(exc.status_code, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request body/query validation errors as invalid arguments."""
    parts = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error["loc"] if x != "body")
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return create_error_response(400, "; ".join(parts) or "Invalid request")


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return create_error_response(500, "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(FitPlanError, fitplan_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    # Must stay last: catches everything else
    app.add_exception_handler(Exception, generic_exception_handler)
