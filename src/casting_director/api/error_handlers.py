"""
FastAPI exception handlers for structured error responses.

Every error body has the shape {"error": str, "statusCode": int, "details"?: dict}.
"""

from typing import Any, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class APIError(Exception):
    """Base class for errors rendered directly as an HTTP response."""
    
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class MissingParametersError(APIError):
    """Required body fields are missing or empty (400)."""
    
    status_code = status.HTTP_400_BAD_REQUEST
    
    def __init__(self, missing: list[str], message: str = "Missing required parameters"):
        super().__init__(message, details={"missing": missing})
        self.missing = missing


class ServiceFailure(APIError):
    """An endpoint could not produce its result (500)."""
    
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    status_code: int, message: str, details: Optional[dict[str, Any]] = None
) -> JSONResponse:
    content: dict[str, Any] = {"error": message, "statusCode": status_code}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Render APIError subclasses with their own status code."""
    if exc.status_code >= 500:
        logger.error("Request failed", error=exc.message, status_code=exc.status_code)
    else:
        logger.warning("Request rejected", error=exc.message, status_code=exc.status_code, details=exc.details)
    return error_response(exc.status_code, exc.message, exc.details)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle bodies FastAPI could not parse (invalid JSON, non-object body).
    
    Maps to 400 Bad Request.
    """
    logger.warning("Invalid request body", errors=exc.errors())
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request body",
        {"errors": [error.get("msg", "") for error in exc.errors()]},
    )


async def pydantic_validation_error_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """
    Handle request model validation errors (wrong field types).
    
    Maps to 400 Bad Request.
    """
    logger.warning("Invalid request parameters", errors=exc.errors(include_url=False))
    invalid = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request parameters",
        {"invalid": invalid},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors (404, 405) in the common error shape."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method not allowed"
    else:
        message = str(exc.detail)
    response = error_response(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.
    
    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    APIError: api_error_handler,
    RequestValidationError: request_validation_error_handler,
    PydanticValidationError: pydantic_validation_error_handler,
    StarletteHTTPException: http_exception_handler,
    Exception: generic_error_handler,
}
