"""Error responses and exception handlers for the file server.

Expected failures (missing parameters, filesystem errors) are answered by
the routes themselves using ``error_response``. The handlers here cover
what escapes the routes: framework HTTP errors, request validation errors,
and anything unexpected.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import ErrorResponse


logger = logging.getLogger(__name__)

API_ROUTE_NOT_FOUND = "API route not found"
INTERNAL_SERVER_ERROR = "Internal Server Error"


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build a JSON error response with the standard ``{"error": ...}`` body.

    Args:
        message: Human-readable error message.
        status_code: HTTP status code to send.

    Returns:
        JSONResponse carrying an ErrorResponse body.
    """
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def internal_error_response() -> PlainTextResponse:
    """Plain-text 500 response used by the top-level guard."""
    return PlainTextResponse(
        INTERNAL_SERVER_ERROR,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render framework HTTP errors with the standard error body.

    Args:
        request: The incoming request that triggered the error.
        exc: The HTTPException raised by a route or by routing itself.

    Returns:
        JSONResponse with the exception's status code.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as 400 rather than FastAPI's 422.

    Args:
        request: The incoming request that triggered the error.
        exc: The RequestValidationError raised by FastAPI.

    Returns:
        JSONResponse with 400 status.
    """
    messages = [
        f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    ]
    return error_response("; ".join(messages) or "invalid request", status.HTTP_400_BAD_REQUEST)
