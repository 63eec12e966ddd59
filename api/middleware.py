"""CORS and top-level guard middleware.

Every response leaves the server with ``Access-Control-Allow-Origin: *``,
including error responses produced by the guard. ``OPTIONS`` requests are
answered here before routing, whatever their path.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from api.exceptions import internal_error_response


logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class CORSGuardMiddleware(BaseHTTPMiddleware):
    """Log each request, short-circuit preflights, add CORS headers, and catch stray exceptions."""

    async def dispatch(self, request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)

        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error while serving %s %s", request.method, request.url.path)
            response = internal_error_response()

        for name, value in CORS_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
