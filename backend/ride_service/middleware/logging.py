"""
Ride Service Backend: Access Logging Middleware
=================================================

What:  One access line per ride request, naming the outcome of the call.
How:   The exception handlers in main.py record the API error code on
       `request.state.error_code`; after the response is built this
       middleware reads it, together with the ride id or page the router
       matched, and logs e.g.

           GET /rides/42 -> 404 RIDES_NOT_FOUND_ERROR ride_id=42 (1.3ms) [a1b2c3d4]
           POST /rides -> 200 OK (4.8ms) [a1b2c3d4]

Request bodies are never logged: they carry rider and driver names.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ride_service.middleware.request_id import request_id_var

logger = logging.getLogger("ride_service.access")

# Load balancers poll this every few seconds
QUIET_PATHS = {"/health"}


def _outcome_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs the API outcome, ride id or page, and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        error_code = getattr(request.state, "error_code", None)
        if error_code is None:
            error_code = "OK" if response.status_code < 400 else f"HTTP_{response.status_code}"

        # The router fills path_params on the shared scope during call_next
        target = ""
        if "ride_id" in request.path_params:
            target = f" ride_id={request.path_params['ride_id']}"
        elif "page" in request.query_params:
            target = f" page={request.query_params['page']}"

        logger.log(
            _outcome_level(response.status_code),
            "%s %s -> %d %s%s (%.1fms) [%s]",
            request.method,
            request.url.path,
            response.status_code,
            error_code,
            target,
            elapsed_ms,
            request_id_var.get(""),
            extra={"error_code": error_code, "status": response.status_code},
        )
        return response
