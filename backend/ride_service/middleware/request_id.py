"""
Ride Service Backend: Request ID Middleware
=============================================

What:  Assigns an id to each incoming request and echoes it in `X-Request-ID`.
Why:   Lets every log line of a request, including server-error logs, be
       correlated with what the client saw.
How:   Uses the client's `X-Request-ID` header when present, otherwise a short
       UUID; stored in a ContextVar for loggers and in `request.state`.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 chars of a UUID is enough for correlation and stays readable in logs
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
