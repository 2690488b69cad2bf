"""
Ride Service Backend: Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the three failure classes of the API.
How:   Each exception carries a client-safe message, a machine-readable
       `error_code`, the HTTP `status_code` it maps to, and an optional context
       dict. Global handlers (registered in main.py) render them as
       `{"error_code": ..., "message": ...}`.
Who:   Raised by RideService; caught by the handlers in main.py.

Exception Hierarchy:
    RideServiceError (base)
    ├── ValidationError      → 422 VALIDATION_ERROR (client can fix the input)
    ├── RidesNotFoundError   → 404 RIDES_NOT_FOUND_ERROR (query matched nothing)
    └── DatabaseError        → 500 SERVER_ERROR (store failure, details logged only)
"""

from typing import Any, Dict, Optional


class RideServiceError(Exception):
    """
    Base exception for all Ride Service application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    error_code: str = "SERVER_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str = "Unknown error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_response(self) -> Dict[str, str]:
        return {"error_code": self.error_code, "message": self.message}


class ValidationError(RideServiceError):
    """
    Raised when a create-ride request fails one of the input rules.

    HTTP:    422 Unprocessable Entity

    Example response:
        {
            "error_code": "VALIDATION_ERROR",
            "message": "Rider name must be a non empty string"
        }
    """

    error_code = "VALIDATION_ERROR"
    status_code = 422

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class RidesNotFoundError(RideServiceError):
    """
    Raised when a ride query legitimately matched nothing.

    When:    GET /rides/{id} for an unknown id, or GET /rides on an empty table
             or past the last page.
    HTTP:    404 Not Found

    This is not a fault: the store answered with an empty collection and the
    service turns that into a 404 so clients see a consistent shape.
    """

    error_code = "RIDES_NOT_FOUND_ERROR"
    status_code = 404

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Could not find any rides", context=context)


class DatabaseError(RideServiceError):
    """
    Raised when a store operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always the generic "Unknown error".
        The original exception type and operation are kept in `context` and
        logged server-side only.
    """

    error_code = "SERVER_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str = "Unknown error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
