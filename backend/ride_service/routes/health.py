"""
Ride Service Backend: Health Check Route
==========================================

What:  GET /health for monitoring and load balancer health checks.
How:   Reports healthy while a RideStore is attached to the application.
       The store connects lazily, so the check does not touch the database.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ride_service.schemas.ride import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request):
    if getattr(request.app.state, "ride_store", None) is None:
        logger.warning("Health check: no ride store configured")
        return JSONResponse(status_code=503, content={"healthy": False})
    return HealthResponse(healthy=True)
