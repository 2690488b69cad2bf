"""
Ride Service Backend: Rides Route Handlers
============================================

What:  POST /rides (create), GET /rides (paginated list), GET /rides/{id} (detail).
How:   Extracts raw request values and delegates to RideService. Error
       responses come from the global exception handlers in main.py.

Routes are thin: the JSON body, `page` and `id` arrive untyped so that
RideService owns every parsing and validation decision.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request

from ride_service.schemas.ride import ErrorResponse, RideResponse
from ride_service.services.ride_service import RideService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rides"])


def get_ride_service(request: Request) -> RideService:
    """FastAPI dependency: a RideService bound to the app's store."""
    return RideService(request.app.state.ride_store)


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Read the request body as a JSON object.

    A missing, malformed, or non-object body is treated as `{}` so that it
    fails the first validation rule with the usual 422 body.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.debug("Request body is not valid JSON; treating as empty")
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post(
    "/rides",
    response_model=List[RideResponse],
    responses={
        200: {"description": "The created ride, as a one-element array"},
        422: {"description": "Validation error", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Start a new ride",
    description=(
        "Body fields: start_lat, start_long, end_lat, end_long (degrees), "
        "rider_name, driver_name, driver_vehicle (non-empty strings)."
    ),
)
async def create_ride(
    request: Request,
    service: RideService = Depends(get_ride_service),
) -> List[RideResponse]:
    payload = await read_json_object(request)
    return await service.create_ride(payload)


@router.get(
    "/rides",
    response_model=List[RideResponse],
    responses={
        200: {"description": "One page of rides (10 per page)"},
        404: {"description": "No rides on this page", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Fetch all rides with pagination",
)
async def list_rides(
    page: Optional[str] = Query(
        default=None,
        description="1-based page number; missing or invalid values mean page 1",
    ),
    service: RideService = Depends(get_ride_service),
) -> List[RideResponse]:
    return await service.list_rides(page)


@router.get(
    "/rides/{ride_id}",
    response_model=List[RideResponse],
    responses={
        200: {"description": "The ride, as a one-element array"},
        404: {"description": "Ride not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Fetch ride detail",
)
async def get_ride(
    ride_id: str,
    service: RideService = Depends(get_ride_service),
) -> List[RideResponse]:
    return await service.get_ride(ride_id)
