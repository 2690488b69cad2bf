"""
Ride Service Backend: Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the API contract.
How:   `NewRide` is what validation produces and the store consumes;
       `RideResponse` is what clients receive (camelCase keys, `created`
       rendered as `YYYY-MM-DD HH:MM:SS`).

Why input is not a request model:
    The create-ride rules need a fixed check order and exact messages with a
    422 `{"error_code", "message"}` body. FastAPI's automatic body validation
    reports every field at once in its own shape, so the service validates the
    raw JSON itself and only then builds a `NewRide`.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

CREATED_FORMAT = "%Y-%m-%d %H:%M:%S"


# ══════════════════════════════════════════════════════════════════════════
# Input Model
# ══════════════════════════════════════════════════════════════════════════


class NewRide(BaseModel):
    """The seven client-supplied fields of a ride, already validated."""

    start_lat: float
    start_long: float
    end_lat: float
    end_long: float
    rider_name: str
    driver_name: str
    driver_vehicle: str


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class RideResponse(BaseModel):
    """
    What:  Wire representation of a ride.
    Who:   Returned (inside a list) by every /rides endpoint.

    Example:
        {
            "rideId": 1,
            "startLat": 0,
            "startLong": 0,
            "endLat": 0,
            "endLong": 0,
            "riderName": "Darwin",
            "driverName": "Driver1",
            "driverVehicle": "Honda CBR",
            "created": "2020-07-19 10:14:16"
        }
    """

    ride_id: int = Field(description="Unique, store-assigned ride identifier")
    start_lat: float = Field(description="Start latitude, -90 to 90")
    start_long: float = Field(description="Start longitude, -180 to 180")
    end_lat: float = Field(description="End latitude, -90 to 90")
    end_long: float = Field(description="End longitude, -180 to 180")
    rider_name: str = Field(description="Rider name")
    driver_name: str = Field(description="Driver name")
    driver_vehicle: str = Field(description="Driver vehicle")
    created: str = Field(description="Creation time, format YYYY-MM-DD HH:MM:SS (UTC)")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @field_validator("created", mode="before")
    @classmethod
    def format_created(cls, v: Any) -> Any:
        """Render ORM datetimes in the fixed wire format."""
        if isinstance(v, datetime):
            return v.strftime(CREATED_FORMAT)
        return v


# ══════════════════════════════════════════════════════════════════════════
# Error / Utility Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {"error_code": "RIDES_NOT_FOUND_ERROR", "message": "Could not find any rides"}
    """
    error_code: str = Field(description="VALIDATION_ERROR, SERVER_ERROR or RIDES_NOT_FOUND_ERROR")
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    healthy: bool = Field(description="True while the ride store is configured")
