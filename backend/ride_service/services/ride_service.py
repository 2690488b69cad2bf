"""
Ride Service Backend: Ride Service (Validation & Orchestration)
=================================================================

What:  The decision-making half of the request handler: validates create-ride
       input, parses path/query values, calls RideStore, and maps results and
       failures onto the API's error taxonomy.
Who:   Called by the route handlers in routes/rides.py.

Orchestration Flow (POST /rides):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────────┐
    │  Route   │───▶│  Validate   │───▶│ store.insert │───▶│ store.find   │
    │ (JSON)   │    │ (5 rules)   │    │ (new id)     │    │ (re-fetch)   │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────────┘

Error mapping:
    Rule failure         → ValidationError (422), before any store call
    Empty store result   → RidesNotFoundError (404)
    Any store exception  → DatabaseError (500), logged with context
"""

import logging
import math
import re
from typing import Any, List, Mapping, Optional

from ride_service.exceptions import DatabaseError, RidesNotFoundError, ValidationError
from ride_service.schemas.ride import NewRide, RideResponse
from ride_service.services.ride_store import RideStore

logger = logging.getLogger(__name__)

PAGE_SIZE = 10
DEFAULT_PAGE = 1

# SQLite INTEGER is a signed 64-bit value; larger ids/offsets cannot be bound
MAX_SQL_INTEGER = 2**63 - 1
MIN_SQL_INTEGER = -(2**63)

# ASCII digits only: int() would also take "1_0", "+5" and non-ASCII digits
_INTEGER_TEXT = re.compile(r"-?[0-9]+")

COORDINATE_MESSAGE = (
    "{point} latitude and longitude must be between -90 to 90 "
    "and -180 to 180 degrees respectively"
)


# ══════════════════════════════════════════════════════════════════════════
# Input Parsing
# ══════════════════════════════════════════════════════════════════════════


def parse_coordinate(value: Any) -> Optional[float]:
    """
    Coerce a JSON value to a finite float, or None if it is not numeric.

    Accepted: JSON numbers and numeric strings ("50", " -12.5 ").
    Rejected: missing/null, booleans, empty strings, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # JSON integers wider than a double, e.g. 10**400
            return None
    elif isinstance(value, str):
        if not value.strip():
            return None
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _parse_integer(raw: str) -> Optional[int]:
    text = raw.strip()
    if not _INTEGER_TEXT.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # Beyond the interpreter's int/str digit limit
        return None


def parse_page(raw: Optional[str]) -> Optional[int]:
    """
    Parse the `page` query value.

    Returns the page number when `raw` is a positive integer written in
    ASCII digits, otherwise None. Callers substitute DEFAULT_PAGE for None.
    """
    if raw is None:
        return None
    page = _parse_integer(raw)
    if page is None or page < 1:
        return None
    return page


def parse_ride_id(raw: Any) -> Optional[int]:
    """
    Parse a path id; anything that is not an integer cannot match a ride.

    Integers outside SQLite's 64-bit range cannot match either, so they
    are None too.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        ride_id = raw
    else:
        ride_id = _parse_integer(str(raw))
    if ride_id is None or not MIN_SQL_INTEGER <= ride_id <= MAX_SQL_INTEGER:
        return None
    return ride_id


def _valid_point(lat: Optional[float], long: Optional[float]) -> bool:
    return (
        lat is not None
        and long is not None
        and -90 <= lat <= 90
        and -180 <= long <= 180
    )


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) >= 1


def validate_new_ride(payload: Mapping[str, Any]) -> NewRide:
    """
    Apply the create-ride rules in their fixed order.

    Order: start point → end point → rider name → driver name → driver vehicle.
    The first failing rule raises; later rules are not evaluated.

    Raises:
        ValidationError: with the message of the first failing rule.
    """
    start_lat = parse_coordinate(payload.get("start_lat"))
    start_long = parse_coordinate(payload.get("start_long"))
    if not _valid_point(start_lat, start_long):
        raise ValidationError(COORDINATE_MESSAGE.format(point="Start"), field="start")

    end_lat = parse_coordinate(payload.get("end_lat"))
    end_long = parse_coordinate(payload.get("end_long"))
    if not _valid_point(end_lat, end_long):
        raise ValidationError(COORDINATE_MESSAGE.format(point="End"), field="end")

    rider_name = payload.get("rider_name")
    if not _non_empty_string(rider_name):
        raise ValidationError("Rider name must be a non empty string", field="rider_name")

    driver_name = payload.get("driver_name")
    if not _non_empty_string(driver_name):
        raise ValidationError("Driver name must be a non empty string", field="driver_name")

    driver_vehicle = payload.get("driver_vehicle")
    if not _non_empty_string(driver_vehicle):
        raise ValidationError("Driver Vehicle must be a non empty string", field="driver_vehicle")

    return NewRide(
        start_lat=start_lat,
        start_long=start_long,
        end_lat=end_lat,
        end_long=end_long,
        rider_name=rider_name,
        driver_name=driver_name,
        driver_vehicle=driver_vehicle,
    )


# ══════════════════════════════════════════════════════════════════════════
# Service
# ══════════════════════════════════════════════════════════════════════════


class RideService:
    """
    Business logic for ride operations.

    Responsibilities:
        - create_ride(): validate → insert → re-fetch
        - get_ride(): single ride lookup with not-found handling
        - list_rides(): fixed-size page of rides with not-found handling

    The service holds no state besides its store; one store operation is
    awaited at a time per call.
    """

    def __init__(self, store: RideStore):
        self.store = store

    async def create_ride(self, payload: Mapping[str, Any]) -> List[RideResponse]:
        """
        Create a ride and return it as a one-element list.

        Raises:
            ValidationError: Input failed a rule (no store call was made)
            DatabaseError: Insert or re-fetch failed
        """
        new_ride = validate_new_ride(payload)

        try:
            ride_id = await self.store.insert(new_ride)
            rows = await self.store.find_by_id(ride_id)
        except Exception as e:
            logger.error("Database error creating ride: %s", str(e), exc_info=True)
            raise DatabaseError(
                context={"operation": "create_ride", "error_type": type(e).__name__},
            ) from e

        logger.info("Ride %d created for rider %s", ride_id, new_ride.rider_name)
        return [RideResponse.model_validate(row) for row in rows]

    async def get_ride(self, raw_id: Any) -> List[RideResponse]:
        """
        Fetch a ride by its id.

        Raises:
            RidesNotFoundError: No ride has this id (or the id is not an integer)
            DatabaseError: Query execution failed
        """
        ride_id = parse_ride_id(raw_id)
        if ride_id is None:
            raise RidesNotFoundError(context={"ride_id": str(raw_id)})

        try:
            rows = await self.store.find_by_id(ride_id)
        except Exception as e:
            logger.error("Database error fetching ride %s: %s", ride_id, str(e), exc_info=True)
            raise DatabaseError(
                context={"operation": "find_by_id", "ride_id": ride_id, "error_type": type(e).__name__},
            ) from e

        if not rows:
            raise RidesNotFoundError(context={"ride_id": ride_id})

        return [RideResponse.model_validate(row) for row in rows]

    async def list_rides(self, raw_page: Optional[str] = None) -> List[RideResponse]:
        """
        Fetch one page of rides in creation order.

        Pagination:
            page   = parse_page(raw_page) or DEFAULT_PAGE
            offset = (page - 1) * PAGE_SIZE

        Raises:
            RidesNotFoundError: The page is empty (empty table or past the end)
            DatabaseError: Query execution failed
        """
        page = parse_page(raw_page)
        if page is None:
            page = DEFAULT_PAGE
        offset = (page - 1) * PAGE_SIZE
        if offset > MAX_SQL_INTEGER:
            # No table can hold that many rows; the page is past the end
            raise RidesNotFoundError(context={"page": page})

        try:
            rows = await self.store.paginate(offset=offset, size=PAGE_SIZE)
        except Exception as e:
            logger.error("Database error listing rides (page %d): %s", page, str(e), exc_info=True)
            raise DatabaseError(
                context={"operation": "paginate", "page": page, "error_type": type(e).__name__},
            ) from e

        if not rows:
            raise RidesNotFoundError(context={"page": page})

        return [RideResponse.model_validate(row) for row in rows]
