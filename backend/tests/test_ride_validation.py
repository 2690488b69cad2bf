"""
Ride Service Backend: Input Validation Unit Tests
===================================================

What:  Tests for create-ride validation and the page/id/coordinate parsers.
Why:   Validation is the only thing standing between client input and the store;
       its order and exact messages are part of the API contract.

Test Strategy:
    ✅ Coordinate coercion (numbers, numeric strings, rejects)
    ✅ Range boundaries for latitude and longitude
    ✅ Fixed rule order: start → end → rider → driver → vehicle
    ✅ Page parsing with default substitution
"""

import pytest

from ride_service.exceptions import ValidationError
from ride_service.services.ride_service import (
    parse_coordinate,
    parse_page,
    parse_ride_id,
    validate_new_ride,
)

START_MESSAGE = (
    "Start latitude and longitude must be between -90 to 90 and -180 to 180 degrees respectively"
)
END_MESSAGE = (
    "End latitude and longitude must be between -90 to 90 and -180 to 180 degrees respectively"
)


class TestParseCoordinate:
    """Tests for parse_coordinate."""

    def test_integer(self):
        assert parse_coordinate(50) == 50.0

    def test_float(self):
        assert parse_coordinate(-12.25) == -12.25

    def test_numeric_string(self):
        assert parse_coordinate(" 45.5 ") == 45.5

    @pytest.mark.parametrize("value", [None, True, False, "", "   ", "north", [], {}, "nan", "inf"])
    def test_non_numeric_rejected(self, value):
        assert parse_coordinate(value) is None

    def test_nan_float_rejected(self):
        assert parse_coordinate(float("nan")) is None

    def test_integer_wider_than_float_rejected(self):
        assert parse_coordinate(10**400) is None


class TestParsePage:
    """Tests for parse_page: positive integers only, None otherwise."""

    def test_missing(self):
        assert parse_page(None) is None

    def test_positive(self):
        assert parse_page("3") == 3

    @pytest.mark.parametrize("raw", ["0", "-1", "abc", "", "2.5", "1_0", "+5", "\u0661\u0662"])
    def test_invalid_returns_none(self, raw):
        assert parse_page(raw) is None


class TestParseRideId:

    def test_numeric_string(self):
        assert parse_ride_id("7") == 7

    def test_non_numeric(self):
        assert parse_ride_id("abc") is None

    @pytest.mark.parametrize("raw", ["1_0", "+5", "\u0661\u0662", "1.0", " "])
    def test_non_ascii_integer_forms_rejected(self, raw):
        assert parse_ride_id(raw) is None

    def test_largest_storable_id(self):
        assert parse_ride_id(str(2**63 - 1)) == 2**63 - 1

    @pytest.mark.parametrize("raw", [str(2**63), "99999999999999999999", 2**63, -(2**63) - 1])
    def test_beyond_64_bit_rejected(self, raw):
        assert parse_ride_id(raw) is None


class TestValidateNewRide:
    """Tests for the ordered create-ride rules."""

    def test_valid_payload(self, ride_payload):
        ride = validate_new_ride(ride_payload)
        assert ride.start_lat == 50.0
        assert ride.end_long == 100.0
        assert ride.rider_name == "Darwin"
        assert ride.driver_vehicle == "Yamaha N-Max"

    def test_empty_payload_fails_on_start(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_new_ride({})
        assert exc_info.value.message == START_MESSAGE
        assert exc_info.value.error_code == "VALIDATION_ERROR"

    def test_boundaries_accepted(self, ride_payload):
        ride_payload.update(start_lat=-90, start_long=-180, end_lat=90, end_long=180)
        ride = validate_new_ride(ride_payload)
        assert (ride.start_lat, ride.start_long) == (-90.0, -180.0)
        assert (ride.end_lat, ride.end_long) == (90.0, 180.0)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("start_lat", -100),
            ("start_lat", 100),
            ("start_long", -200),
            ("start_long", 200),
            ("start_lat", "abc"),
            ("start_long", None),
            ("start_lat", 10**400),
        ],
    )
    def test_bad_start_point(self, ride_payload, field, value):
        ride_payload[field] = value
        with pytest.raises(ValidationError) as exc_info:
            validate_new_ride(ride_payload)
        assert exc_info.value.message == START_MESSAGE

    @pytest.mark.parametrize(
        "field,value",
        [
            ("end_lat", -90.5),
            ("end_lat", 90.5),
            ("end_long", -180.1),
            ("end_long", 180.1),
            ("end_lat", True),
        ],
    )
    def test_bad_end_point(self, ride_payload, field, value):
        ride_payload[field] = value
        with pytest.raises(ValidationError) as exc_info:
            validate_new_ride(ride_payload)
        assert exc_info.value.message == END_MESSAGE

    def test_missing_end_point(self, ride_payload):
        del ride_payload["end_lat"]
        del ride_payload["end_long"]
        with pytest.raises(ValidationError, match="^End latitude"):
            validate_new_ride(ride_payload)

    def test_empty_rider_name(self, ride_payload):
        ride_payload["rider_name"] = ""
        with pytest.raises(ValidationError, match="Rider name must be a non empty string"):
            validate_new_ride(ride_payload)

    def test_non_string_rider_name(self, ride_payload):
        ride_payload["rider_name"] = 42
        with pytest.raises(ValidationError, match="Rider name must be a non empty string"):
            validate_new_ride(ride_payload)

    def test_missing_driver_name(self, ride_payload):
        del ride_payload["driver_name"]
        with pytest.raises(ValidationError, match="Driver name must be a non empty string"):
            validate_new_ride(ride_payload)

    def test_empty_driver_vehicle(self, ride_payload):
        ride_payload["driver_vehicle"] = ""
        with pytest.raises(ValidationError, match="Driver Vehicle must be a non empty string"):
            validate_new_ride(ride_payload)

    # ── Rule order ────────────────────────────────────────────────────────

    def test_start_checked_before_end(self, ride_payload):
        ride_payload.update(start_lat=500, end_lat=500)
        with pytest.raises(ValidationError) as exc_info:
            validate_new_ride(ride_payload)
        assert exc_info.value.message == START_MESSAGE

    def test_end_checked_before_names(self, ride_payload):
        ride_payload.update(end_long=500, rider_name="", driver_name="", driver_vehicle="")
        with pytest.raises(ValidationError) as exc_info:
            validate_new_ride(ride_payload)
        assert exc_info.value.message == END_MESSAGE

    def test_rider_checked_before_driver_and_vehicle(self, ride_payload):
        ride_payload.update(rider_name="", driver_name="", driver_vehicle="")
        with pytest.raises(ValidationError, match="^Rider name"):
            validate_new_ride(ride_payload)

    def test_driver_checked_before_vehicle(self, ride_payload):
        ride_payload.update(driver_name=None, driver_vehicle=None)
        with pytest.raises(ValidationError, match="^Driver name"):
            validate_new_ride(ride_payload)
