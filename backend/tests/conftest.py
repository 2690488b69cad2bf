"""
Ride Service Backend: Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings pointing at a private in-memory database
    ├── ride_store: Real RideStore on in-memory SQLite (disposed after the test)
    ├── mock_store: AsyncMock-backed RideStore (no database)
    ├── ride_payload: A valid create-ride body
    └── test_client: HTTPX AsyncClient for a freshly built app
"""

import os
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ.pop("LOG_FILE", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from ride_service.config import Settings
from ride_service.main import create_app
from ride_service.models.ride import Ride
from ride_service.services.ride_store import RideStore


@pytest.fixture
def test_settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:", log_level="WARNING")


@pytest_asyncio.fixture
async def ride_store(test_settings):
    """
    Provides a real RideStore backed by a fresh in-memory database.

    Each test gets its own engine, so rides never leak between tests.
    """
    store = RideStore(test_settings)
    yield store
    await store.dispose()


@pytest.fixture
def mock_store():
    """
    Provides a RideStore whose operations are AsyncMocks.

    Usage:
        mock_store.find_by_id.return_value = [make_ride()]
        mock_store.paginate.side_effect = OperationalError(...)
    """
    store = MagicMock(spec=RideStore)
    store.insert = AsyncMock(return_value=1)
    store.find_by_id = AsyncMock(return_value=[])
    store.paginate = AsyncMock(return_value=[])
    store.dispose = AsyncMock()
    return store


@pytest.fixture
def ride_payload():
    """A valid create-ride request body."""
    return {
        "start_lat": 50,
        "start_long": 100,
        "end_lat": 50,
        "end_long": 100,
        "rider_name": "Darwin",
        "driver_name": "Driver A",
        "driver_vehicle": "Yamaha N-Max",
    }


@pytest.fixture
def make_ride():
    """Factory for detached Ride ORM instances, shaped as the store returns them."""

    def _make(ride_id: int = 1, **overrides) -> Ride:
        fields = {
            "ride_id": ride_id,
            "start_lat": 50.0,
            "start_long": 100.0,
            "end_lat": 50.0,
            "end_long": 100.0,
            "rider_name": f"Darwin{ride_id}",
            "driver_name": f"Driver A{ride_id}",
            "driver_vehicle": "Yamaha N-Max",
            "created": datetime(2020, 7, 19, 10, 14, 16),
        }
        fields.update(overrides)
        return Ride(**fields)

    return _make


@pytest_asyncio.fixture
async def test_client(test_settings, ride_store):
    """
    Provides an async HTTP test client for endpoint testing.

    How:   ASGITransport routes requests straight into a new app whose
           state holds the `ride_store` fixture.
    """
    app = create_app(config=test_settings, store=ride_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
