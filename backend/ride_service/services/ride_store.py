"""
Ride Service Backend: Ride Store (Persistence Layer)
======================================================

What:  Insert and query operations over the `rides` table.
How:   Each operation calls `Database.ensure_ready()` first (lazy, one-shot
       connection and schema setup), then runs in its own session that
       commits on success and rolls back on error.
Who:   Called by RideService only.

Error policy:
    The store does not catch anything. SQLAlchemy errors propagate to
    RideService, which logs them and raises DatabaseError.

Query plans:
    insert:      INSERT INTO rides (...) VALUES (...), identity read back on flush
    find_by_id:  SELECT ... WHERE ride_id = :id            (primary key lookup)
    paginate:    SELECT ... ORDER BY ride_id LIMIT :size OFFSET :offset
"""

import logging
from typing import List, Optional

from sqlalchemy import select

from ride_service.config import Settings
from ride_service.database import Database
from ride_service.models.ride import Ride
from ride_service.schemas.ride import NewRide

logger = logging.getLogger(__name__)


class RideStore:
    """Durable (for the process lifetime) storage of ride records."""

    def __init__(self, config: Optional[Settings] = None, database: Optional[Database] = None):
        self.database = database or Database(config)

    async def ensure_ready(self) -> None:
        await self.database.ensure_ready()

    async def insert(self, new_ride: NewRide) -> int:
        """
        Persist a ride and return its assigned identity.

        The identity and `created` timestamp are assigned here, never by the
        client.
        """
        await self.ensure_ready()

        async with self.database.session() as session:
            ride = Ride(**new_ride.model_dump())
            session.add(ride)
            await session.flush()  # Assigns ride_id without ending the transaction
            ride_id = ride.ride_id

        logger.debug("Inserted ride %d", ride_id)
        return ride_id

    async def find_by_id(self, ride_id: int) -> List[Ride]:
        """Return the matching ride as a list: empty when absent."""
        await self.ensure_ready()

        async with self.database.session() as session:
            result = await session.execute(
                select(Ride).where(Ride.ride_id == ride_id)
            )
            return list(result.scalars().all())

    async def paginate(self, offset: int, size: int) -> List[Ride]:
        """
        Return up to `size` rides starting at `offset`, in insertion order.

        Past the end of the data this is an empty list, not an error.
        """
        await self.ensure_ready()

        async with self.database.session() as session:
            result = await session.execute(
                select(Ride).order_by(Ride.ride_id).offset(offset).limit(size)
            )
            return list(result.scalars().all())

    async def dispose(self) -> None:
        await self.database.dispose()
