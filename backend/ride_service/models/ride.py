"""
Ride Service Backend: Ride SQLAlchemy Model
=============================================

What:  ORM model representing the `rides` table.
Who:   Used by RideStore for inserts and queries; registered with Base.metadata
       so Database.ensure_ready() can create the table.

Table Design:
    - ride_id: INTEGER autoincrement primary key. Monotonically increasing, so
      ordering by it is creation order (used by pagination).
    - coordinates: FLOAT, range-checked before insertion (no CHECK constraint;
      the handler is the only writer).
    - names: TEXT NOT NULL, non-empty enforced by the handler.
    - created: set once at insertion, never updated.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from ride_service.database import Base


def _utcnow() -> datetime:
    # Second precision, naive UTC: matches the `YYYY-MM-DD HH:MM:SS` wire format
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


class Ride(Base):
    """
    One immutable trip record.

    Lifecycle:
        Created by a validated POST /rides; never updated or deleted.
    """

    __tablename__ = "rides"

    ride_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    start_lat: Mapped[float] = mapped_column(Float, nullable=False)
    start_long: Mapped[float] = mapped_column(Float, nullable=False)
    end_lat: Mapped[float] = mapped_column(Float, nullable=False)
    end_long: Mapped[float] = mapped_column(Float, nullable=False)

    rider_name: Mapped[str] = mapped_column(Text, nullable=False)
    driver_name: Mapped[str] = mapped_column(Text, nullable=False)
    driver_vehicle: Mapped[str] = mapped_column(Text, nullable=False)

    created: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=_utcnow,
    )

    def __repr__(self) -> str:
        return (
            f"<Ride(ride_id={self.ride_id}, rider_name='{self.rider_name}', "
            f"created='{self.created}')>"
        )
