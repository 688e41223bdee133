from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.core.logger import logger
from app.models.trips.trip_model import Trip
from app.schemas.trip.trip_schema import TripInfoUpdate
from app.utils.db import write_transaction


class TripService:

    async def get_trip(self, db: AsyncSession, trip_id: int) -> Trip:
        trip = await db.get(Trip, trip_id)
        if not trip:
            raise NotFoundError(f"Trip {trip_id} not found")
        return trip

    async def update_trip_info(self, db: AsyncSession, trip_id: int, trip_update: TripInfoUpdate) -> Trip:
        """Upsert the trip row. Fields the client left out keep their stored value."""
        update_data = trip_update.model_dump(exclude_none=True)

        async with write_transaction(db, f"update trip {trip_id}"):
            trip = await db.get(Trip, trip_id)
            if trip is None:
                trip = Trip(
                    id=trip_id,
                    title=settings.DEFAULT_TRIP_TITLE,
                    dates=settings.DEFAULT_TRIP_DATES,
                    islands=settings.DEFAULT_TRIP_ISLANDS,
                )
                db.add(trip)
                logger.info(f"Trip {trip_id} did not exist, creating it")

            for field, value in update_data.items():
                setattr(trip, field, value)

        logger.info(f"Trip {trip_id} info updated: {trip.to_dict()}")
        return trip
