from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from app.core.config import settings
from app.core.database import engine as default_engine, Base
from app.core.logger import logger
from app.models import Trip


async def init_db(engine: AsyncEngine = default_engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ensure_default_trip(db: AsyncSession, trip_id: int = None) -> Trip:
    """Create the shared trip row on first boot."""
    trip_id = trip_id if trip_id is not None else settings.DEFAULT_TRIP_ID
    trip = await db.get(Trip, trip_id)
    if trip:
        return trip

    trip = Trip(
        id=trip_id,
        title=settings.DEFAULT_TRIP_TITLE,
        dates=settings.DEFAULT_TRIP_DATES,
        islands=settings.DEFAULT_TRIP_ISLANDS,
    )
    db.add(trip)
    await db.commit()
    logger.info(f"Created default trip {trip_id}")
    return trip
