from typing import Any, Dict, List, Optional
from sqlalchemy import case, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError
from app.core.exceptions import NotFoundError, PlaceLookupError
from app.core.logger import logger
from app.models.itinerary.activity import Activity
from app.models.itinerary.day_model import Day
from app.models.trips.trip_model import Trip
from app.schemas.itineraries.activity import ActivityCreate, ActivityUpdate
from app.services.places.place_lookup import PlaceLookupService
from app.utils.db import NO_SYNC, write_transaction


class ItineraryService:
    def __init__(self, place_lookup: Optional[PlaceLookupService] = None):
        self.place_lookup = place_lookup

    async def _require_trip(self, db: AsyncSession, trip_id: int):
        exists = await db.scalar(select(Trip.id).where(Trip.id == trip_id))
        if exists is None:
            raise NotFoundError(f"Trip {trip_id} not found")

    async def _require_day(self, db: AsyncSession, trip_id: int, day_id: int):
        exists = await db.scalar(
            select(Day.id).where(Day.id == day_id, Day.trip_id == trip_id)
        )
        if exists is None:
            raise NotFoundError(f"Day {day_id} not found")

    async def _get_activity(self, db: AsyncSession, trip_id: int, activity_id: int) -> Optional[Activity]:
        result = await db.execute(
            select(Activity)
            .join(Day, Activity.day_id == Day.id)
            .where(Activity.id == activity_id, Day.trip_id == trip_id)
        )
        return result.scalar_one_or_none()

    async def _lookup_preview(self, location: str, fallback: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Run the place lookup, returning `fallback` if it fails for any reason."""
        if self.place_lookup is None:
            return fallback
        try:
            return await self.place_lookup.lookup(location)
        except PlaceLookupError as e:
            logger.warning(f"⚠️ Place lookup failed for '{location}': {e}")
        except Exception:
            logger.exception(f"Unexpected error looking up '{location}'")
        return fallback

    # -- days ---------------------------------------------------------------

    async def add_day(self, db: AsyncSession, trip_id: int) -> Day:
        async with write_transaction(db, f"add a day to trip {trip_id}"):
            await self._require_trip(db, trip_id)
            # Read and write the number in one statement so concurrent adds cannot share it
            next_number = (
                select(func.coalesce(func.max(Day.day_number), 0) + 1)
                .where(Day.trip_id == trip_id)
                .correlate(None)
                .scalar_subquery()
            )
            day_id = await db.scalar(
                insert(Day).values(trip_id=trip_id, day_number=next_number).returning(Day.id)
            )
            day = await db.get(Day, day_id)

        logger.info(f"Day {day.id} (day {day.day_number}) added to trip {trip_id}")
        return day

    async def remove_day(self, db: AsyncSession, trip_id: int, day_id: int) -> bool:
        """Delete a day and its activities. Returns False if the day was already gone."""
        async with write_transaction(db, f"remove day {day_id}"):
            day_exists = await db.scalar(
                select(Day.id).where(Day.id == day_id, Day.trip_id == trip_id)
            )
            if day_exists is None:
                logger.info(f"Day {day_id} already removed, nothing to do")
                return False

            removed = await db.execute(
                delete(Activity).where(Activity.day_id == day_id), execution_options=NO_SYNC
            )
            await db.execute(delete(Day).where(Day.id == day_id), execution_options=NO_SYNC)

        logger.info(f"Day {day_id} removed with {removed.rowcount} activities")
        return True

    # -- activities ---------------------------------------------------------

    async def add_activity(self, db: AsyncSession, trip_id: int, activity_data: ActivityCreate) -> Activity:
        await self._require_day(db, trip_id, activity_data.day_id)

        location = (activity_data.location or "").strip()
        preview = await self._lookup_preview(location, None) if location else None

        activity = Activity(
            day_id=activity_data.day_id,
            name=activity_data.name,
            type=activity_data.type,
            icon=activity_data.icon,
            position=activity_data.position,
            activity_date=activity_data.activity_date,
            location=location or None,
            category=activity_data.category,
            note=activity_data.note,
        )
        activity.preview = preview

        async with write_transaction(db, f"add activity to day {activity_data.day_id}"):
            # The day may have been removed while the lookup was in flight
            await self._require_day(db, trip_id, activity_data.day_id)
            db.add(activity)
            await db.flush()

        logger.info(f"Activity {activity.id} '{activity.name}' added to day {activity.day_id}")
        return activity

    async def update_activity(self, db: AsyncSession, trip_id: int, activity_update: ActivityUpdate) -> Optional[Activity]:
        """Apply a partial update. Returns None when the activity no longer exists."""
        activity = await self._get_activity(db, trip_id, activity_update.id)
        if activity is None:
            logger.info(f"Activity {activity_update.id} not found, skipping update")
            return None

        update_data = activity_update.model_dump(exclude_unset=True, exclude={"id"})
        if update_data.get("name") is None:
            update_data.pop("name", None)

        if "location" in update_data:
            location = (update_data["location"] or "").strip()
            update_data["location"] = location or None
            if location:
                # Keep the cached preview if the lookup service is down
                activity.preview = await self._lookup_preview(location, activity.preview)
            else:
                activity.preview = None

        try:
            async with write_transaction(db, f"update activity {activity.id}"):
                for field, value in update_data.items():
                    setattr(activity, field, value)
        except StaleDataError:
            logger.info(f"Activity {activity_update.id} was removed during the update")
            return None

        logger.info(f"Activity {activity.id} updated: {sorted(update_data)}")
        return activity

    async def remove_activity(self, db: AsyncSession, trip_id: int, activity_id: int) -> bool:
        async with write_transaction(db, f"remove activity {activity_id}"):
            owned = select(Day.id).where(Day.trip_id == trip_id)
            result = await db.execute(
                delete(Activity).where(Activity.id == activity_id, Activity.day_id.in_(owned)),
                execution_options=NO_SYNC,
            )

        if not result.rowcount:
            logger.info(f"Activity {activity_id} already removed, nothing to do")
            return False
        logger.info(f"Activity {activity_id} removed")
        return True

    async def clear_all(self, db: AsyncSession, trip_id: int) -> None:
        """Remove every day and activity of the trip. The trip itself stays."""
        async with write_transaction(db, f"clear trip {trip_id}"):
            day_ids = select(Day.id).where(Day.trip_id == trip_id)
            activities = await db.execute(
                delete(Activity).where(Activity.day_id.in_(day_ids)), execution_options=NO_SYNC
            )
            days = await db.execute(delete(Day).where(Day.trip_id == trip_id), execution_options=NO_SYNC)

        logger.info(
            f"Trip {trip_id} cleared: {days.rowcount} days, {activities.rowcount} activities"
        )

    # -- reads --------------------------------------------------------------

    async def get_full_itinerary(self, db: AsyncSession, trip_id: int) -> Dict[str, Any]:
        trip = await db.get(Trip, trip_id)
        if not trip:
            raise NotFoundError(f"Trip {trip_id} not found")

        days = (
            await db.execute(
                select(Day).where(Day.trip_id == trip_id).order_by(Day.day_number, Day.id)
            )
        ).scalars().all()

        activities_by_day: Dict[int, List[Activity]] = {day.id: [] for day in days}
        if days:
            activities = (
                await db.execute(
                    select(Activity)
                    .where(Activity.day_id.in_(list(activities_by_day)))
                    .order_by(Activity.position.is_(None), Activity.position, Activity.id)
                )
            ).scalars().all()
            for activity in activities:
                activities_by_day[activity.day_id].append(activity)

        return {
            "tripInfo": trip.to_dict(),
            "itinerary": [day.to_dict(activities=activities_by_day[day.id]) for day in days],
        }

    async def get_summary(self, db: AsyncSession, trip_id: int) -> Dict[str, int]:
        await self._require_trip(db, trip_id)

        total_days = await db.scalar(select(func.count(Day.id)).where(Day.trip_id == trip_id))
        row = (
            await db.execute(
                select(
                    func.count(Activity.id),
                    func.sum(case((Activity.type == "beach", 1), else_=0)),
                    func.sum(case((Activity.type == "restaurant", 1), else_=0)),
                )
                .select_from(Activity)
                .join(Day, Activity.day_id == Day.id)
                .where(Day.trip_id == trip_id)
            )
        ).one()

        return {
            "total_days": total_days or 0,
            "total_activities": row[0] or 0,
            "beach_count": row[1] or 0,
            "restaurant_count": row[2] or 0,
        }
