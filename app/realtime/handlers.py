import functools
from typing import Any, Callable, Dict, Optional, Type
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.exceptions import PayloadValidationError, PersistenceError, TripSyncError
from app.core.logger import logger
from app.realtime.hub import BroadcastHub
from app.schemas.events import DayRef, ItemRef, OperationFailed
from app.schemas.itineraries.activity import ActivityCreate, ActivityUpdate
from app.schemas.itineraries.library import LibraryActivityCreate
from app.schemas.trip.trip_schema import TripInfoUpdate
from app.services.itineraries.itinerary_service import ItineraryService
from app.services.itineraries.library_service import LibraryService
from app.services.places.place_lookup import PlaceLookupService
from app.services.trips.trip_service import TripService

# Client -> server event name -> handler method
CLIENT_EVENTS: Dict[str, str] = {}


def client_event(event: str):
    """Register a handler for a client event and report its failures to the sender."""

    def decorator(func: Callable):
        CLIENT_EVENTS[event] = func.__name__

        @functools.wraps(func)
        async def wrapper(self: "SyncHandlers", sid: str, data: Any = None):
            try:
                await func(self, sid, data)
            except ValidationError as e:
                error = PayloadValidationError(
                    "Invalid payload",
                    detail=e.errors(include_url=False, include_context=False, include_input=False),
                )
                await self._report_failure(sid, event, error)
            except TripSyncError as e:
                await self._report_failure(sid, event, e)
            except SQLAlchemyError as e:
                logger.error(f"🔥 Database error in '{event}' from {sid}: {e}")
                await self._report_failure(sid, event, PersistenceError("Could not reach the trip database"))
            except Exception:
                logger.exception(f"🔥 Unhandled error in '{event}' from {sid}")
                await self._report_failure(sid, event, TripSyncError("Something went wrong"))

        return wrapper

    return decorator


def parse_ref(model: Type[BaseModel], data: Any, key: str):
    """Accept either a bare id or an object carrying it."""
    if isinstance(data, dict):
        return model.model_validate(data)
    return model.model_validate({key: data})


class SyncHandlers:
    def __init__(
        self,
        hub: BroadcastHub,
        session_factory: Callable[[], AsyncSession],
        place_lookup: Optional[PlaceLookupService] = None,
        trip_id: Optional[int] = None,
    ):
        self.hub = hub
        self.session_factory = session_factory
        self.trip_id = trip_id if trip_id is not None else settings.DEFAULT_TRIP_ID
        self.trip_service = TripService()
        self.itinerary_service = ItineraryService(place_lookup)
        self.library_service = LibraryService()

    def use_place_lookup(self, place_lookup: Optional[PlaceLookupService]):
        self.itinerary_service.place_lookup = place_lookup

    def register(self, sio):
        sio.on("connect", self.connect)
        sio.on("disconnect", self.disconnect)
        for event, method in CLIENT_EVENTS.items():
            sio.on(event, getattr(self, method))

    async def _report_failure(self, sid: str, event: str, error: TripSyncError):
        logger.warning(f"'{event}' from {sid} failed: [{error.code}] {error.message}")
        payload = OperationFailed(event=event, **error.to_dict())
        await self.hub.send(sid, "operation-failed", payload.model_dump(exclude_none=True))

    # -- connection lifecycle -------------------------------------------------

    async def connect(self, sid: str, environ: dict, auth: Any = None):
        self.hub.register(sid)
        # The client pulls full state over HTTP once it sees this
        await self.hub.send(sid, "load-itinerary", {"tripId": self.trip_id})

    async def disconnect(self, sid: str, reason: Any = None):
        self.hub.unregister(sid)

    # -- trip ---------------------------------------------------------------

    @client_event("update-trip-info")
    async def update_trip_info(self, sid: str, data: Any = None):
        trip_update = TripInfoUpdate.model_validate(data)
        async with self.session_factory() as db:
            trip = await self.trip_service.update_trip_info(db, self.trip_id, trip_update)
        # The sender already shows what it typed
        await self.hub.broadcast("trip-info-updated", trip.to_dict(), exclude=sid)

    # -- days ---------------------------------------------------------------

    @client_event("add-day")
    async def add_day(self, sid: str, data: Any = None):
        async with self.session_factory() as db:
            day = await self.itinerary_service.add_day(db, self.trip_id)
        await self.hub.broadcast("day-added", day.to_dict())

    @client_event("remove-day")
    async def remove_day(self, sid: str, data: Any = None):
        ref = parse_ref(DayRef, data, "dayId")
        async with self.session_factory() as db:
            await self.itinerary_service.remove_day(db, self.trip_id, ref.day_id)
        # Sent even when the day was already gone so every client converges
        await self.hub.broadcast("day-removed", ref.day_id)

    # -- activities -----------------------------------------------------------

    @client_event("add-activity")
    async def add_activity(self, sid: str, data: Any = None):
        activity_data = ActivityCreate.model_validate(data)
        async with self.session_factory() as db:
            activity = await self.itinerary_service.add_activity(db, self.trip_id, activity_data)
        await self.hub.broadcast("activity-added", activity.to_dict())

    @client_event("update-activity")
    async def update_activity(self, sid: str, data: Any = None):
        activity_update = ActivityUpdate.model_validate(data)
        async with self.session_factory() as db:
            activity = await self.itinerary_service.update_activity(db, self.trip_id, activity_update)
        if activity is None:
            return
        await self.hub.broadcast("activity-updated", activity.to_dict())

    @client_event("remove-activity")
    async def remove_activity(self, sid: str, data: Any = None):
        ref = parse_ref(ItemRef, data, "id")
        async with self.session_factory() as db:
            await self.itinerary_service.remove_activity(db, self.trip_id, ref.id)
        await self.hub.broadcast("activity-removed", ref.id)

    @client_event("clear-all")
    async def clear_all(self, sid: str, data: Any = None):
        async with self.session_factory() as db:
            await self.itinerary_service.clear_all(db, self.trip_id)
        await self.hub.broadcast("all-cleared")

    # -- library --------------------------------------------------------------

    @client_event("add-library-activity")
    async def add_library_activity(self, sid: str, data: Any = None):
        item_data = LibraryActivityCreate.model_validate(data)
        async with self.session_factory() as db:
            item = await self.library_service.add_activity(db, item_data)
        await self.hub.broadcast("library-activity-added", item.to_dict())

    @client_event("remove-library-activity")
    async def remove_library_activity(self, sid: str, data: Any = None):
        ref = parse_ref(ItemRef, data, "id")
        async with self.session_factory() as db:
            await self.library_service.remove_activity(db, ref.id)
        await self.hub.broadcast("library-activity-removed", ref.id)

    @client_event("load-library-activities")
    async def load_library_activities(self, sid: str, data: Any = None):
        async with self.session_factory() as db:
            if data is None:
                items = await self.library_service.list_activities(db)
            else:
                if not isinstance(data, list):
                    raise PayloadValidationError("Expected a list of library activities")
                templates = [LibraryActivityCreate.model_validate(item) for item in data]
                items = await self.library_service.replace_all(db, templates)
        await self.hub.broadcast("library-activities-loaded", [item.to_dict() for item in items])
