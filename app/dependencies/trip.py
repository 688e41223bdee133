from typing import Optional
from fastapi import Depends, Query
from app.core.config import settings
from app.core.redis_lifecycle import get_cache
from app.services.places.place_lookup import PlaceLookupService, build_place_lookup


def get_trip_id(trip_id: Optional[int] = Query(None, description="Defaults to the shared trip")) -> int:
    return trip_id if trip_id is not None else settings.DEFAULT_TRIP_ID


async def get_place_lookup(cache=Depends(get_cache)) -> PlaceLookupService:
    return build_place_lookup(cache)
