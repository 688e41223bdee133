from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from app.core.exceptions import PlaceLookupError
from app.core.logger import logger
from app.dependencies.trip import get_place_lookup
from app.schemas.places.place import LocationSuggestion, PlaceDetailsResponse
from app.services.places.place_lookup import PlaceLookupService


router = APIRouter(tags=["places"])


@router.get("/search-locations", response_model=List[LocationSuggestion])
async def search_locations(
    query: str = Query("", description="Free text typed by the user"),
    place_lookup: PlaceLookupService = Depends(get_place_lookup)
):
    return await place_lookup.search_locations(query)


@router.get("/place-details", response_model=PlaceDetailsResponse)
async def place_details(
    place_id: Optional[str] = None,
    location: Optional[str] = None,
    place_lookup: PlaceLookupService = Depends(get_place_lookup)
):
    if not (place_id or location):
        raise HTTPException(status_code=422, detail="Provide place_id or location")

    try:
        if place_id:
            details = await place_lookup.details(place_id)
        else:
            details = await place_lookup.lookup(location)
    except PlaceLookupError as e:
        logger.warning(f"⚠️ Place details failed for {place_id or location}: {e}")
        return PlaceDetailsResponse(success=False, placeDetails=None)

    return PlaceDetailsResponse(success=details is not None, placeDetails=details)
