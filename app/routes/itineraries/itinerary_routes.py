from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.dependencies.trip import get_trip_id
from app.schemas.itineraries.itinerary import ItineraryResponse, SummaryResponse
from app.services.itineraries.itinerary_service import ItineraryService


router = APIRouter(tags=["itinerary"])


async def get_itinerary_service() -> ItineraryService:
    # Reads never touch the place lookup
    return ItineraryService()


# 🔹 Full state, pulled by clients after "load-itinerary"
@router.get("/itinerary", response_model=ItineraryResponse)
async def get_itinerary(
    trip_id: int = Depends(get_trip_id),
    db: AsyncSession = Depends(get_db),
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    return await itinerary_service.get_full_itinerary(db, trip_id)


# 🔹 Counts shown in the summary panel
@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    trip_id: int = Depends(get_trip_id),
    db: AsyncSession = Depends(get_db),
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    return await itinerary_service.get_summary(db, trip_id)
