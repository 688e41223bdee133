from typing import List
from pydantic import BaseModel
from app.schemas.base import CamelModel
from app.schemas.itineraries.activity import ActivityResponse
from app.schemas.trip.trip_schema import TripInfoResponse


class DayResponse(CamelModel):
    id: int
    day_number: int
    activities: List[ActivityResponse] = []


class ItineraryResponse(CamelModel):
    trip_info: TripInfoResponse
    itinerary: List[DayResponse] = []


class SummaryResponse(BaseModel):
    total_days: int
    total_activities: int
    beach_count: int
    restaurant_count: int
