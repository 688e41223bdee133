from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class OpeningHours(BaseModel):
    open_now: Optional[bool] = None
    weekday_text: List[str] = Field(default_factory=list)


class PlaceDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    place_id: Optional[str] = None
    name: str = ""
    formatted_address: Optional[str] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    photos: List[str] = Field(default_factory=list)
    opening_hours: Optional[OpeningHours] = None
    website: Optional[str] = None
    google_maps_url: Optional[str] = None


class LocationSuggestion(BaseModel):
    place_id: Optional[str] = None
    name: str
    formatted: str = ""
    secondary: str = ""


class PlaceDetailsResponse(BaseModel):
    success: bool
    placeDetails: Optional[Dict[str, Any]] = None
