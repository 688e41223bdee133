from typing import Optional
from pydantic import BaseModel


class TripInfoUpdate(BaseModel):
    title: Optional[str] = None
    dates: Optional[str] = None
    islands: Optional[str] = None


class TripInfoResponse(BaseModel):
    title: str
    dates: Optional[str] = None
    islands: Optional[str] = None

    class Config:
        from_attributes = True
