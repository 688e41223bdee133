from typing import Any, Dict, Optional
from pydantic import field_validator
from app.schemas.base import CamelModel


class ActivityBase(CamelModel):
    type: Optional[str] = None
    icon: Optional[str] = None
    position: Optional[int] = None
    activity_date: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    note: Optional[str] = None


class ActivityCreate(ActivityBase):
    day_id: int
    name: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Activity name is required")
        return value


class ActivityUpdate(ActivityBase):
    """Partial update: only the fields the client sent are applied."""

    id: int
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def blank_name_means_unchanged(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class ActivityResponse(ActivityBase):
    id: int
    day_id: int
    name: str
    location_preview: Optional[Dict[str, Any]] = None
