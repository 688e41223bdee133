from typing import Optional
from pydantic import field_validator
from app.schemas.base import CamelModel


class LibraryActivityCreate(CamelModel):
    name: str
    type: Optional[str] = None
    icon: Optional[str] = None
    category: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Library activity name is required")
        return value


class LibraryActivityResponse(LibraryActivityCreate):
    id: int
