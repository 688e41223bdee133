from typing import Any, Optional
from pydantic import BaseModel
from app.schemas.base import CamelModel


class DayRef(CamelModel):
    day_id: int


class ItemRef(CamelModel):
    id: int


class OperationFailed(BaseModel):
    """Sent only to the client whose request failed."""

    event: str
    code: str
    message: str
    detail: Optional[Any] = None
