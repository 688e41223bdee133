from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.schemas.itineraries.library import LibraryActivityResponse
from app.services.itineraries.library_service import LibraryService


router = APIRouter(prefix="/library-activities", tags=["library"])


@router.get("", response_model=List[LibraryActivityResponse])
async def list_library_activities(db: AsyncSession = Depends(get_db)):
    return await LibraryService().list_activities(db)
