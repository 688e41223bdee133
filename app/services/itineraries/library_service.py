from typing import List
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.logger import logger
from app.models.itinerary.library_activity import LibraryActivity
from app.schemas.itineraries.library import LibraryActivityCreate
from app.utils.db import NO_SYNC, write_transaction


class LibraryService:
    """CRUD for the reusable activity palette. Not tied to any trip or day."""

    async def list_activities(self, db: AsyncSession) -> List[LibraryActivity]:
        result = await db.execute(select(LibraryActivity).order_by(LibraryActivity.id))
        return list(result.scalars().all())

    async def add_activity(self, db: AsyncSession, data: LibraryActivityCreate) -> LibraryActivity:
        item = LibraryActivity(**data.model_dump())
        async with write_transaction(db, "add library activity"):
            db.add(item)
            await db.flush()
        logger.info(f"Library activity {item.id} '{item.name}' added")
        return item

    async def remove_activity(self, db: AsyncSession, item_id: int) -> bool:
        async with write_transaction(db, f"remove library activity {item_id}"):
            result = await db.execute(
                delete(LibraryActivity).where(LibraryActivity.id == item_id), execution_options=NO_SYNC
            )
        logger.info(f"Library activity {item_id} removed (existed={bool(result.rowcount)})")
        return bool(result.rowcount)

    async def replace_all(self, db: AsyncSession, items: List[LibraryActivityCreate]) -> List[LibraryActivity]:
        """Swap the whole palette for `items` in one transaction."""
        async with write_transaction(db, "load library activities"):
            await db.execute(delete(LibraryActivity), execution_options=NO_SYNC)
            created = [LibraryActivity(**item.model_dump()) for item in items]
            db.add_all(created)
            await db.flush()
        logger.info(f"Library replaced with {len(created)} activities")
        return created
