from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError
from app.core.exceptions import PersistenceError
from app.core.logger import logger

# Bulk deletes skip ORM session syncing; each handler works in a fresh session
NO_SYNC = {"synchronize_session": False}


@asynccontextmanager
async def write_transaction(db: AsyncSession, action: str):
    """Commit everything done in the block as one unit, or roll it all back.

    StaleDataError is re-raised as is so callers can treat rows deleted by
    another client as a no-op.
    """
    try:
        yield
        await db.commit()
    except StaleDataError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"🔥 Database error while trying to {action}: {e}")
        raise PersistenceError(f"Could not {action}") from e
