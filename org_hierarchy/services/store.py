"""Write helpers shared by the entity services."""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from org_hierarchy.exceptions import StoreError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


async def commit(db: AsyncSession, action: str) -> None:
    """Commit the session; on failure roll back and raise StoreError."""
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to {action}: {type(e).__name__}: {e}")
        raise StoreError(action) from e
