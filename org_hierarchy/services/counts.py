"""Derived child counts, computed at query time over active rows only."""

from typing import Dict, Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession


async def count_active(db: AsyncSession, model, parent_column, parent_id: str) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(model)
        .where(parent_column == parent_id, model.is_active == True)  # noqa: E712
    )
    return result.scalar() or 0


async def count_active_by_parent(
    db: AsyncSession, model, parent_column, parent_ids: Iterable[str]
) -> Dict[str, int]:
    """Active child count per parent id in one grouped query; parents without children map to 0."""
    ids = list(parent_ids)
    if not ids:
        return {}
    result = await db.execute(
        select(parent_column, func.count())
        .where(parent_column.in_(ids), model.is_active == True)  # noqa: E712
        .group_by(parent_column)
    )
    counts = {parent_id: 0 for parent_id in ids}
    counts.update({parent_id: count for parent_id, count in result.all()})
    return counts
