"""
Franchise Service

Physical locations of a business. Every franchise carries a full street
address with coordinates and its own weekly operating hours.
"""

from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Any, Iterable, List, Mapping, Optional
import logging

from org_hierarchy.exceptions import NotFoundError, ValidationError
from org_hierarchy.models.franchise import Franchise
from org_hierarchy.schemas.franchise import FranchiseDocument, OpenStatusResponse
from org_hierarchy.services.business_service import BusinessService
from org_hierarchy.services.documents import apply_document, camelize_keys, merge_present, to_document
from org_hierarchy.services.schedule import franchise_timezone, is_open, local_time
from org_hierarchy.services.store import commit, new_id, utcnow
from org_hierarchy.services.validation import validate_franchise

logger = logging.getLogger(__name__)


class FranchiseService:
    """Service class for franchise operations."""

    def __init__(self, db: AsyncSession, enforce_limits: bool = False):
        self.db = db
        self.enforce_limits = enforce_limits
        self.businesses = BusinessService(db, enforce_limits=enforce_limits)

    async def list_by_business(
        self,
        business_id: str,
        is_active: Optional[bool] = None,
        limit: Optional[int] = 50,
        offset: int = 0,
    ) -> List[Franchise]:
        """Franchises of a business, name ascending."""
        query = select(Franchise).where(Franchise.business_id == business_id)
        if is_active is not None:
            query = query.where(Franchise.is_active == is_active)
        query = query.order_by(Franchise.name, Franchise.id).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_active_for_businesses(self, business_ids: Iterable[str]) -> List[Franchise]:
        ids = list(business_ids)
        if not ids:
            return []
        result = await self.db.execute(
            select(Franchise)
            .where(Franchise.business_id.in_(ids), Franchise.is_active == True)  # noqa: E712
            .order_by(Franchise.name, Franchise.id)
        )
        return list(result.scalars().all())

    async def get_franchise(self, franchise_id: str) -> Franchise:
        result = await self.db.execute(select(Franchise).where(Franchise.id == franchise_id))
        franchise = result.scalar_one_or_none()
        if not franchise:
            raise NotFoundError("Franchise", franchise_id)
        return franchise

    async def create_franchise(self, payload: Mapping[str, Any], actor: Optional[str] = None) -> Franchise:
        result = validate_franchise(payload)
        if not result.ok:
            raise ValidationError(result.message, errors=result.errors)

        business = await self.businesses.get_active_business(result.value.business_id)
        await self.businesses.ensure_within_limit(business, "franchises")

        now = utcnow()
        franchise = Franchise(id=new_id(), created_at=now, updated_at=now)
        apply_document(franchise, result.value)
        self.db.add(franchise)
        await commit(self.db, "create franchise")
        await self.db.refresh(franchise)

        logger.info(
            f"Created franchise: {franchise.id} ({franchise.name}) "
            f"for business {franchise.business_id} by {actor or 'anonymous'}"
        )
        return franchise

    async def update_franchise(
        self, franchise_id: str, partial: Mapping[str, Any], actor: Optional[str] = None
    ) -> Franchise:
        franchise = await self.get_franchise(franchise_id)

        current = to_document(FranchiseDocument.model_validate(franchise))
        result = validate_franchise(merge_present(current, camelize_keys(partial)))
        if not result.ok:
            raise ValidationError(result.message, errors=result.errors)

        if result.value.business_id != franchise.business_id:
            business = await self.businesses.get_active_business(result.value.business_id)
            await self.businesses.ensure_within_limit(business, "franchises")

        apply_document(franchise, result.value)
        franchise.updated_at = utcnow()
        await commit(self.db, "update franchise")
        await self.db.refresh(franchise)

        logger.info(f"Updated franchise: {franchise.id} by {actor or 'anonymous'}")
        return franchise

    async def delete_franchise(self, franchise_id: str, actor: Optional[str] = None) -> None:
        franchise = await self.get_franchise(franchise_id)
        await self.db.delete(franchise)
        await commit(self.db, "delete franchise")
        logger.info(f"Deleted franchise: {franchise_id} by {actor or 'anonymous'}")

    def open_status(self, franchise: Franchise, at: Optional[datetime] = None) -> OpenStatusResponse:
        settings = franchise.settings or {}
        tz = franchise_timezone(settings)
        if at is None:
            at = datetime.now(tz)
        return OpenStatusResponse(
            franchise_id=franchise.id,
            at=local_time(settings, at),
            timezone=str(tz),
            is_open=is_open(franchise, at),
        )
