"""
Brand Service

Brands group businesses inside one organization. Creating a brand requires an
active parent organization (and a free brand slot when quotas are enforced).
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select, update
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from org_hierarchy.exceptions import ConflictError, NotFoundError, QuotaExceededError, ValidationError
from org_hierarchy.models.brand import Brand
from org_hierarchy.models.business import Business
from org_hierarchy.schemas.brand import BrandDocument
from org_hierarchy.schemas.usage import UsageResponse
from org_hierarchy.services import quota
from org_hierarchy.services.counts import count_active, count_active_by_parent
from org_hierarchy.services.documents import apply_document, camelize_keys, merge_present, to_document
from org_hierarchy.services.organization_service import OrganizationService
from org_hierarchy.services.store import commit, new_id, utcnow
from org_hierarchy.services.validation import validate_brand

logger = logging.getLogger(__name__)


class BrandService:
    """Service class for brand operations."""

    def __init__(self, db: AsyncSession, enforce_limits: bool = False):
        self.db = db
        self.enforce_limits = enforce_limits
        self.organizations = OrganizationService(db, enforce_limits=enforce_limits)

    async def list_by_organization(self, organization_id: str, active_only: bool = True) -> List[Brand]:
        """Brands of an organization, name ascending."""
        query = select(Brand).where(Brand.organization_id == organization_id)
        if active_only:
            query = query.where(Brand.is_active == True)  # noqa: E712
        result = await self.db.execute(query.order_by(Brand.name, Brand.id))
        return list(result.scalars().all())

    async def get_brand(self, brand_id: str) -> Brand:
        result = await self.db.execute(select(Brand).where(Brand.id == brand_id))
        brand = result.scalar_one_or_none()
        if not brand:
            raise NotFoundError("Brand", brand_id)
        return brand

    async def names_for(self, brand_ids: Iterable[str]) -> Dict[str, str]:
        """Resolve brand ids to names, inactive brands included."""
        ids = {brand_id for brand_id in brand_ids if brand_id}
        if not ids:
            return {}
        result = await self.db.execute(select(Brand.id, Brand.name).where(Brand.id.in_(ids)))
        return {brand_id: name for brand_id, name in result.all()}

    async def create_brand(self, payload: Mapping[str, Any], actor: Optional[str] = None) -> Brand:
        result = validate_brand(payload)
        if not result.ok:
            raise ValidationError(result.message, errors=result.errors)

        organization = await self.organizations.get_active_organization(result.value.organization_id)
        await self.organizations.ensure_within_limit(organization, "brands")

        now = utcnow()
        brand = Brand(id=new_id(), created_at=now, updated_at=now)
        apply_document(brand, result.value)
        self.db.add(brand)
        await commit(self.db, "create brand")
        await self.db.refresh(brand)

        logger.info(f"Created brand: {brand.id} ({brand.name}) in organization {brand.organization_id} by {actor or 'anonymous'}")
        return brand

    async def update_brand(self, brand_id: str, partial: Mapping[str, Any], actor: Optional[str] = None) -> Brand:
        brand = await self.get_brand(brand_id)

        current = to_document(BrandDocument.model_validate(brand))
        result = validate_brand(merge_present(current, camelize_keys(partial)))
        if not result.ok:
            raise ValidationError(result.message, errors=result.errors)

        if result.value.organization_id != brand.organization_id:
            # Businesses must stay in their brand's organization
            referencing = await self._referencing_business_count(brand.id)
            if referencing:
                raise ConflictError(
                    f"Brand is used by {referencing} businesses and cannot change organization"
                )
            organization = await self.organizations.get_active_organization(result.value.organization_id)
            await self.organizations.ensure_within_limit(organization, "brands")

        apply_document(brand, result.value)
        brand.updated_at = utcnow()
        await commit(self.db, "update brand")
        await self.db.refresh(brand)

        logger.info(f"Updated brand: {brand.id} by {actor or 'anonymous'}")
        return brand

    async def delete_brand(self, brand_id: str, actor: Optional[str] = None) -> None:
        """
        Hard delete. Blocked while active businesses use the brand; inactive
        ones stay with their organization and lose the brand reference.
        """
        brand = await self.get_brand(brand_id)

        active = await self.business_count(brand.id)
        if active:
            raise ConflictError(f"Brand has {active} active businesses")

        await self.db.execute(
            update(Business)
            .where(Business.brand_id == brand.id)
            .values(brand_id=None, updated_at=utcnow())
        )
        await self.db.delete(brand)
        await commit(self.db, "delete brand")

        logger.info(f"Deleted brand: {brand_id} by {actor or 'anonymous'}")

    async def business_count(self, brand_id: str) -> int:
        return await count_active(self.db, Business, Business.brand_id, brand_id)

    async def _referencing_business_count(self, brand_id: str) -> int:
        """Businesses pointing at the brand, inactive ones included."""
        result = await self.db.execute(
            select(func.count()).select_from(Business).where(Business.brand_id == brand_id)
        )
        return result.scalar() or 0

    async def business_counts_for(self, brand_ids: List[str]) -> Dict[str, int]:
        return await count_active_by_parent(self.db, Business, Business.brand_id, brand_ids)

    async def check_limit(self, brand: Brand, limit_type: str) -> bool:
        """True if one more business fits under the brand; other limit types pass."""
        if limit_type != "businesses":
            return True
        return quota.check_limit(brand.limits, limit_type, await self.business_count(brand.id))

    async def ensure_within_limit(self, brand: Brand, limit_type: str) -> None:
        if self.enforce_limits and not await self.check_limit(brand, limit_type):
            raise QuotaExceededError("Brand", limit_type, (brand.limits or {}).get(limit_type))

    async def usage(self, brand: Brand) -> UsageResponse:
        limits = brand.limits or {}
        businesses = await self.business_count(brand.id)
        return UsageResponse(
            entity_id=brand.id,
            limits=dict(limits),
            usage={"businesses": businesses},
            within_limits={"businesses": quota.check_limit(limits, "businesses", businesses)},
        )
