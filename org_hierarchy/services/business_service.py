"""
Business Service

A business always belongs to one organization and to at most one brand of
that same organization. Its subscription carries the plan limits checked
before franchises (and staff, tracked elsewhere) are added.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, select
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional
import logging

from org_hierarchy.exceptions import ConflictError, NotFoundError, QuotaExceededError, ValidationError
from org_hierarchy.models.business import Business
from org_hierarchy.models.franchise import Franchise
from org_hierarchy.schemas.business import BusinessDocument
from org_hierarchy.schemas.usage import UsageResponse
from org_hierarchy.services import quota
from org_hierarchy.services.brand_service import BrandService
from org_hierarchy.services.counts import count_active, count_active_by_parent
from org_hierarchy.services.documents import apply_document, camelize_keys, merge_present, to_document
from org_hierarchy.services.organization_service import OrganizationService
from org_hierarchy.services.store import commit, new_id, utcnow
from org_hierarchy.services.validation import validate_business

logger = logging.getLogger(__name__)

# Active staff count for a business id
StaffCounter = Callable[[str], Awaitable[int]]

COUNTED_LIMITS = ("franchises", "staff")


async def no_staff(business_id: str) -> int:
    """Default staff counter: staff records are not kept by this service."""
    return 0


class BusinessService:
    """Service class for business operations."""

    def __init__(
        self,
        db: AsyncSession,
        enforce_limits: bool = False,
        staff_counter: Optional[StaffCounter] = None,
    ):
        self.db = db
        self.enforce_limits = enforce_limits
        self.staff_counter = staff_counter or no_staff
        self.organizations = OrganizationService(db, enforce_limits=enforce_limits)
        self.brands = BrandService(db, enforce_limits=enforce_limits)

    async def list_by_organization(
        self,
        organization_id: str,
        brand_id: Optional[str] = None,
        is_active: Optional[bool] = None,
        limit: Optional[int] = 50,
        offset: int = 0,
    ) -> List[Business]:
        """
        Businesses of an organization, newest first.

        Filtering by brand excludes unbranded businesses.
        """
        query = select(Business).where(Business.organization_id == organization_id)
        if brand_id:
            query = query.where(Business.brand_id == brand_id)
        if is_active is not None:
            query = query.where(Business.is_active == is_active)
        query = query.order_by(Business.created_at.desc(), Business.id).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_business(self, business_id: str) -> Business:
        result = await self.db.execute(select(Business).where(Business.id == business_id))
        business = result.scalar_one_or_none()
        if not business:
            raise NotFoundError("Business", business_id)
        return business

    async def get_active_business(self, business_id: str) -> Business:
        business = await self.get_business(business_id)
        if not business.is_active:
            raise NotFoundError("Business", business_id)
        return business

    async def create_business(self, payload: Mapping[str, Any], actor: Optional[str] = None) -> Business:
        result = validate_business(payload)
        if not result.ok:
            raise ValidationError(result.message, errors=result.errors)
        document = result.value

        organization = await self.organizations.get_active_organization(document.organization_id)
        brand = await self._resolve_brand(document.brand_id, organization.id)

        await self.organizations.ensure_within_limit(organization, "businesses")
        if brand is not None:
            await self.brands.ensure_within_limit(brand, "businesses")

        now = utcnow()
        business = Business(id=new_id(), created_at=now, updated_at=now)
        apply_document(business, document)
        self.db.add(business)
        await commit(self.db, "create business")
        await self.db.refresh(business)

        logger.info(
            f"Created business: {business.id} ({business.name}, {business.industry}) "
            f"in organization {business.organization_id} by {actor or 'anonymous'}"
        )
        return business

    async def update_business(
        self, business_id: str, partial: Mapping[str, Any], actor: Optional[str] = None
    ) -> Business:
        business = await self.get_business(business_id)

        current = to_document(BusinessDocument.model_validate(business))
        result = validate_business(merge_present(current, camelize_keys(partial)))
        if not result.ok:
            raise ValidationError(result.message, errors=result.errors)
        document = result.value

        moved_org = document.organization_id != business.organization_id
        moved_brand = document.brand_id != business.brand_id
        if moved_org or moved_brand:
            organization = await self.organizations.get_active_organization(document.organization_id)
            brand = await self._resolve_brand(document.brand_id, organization.id)
            if moved_org:
                await self.organizations.ensure_within_limit(organization, "businesses")
            if moved_brand and brand is not None:
                await self.brands.ensure_within_limit(brand, "businesses")

        apply_document(business, document)
        business.updated_at = utcnow()
        await commit(self.db, "update business")
        await self.db.refresh(business)

        logger.info(f"Updated business: {business.id} by {actor or 'anonymous'}")
        return business

    async def delete_business(self, business_id: str, actor: Optional[str] = None) -> None:
        """Hard delete. Blocked while active franchises exist; inactive ones go with it."""
        business = await self.get_business(business_id)

        active = await self.franchise_count(business.id)
        if active:
            raise ConflictError(f"Business has {active} active franchises")

        await self.db.execute(delete(Franchise).where(Franchise.business_id == business.id))
        await self.db.delete(business)
        await commit(self.db, "delete business")

        logger.info(f"Deleted business: {business_id} by {actor or 'anonymous'}")

    async def brand_names(self, businesses: List[Business]) -> Dict[str, str]:
        return await self.brands.names_for(b.brand_id for b in businesses)

    async def franchise_count(self, business_id: str) -> int:
        return await count_active(self.db, Franchise, Franchise.business_id, business_id)

    async def franchise_counts_for(self, business_ids: List[str]) -> Dict[str, int]:
        return await count_active_by_parent(self.db, Franchise, Franchise.business_id, business_ids)

    async def child_counts(self, business: Business) -> Dict[str, int]:
        return {
            "franchises": await self.franchise_count(business.id),
            "staff": await self.staff_counter(business.id),
        }

    async def check_limit(self, business: Business, limit_type: str) -> bool:
        """
        True if one more ``limit_type`` fits under the subscription limits.

        Franchises and staff are counted; other limit types pass.
        """
        if limit_type not in COUNTED_LIMITS:
            return True
        counts = await self.child_counts(business)
        return quota.check_limit(_limits(business), limit_type, counts[limit_type])

    async def ensure_within_limit(self, business: Business, limit_type: str) -> None:
        if self.enforce_limits and not await self.check_limit(business, limit_type):
            raise QuotaExceededError("Business", limit_type, _limits(business).get(limit_type))

    async def usage(self, business: Business) -> UsageResponse:
        limits = _limits(business)
        counts = await self.child_counts(business)
        return UsageResponse(
            entity_id=business.id,
            limits=dict(limits),
            usage=counts,
            within_limits={
                limit_type: quota.check_limit(limits, limit_type, counts[limit_type])
                for limit_type in COUNTED_LIMITS
            },
        )

    async def _resolve_brand(self, brand_id: Optional[str], organization_id: str):
        if not brand_id:
            return None
        brand = await self.brands.get_brand(brand_id)
        if not brand.is_active:
            raise NotFoundError("Brand", brand_id)
        if brand.organization_id != organization_id:
            raise ValidationError("brandId must reference a brand of the same organization")
        return brand


def _limits(business: Business) -> Dict[str, Optional[int]]:
    return (business.subscription or {}).get("limits") or {}
