"""
Organization Service

Root of the hierarchy: listing, lookup, create/update, quota checks and
cascade-blocked deletion.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, func, select
from typing import Any, Dict, List, Mapping, Optional
import logging

from org_hierarchy.exceptions import ConflictError, NotFoundError, QuotaExceededError, ValidationError
from org_hierarchy.models.brand import Brand
from org_hierarchy.models.business import Business
from org_hierarchy.models.franchise import Franchise
from org_hierarchy.models.organization import Organization
from org_hierarchy.schemas.organization import OrganizationDocument
from org_hierarchy.schemas.usage import UsageResponse
from org_hierarchy.services import quota
from org_hierarchy.services.counts import count_active, count_active_by_parent
from org_hierarchy.services.documents import apply_document, camelize_keys, merge_present, to_document
from org_hierarchy.services.store import commit, new_id, utcnow
from org_hierarchy.services.validation import validate_organization

logger = logging.getLogger(__name__)

COUNTED_LIMITS = ("brands", "businesses")


class OrganizationService:
    """Service class for organization operations."""

    def __init__(self, db: AsyncSession, enforce_limits: bool = False):
        self.db = db
        self.enforce_limits = enforce_limits

    async def list_organizations(
        self,
        is_active: Optional[bool] = None,
        limit: Optional[int] = 50,
        offset: int = 0,
    ) -> List[Organization]:
        """Organizations, newest first."""
        query = select(Organization)
        if is_active is not None:
            query = query.where(Organization.is_active == is_active)
        query = query.order_by(Organization.created_at.desc(), Organization.id).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_organization(self, organization_id: str) -> Organization:
        """Fetch by id regardless of isActive."""
        result = await self.db.execute(
            select(Organization).where(Organization.id == organization_id)
        )
        organization = result.scalar_one_or_none()
        if not organization:
            raise NotFoundError("Organization", organization_id)
        return organization

    async def get_active_organization(self, organization_id: str) -> Organization:
        """Fetch a parent for a child write; soft-deleted organizations do not resolve."""
        organization = await self.get_organization(organization_id)
        if not organization.is_active:
            raise NotFoundError("Organization", organization_id)
        return organization

    async def create_organization(self, payload: Mapping[str, Any], actor: Optional[str] = None) -> Organization:
        result = validate_organization(payload)
        if not result.ok:
            raise ValidationError(result.message, errors=result.errors)

        await self._ensure_domain_available(result.value.domain)

        now = utcnow()
        organization = Organization(id=new_id(), created_at=now, updated_at=now)
        apply_document(organization, result.value)
        self.db.add(organization)
        await commit(self.db, "create organization")
        await self.db.refresh(organization)

        logger.info(f"Created organization: {organization.id} ({organization.name}) by {actor or 'anonymous'}")
        return organization

    async def update_organization(
        self, organization_id: str, partial: Mapping[str, Any], actor: Optional[str] = None
    ) -> Organization:
        """Merge ``partial`` into the stored document; absent keys are left untouched."""
        organization = await self.get_organization(organization_id)

        current = to_document(OrganizationDocument.model_validate(organization))
        result = validate_organization(merge_present(current, camelize_keys(partial)))
        if not result.ok:
            raise ValidationError(result.message, errors=result.errors)

        if result.value.domain != organization.domain:
            await self._ensure_domain_available(result.value.domain, exclude_id=organization.id)

        apply_document(organization, result.value)
        organization.updated_at = utcnow()
        await commit(self.db, "update organization")
        await self.db.refresh(organization)

        logger.info(f"Updated organization: {organization.id} by {actor or 'anonymous'}")
        return organization

    async def delete_organization(self, organization_id: str, actor: Optional[str] = None) -> None:
        """
        Hard delete. Blocked while active brands, businesses or franchises exist;
        soft-deleted descendants are removed with the organization.
        """
        organization = await self.get_organization(organization_id)

        counts = await self.child_counts(organization.id)
        if counts["brands"] or counts["businesses"]:
            raise ConflictError(
                f"Organization has {counts['brands']} active brands and "
                f"{counts['businesses']} active businesses"
            )

        business_ids = select(Business.id).where(Business.organization_id == organization.id)
        # Soft-deleted businesses may still hold active franchises
        franchises = await self._active_franchise_count(business_ids)
        if franchises:
            raise ConflictError(f"Organization has {franchises} active franchises")

        await self.db.execute(delete(Franchise).where(Franchise.business_id.in_(business_ids)))
        await self.db.execute(delete(Business).where(Business.organization_id == organization.id))
        await self.db.execute(delete(Brand).where(Brand.organization_id == organization.id))
        await self.db.delete(organization)
        await commit(self.db, "delete organization")

        logger.info(f"Deleted organization: {organization_id} by {actor or 'anonymous'}")

    async def child_counts(self, organization_id: str) -> Dict[str, int]:
        return {
            "brands": await count_active(self.db, Brand, Brand.organization_id, organization_id),
            "businesses": await count_active(self.db, Business, Business.organization_id, organization_id),
        }

    async def _active_franchise_count(self, business_ids) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Franchise)
            .where(Franchise.business_id.in_(business_ids), Franchise.is_active == True)  # noqa: E712
        )
        return result.scalar() or 0

    async def child_counts_for(self, organization_ids: List[str]) -> Dict[str, Dict[str, int]]:
        """Active brand/business counts for a page of organizations, two queries total."""
        brands = await count_active_by_parent(self.db, Brand, Brand.organization_id, organization_ids)
        businesses = await count_active_by_parent(self.db, Business, Business.organization_id, organization_ids)
        return {
            org_id: {"brands": brands.get(org_id, 0), "businesses": businesses.get(org_id, 0)}
            for org_id in organization_ids
        }

    async def check_limit(self, organization: Organization, limit_type: str) -> bool:
        """
        True if one more ``limit_type`` child fits under the organization's limits.

        Only brands and businesses are counted here; other limit types pass.
        """
        if limit_type not in COUNTED_LIMITS:
            return True
        counts = await self.child_counts(organization.id)
        return quota.check_limit(organization.limits, limit_type, counts[limit_type])

    async def ensure_within_limit(self, organization: Organization, limit_type: str) -> None:
        if self.enforce_limits and not await self.check_limit(organization, limit_type):
            raise QuotaExceededError("Organization", limit_type, (organization.limits or {}).get(limit_type))

    async def usage(self, organization: Organization) -> UsageResponse:
        counts = await self.child_counts(organization.id)
        limits = organization.limits or {}
        return UsageResponse(
            entity_id=organization.id,
            limits=dict(limits),
            usage=counts,
            within_limits={
                limit_type: quota.check_limit(limits, limit_type, counts[limit_type])
                for limit_type in COUNTED_LIMITS
            },
        )

    async def _ensure_domain_available(self, domain: Optional[str], exclude_id: Optional[str] = None) -> None:
        if not domain:
            return
        query = select(Organization.id).where(Organization.domain == domain)
        if exclude_id:
            query = query.where(Organization.id != exclude_id)
        result = await self.db.execute(query)
        if result.first() is not None:
            raise ConflictError(f"Domain {domain} is already in use")
