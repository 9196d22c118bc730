"""
Hierarchy Service

Assembles the active subtree of one organization in four reads:
organization, active brands, active businesses (with brand names), then the
active franchises of exactly those businesses.

Businesses and franchises are returned unpaginated; a warning is
logged once the subtree passes ``warn_threshold`` nodes. The reads are not
wrapped in a transaction, so concurrent writes may show up in some lists and
not others.
"""

from dataclasses import dataclass, field
from typing import Dict, List
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from org_hierarchy.models.brand import Brand
from org_hierarchy.models.business import Business
from org_hierarchy.models.franchise import Franchise
from org_hierarchy.models.organization import Organization
from org_hierarchy.schemas.brand import BrandResponse
from org_hierarchy.schemas.business import BusinessResponse
from org_hierarchy.schemas.franchise import FranchiseResponse
from org_hierarchy.schemas.hierarchy import HierarchyResponse
from org_hierarchy.schemas.organization import OrganizationResponse
from org_hierarchy.services.brand_service import BrandService
from org_hierarchy.services.business_service import BusinessService
from org_hierarchy.services.franchise_service import FranchiseService
from org_hierarchy.services.organization_service import OrganizationService

logger = logging.getLogger(__name__)


@dataclass
class Hierarchy:
    organization: Organization
    brands: List[Brand] = field(default_factory=list)
    businesses: List[Business] = field(default_factory=list)
    franchises: List[Franchise] = field(default_factory=list)
    brand_names: Dict[str, str] = field(default_factory=dict)

    def to_response(self) -> HierarchyResponse:
        """Serialize, filling derived counts from the tree itself."""
        businesses_per_brand: Dict[str, int] = {}
        for business in self.businesses:
            if business.brand_id:
                businesses_per_brand[business.brand_id] = businesses_per_brand.get(business.brand_id, 0) + 1
        franchises_per_business: Dict[str, int] = {}
        for franchise in self.franchises:
            franchises_per_business[franchise.business_id] = franchises_per_business.get(franchise.business_id, 0) + 1

        return HierarchyResponse(
            organization=OrganizationResponse.from_entity(
                self.organization,
                brand_count=len(self.brands),
                business_count=len(self.businesses),
            ),
            brands=[
                BrandResponse.from_entity(brand, business_count=businesses_per_brand.get(brand.id, 0))
                for brand in self.brands
            ],
            businesses=[
                BusinessResponse.from_entity(
                    business,
                    brand_name=self.brand_names.get(business.brand_id),
                    franchise_count=franchises_per_business.get(business.id, 0),
                )
                for business in self.businesses
            ],
            franchises=[FranchiseResponse.model_validate(franchise) for franchise in self.franchises],
        )


class HierarchyService:
    """Read-only aggregation over the four entity services."""

    def __init__(self, db: AsyncSession, warn_threshold: int = 1000):
        self.db = db
        self.warn_threshold = warn_threshold
        self.organizations = OrganizationService(db)
        self.brands = BrandService(db)
        self.businesses = BusinessService(db)
        self.franchises = FranchiseService(db)

    async def get_hierarchy(self, organization_id: str) -> Hierarchy:
        """Raises NotFoundError when the organization does not exist."""
        organization = await self.organizations.get_organization(organization_id)

        brands = await self.brands.list_by_organization(organization.id, active_only=True)
        businesses = await self.businesses.list_by_organization(
            organization.id, is_active=True, limit=None
        )

        brand_names = {brand.id: brand.name for brand in brands}
        # Active businesses may still point at a soft-deleted brand
        unresolved = {b.brand_id for b in businesses if b.brand_id and b.brand_id not in brand_names}
        if unresolved:
            brand_names.update(await self.brands.names_for(unresolved))

        franchises = await self.franchises.list_active_for_businesses(b.id for b in businesses)

        hierarchy = Hierarchy(
            organization=organization,
            brands=brands,
            businesses=businesses,
            franchises=franchises,
            brand_names=brand_names,
        )
        if len(businesses) + len(franchises) > self.warn_threshold:
            logger.warning(
                f"Hierarchy for organization {organization.id} returned {len(businesses)} businesses "
                f"and {len(franchises)} franchises unpaginated (threshold {self.warn_threshold})"
            )
        return hierarchy
