from typing import List

from org_hierarchy.schemas.brand import BrandResponse
from org_hierarchy.schemas.business import BusinessResponse
from org_hierarchy.schemas.common import CamelModel
from org_hierarchy.schemas.franchise import FranchiseResponse
from org_hierarchy.schemas.organization import OrganizationResponse


class HierarchyResponse(CamelModel):
    """Active subtree of one organization."""

    organization: OrganizationResponse
    brands: List[BrandResponse]
    businesses: List[BusinessResponse]
    franchises: List[FranchiseResponse]
