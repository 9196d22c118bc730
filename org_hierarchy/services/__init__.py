# Services module
from org_hierarchy.services.organization_service import OrganizationService
from org_hierarchy.services.brand_service import BrandService
from org_hierarchy.services.business_service import BusinessService
from org_hierarchy.services.franchise_service import FranchiseService
from org_hierarchy.services.hierarchy_service import HierarchyService, Hierarchy

__all__ = [
    "OrganizationService",
    "BrandService",
    "BusinessService",
    "FranchiseService",
    "HierarchyService",
    "Hierarchy",
]
