from org_hierarchy.schemas.common import DataResponse, DeletedResponse, ListResponse, ErrorResponse
from org_hierarchy.schemas.organization import OrganizationDocument, OrganizationResponse
from org_hierarchy.schemas.brand import BrandDocument, BrandResponse
from org_hierarchy.schemas.business import BusinessDocument, BusinessResponse
from org_hierarchy.schemas.franchise import FranchiseDocument, FranchiseResponse, OpenStatusResponse
from org_hierarchy.schemas.hierarchy import HierarchyResponse
from org_hierarchy.schemas.usage import UsageResponse

__all__ = [
    "DataResponse",
    "ListResponse",
    "ErrorResponse",
    "DeletedResponse",
    "OrganizationDocument",
    "OrganizationResponse",
    "BrandDocument",
    "BrandResponse",
    "BusinessDocument",
    "BusinessResponse",
    "FranchiseDocument",
    "FranchiseResponse",
    "OpenStatusResponse",
    "HierarchyResponse",
    "UsageResponse",
]
