from org_hierarchy.models.organization import Organization
from org_hierarchy.models.brand import Brand
from org_hierarchy.models.business import Business
from org_hierarchy.models.franchise import Franchise

__all__ = [
    "Organization",
    "Brand",
    "Business",
    "Franchise",
]
