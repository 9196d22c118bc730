from fastapi import APIRouter

from org_hierarchy.api.deps import Hierarchies
from org_hierarchy.schemas.common import DataResponse
from org_hierarchy.schemas.hierarchy import HierarchyResponse

router = APIRouter()


@router.get("/organizations/{organization_id}/hierarchy", response_model=DataResponse[HierarchyResponse])
async def get_hierarchy(organization_id: str, hierarchies: Hierarchies):
    """Full active subtree of an organization in one response (not paginated)."""
    hierarchy = await hierarchies.get_hierarchy(organization_id)
    return DataResponse(data=hierarchy.to_response())
