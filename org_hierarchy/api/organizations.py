from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Query, status

from org_hierarchy.api.deps import CurrentPrincipal, Organizations, Page, actor_of
from org_hierarchy.schemas.common import DataResponse, DeletedResponse, ListResponse
from org_hierarchy.schemas.organization import OrganizationResponse
from org_hierarchy.schemas.usage import UsageResponse

router = APIRouter()


@router.get("/organizations", response_model=ListResponse[OrganizationResponse])
async def list_organizations(
    organizations: Organizations,
    page: Page,
    is_active: Optional[bool] = Query(None, alias="isActive"),
):
    """List organizations, newest first, with active brand/business counts."""
    items = await organizations.list_organizations(
        is_active=is_active, limit=page.limit, offset=page.offset
    )
    counts = await organizations.child_counts_for([org.id for org in items])
    data = [
        OrganizationResponse.from_entity(
            org,
            brand_count=counts[org.id]["brands"],
            business_count=counts[org.id]["businesses"],
        )
        for org in items
    ]
    return ListResponse(data=data, count=len(data))


@router.get("/organizations/{organization_id}", response_model=DataResponse[OrganizationResponse])
async def get_organization(organization_id: str, organizations: Organizations):
    """Get a single organization by ID."""
    org = await organizations.get_organization(organization_id)
    counts = await organizations.child_counts(org.id)
    return DataResponse(
        data=OrganizationResponse.from_entity(
            org, brand_count=counts["brands"], business_count=counts["businesses"]
        )
    )


@router.post(
    "/organizations",
    response_model=DataResponse[OrganizationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    organizations: Organizations,
    principal: CurrentPrincipal,
    payload: Dict[str, Any] = Body(...),
):
    """Create a new organization."""
    org = await organizations.create_organization(payload, actor=actor_of(principal))
    return DataResponse(data=OrganizationResponse.from_entity(org, brand_count=0, business_count=0))


@router.put("/organizations/{organization_id}", response_model=DataResponse[OrganizationResponse])
async def update_organization(
    organization_id: str,
    organizations: Organizations,
    principal: CurrentPrincipal,
    payload: Dict[str, Any] = Body(...),
):
    """Partially update an organization; fields absent from the body are kept."""
    org = await organizations.update_organization(organization_id, payload, actor=actor_of(principal))
    counts = await organizations.child_counts(org.id)
    return DataResponse(
        data=OrganizationResponse.from_entity(
            org, brand_count=counts["brands"], business_count=counts["businesses"]
        )
    )


@router.delete("/organizations/{organization_id}", response_model=DataResponse[DeletedResponse])
async def delete_organization(
    organization_id: str,
    organizations: Organizations,
    principal: CurrentPrincipal,
):
    """Delete an organization that has no active brands or businesses."""
    await organizations.delete_organization(organization_id, actor=actor_of(principal))
    return DataResponse(data=DeletedResponse(id=organization_id))


@router.get("/organizations/{organization_id}/usage", response_model=DataResponse[UsageResponse])
async def get_organization_usage(organization_id: str, organizations: Organizations):
    """Active brand/business counts against the organization's limits."""
    org = await organizations.get_organization(organization_id)
    return DataResponse(data=await organizations.usage(org))
