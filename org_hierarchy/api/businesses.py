from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Query, status

from org_hierarchy.api.deps import Businesses, CurrentPrincipal, Page, actor_of
from org_hierarchy.schemas.business import BusinessResponse
from org_hierarchy.schemas.common import DataResponse, DeletedResponse, ListResponse
from org_hierarchy.schemas.usage import UsageResponse

router = APIRouter()


@router.get("/organizations/{organization_id}/businesses", response_model=ListResponse[BusinessResponse])
async def list_businesses(
    organization_id: str,
    businesses: Businesses,
    page: Page,
    brand_id: Optional[str] = Query(None, alias="brandId"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
):
    """List the businesses of an organization, newest first."""
    items = await businesses.list_by_organization(
        organization_id,
        brand_id=brand_id,
        is_active=is_active,
        limit=page.limit,
        offset=page.offset,
    )
    brand_names = await businesses.brand_names(items)
    counts = await businesses.franchise_counts_for([b.id for b in items])
    data = [
        BusinessResponse.from_entity(
            b, brand_name=brand_names.get(b.brand_id), franchise_count=counts[b.id]
        )
        for b in items
    ]
    return ListResponse(data=data, count=len(data))


async def _business_response(businesses, business) -> BusinessResponse:
    brand_names = await businesses.brand_names([business])
    return BusinessResponse.from_entity(
        business,
        brand_name=brand_names.get(business.brand_id),
        franchise_count=await businesses.franchise_count(business.id),
    )


@router.get("/businesses/{business_id}", response_model=DataResponse[BusinessResponse])
async def get_business(business_id: str, businesses: Businesses):
    """Get a single business by ID."""
    business = await businesses.get_business(business_id)
    return DataResponse(data=await _business_response(businesses, business))


@router.post("/businesses", response_model=DataResponse[BusinessResponse], status_code=status.HTTP_201_CREATED)
async def create_business(
    businesses: Businesses,
    principal: CurrentPrincipal,
    payload: Dict[str, Any] = Body(...),
):
    """Create a business under an organization, optionally within one of its brands."""
    business = await businesses.create_business(payload, actor=actor_of(principal))
    return DataResponse(data=await _business_response(businesses, business))


@router.put("/businesses/{business_id}", response_model=DataResponse[BusinessResponse])
async def update_business(
    business_id: str,
    businesses: Businesses,
    principal: CurrentPrincipal,
    payload: Dict[str, Any] = Body(...),
):
    """Partially update a business; fields absent from the body are kept."""
    business = await businesses.update_business(business_id, payload, actor=actor_of(principal))
    return DataResponse(data=await _business_response(businesses, business))


@router.delete("/businesses/{business_id}", response_model=DataResponse[DeletedResponse])
async def delete_business(business_id: str, businesses: Businesses, principal: CurrentPrincipal):
    """Delete a business that has no active franchises."""
    await businesses.delete_business(business_id, actor=actor_of(principal))
    return DataResponse(data=DeletedResponse(id=business_id))


@router.get("/businesses/{business_id}/usage", response_model=DataResponse[UsageResponse])
async def get_business_usage(business_id: str, businesses: Businesses):
    """Active franchise/staff counts against the subscription limits."""
    business = await businesses.get_business(business_id)
    return DataResponse(data=await businesses.usage(business))
