from typing import Any, Dict
from fastapi import APIRouter, Body, Query, status

from org_hierarchy.api.deps import Brands, CurrentPrincipal, actor_of
from org_hierarchy.schemas.brand import BrandResponse
from org_hierarchy.schemas.common import DataResponse, DeletedResponse, ListResponse
from org_hierarchy.schemas.usage import UsageResponse

router = APIRouter()


@router.get("/organizations/{organization_id}/brands", response_model=ListResponse[BrandResponse])
async def list_brands(
    organization_id: str,
    brands: Brands,
    active_only: bool = Query(True, alias="activeOnly"),
):
    """List the brands of an organization by name."""
    items = await brands.list_by_organization(organization_id, active_only=active_only)
    counts = await brands.business_counts_for([brand.id for brand in items])
    data = [BrandResponse.from_entity(brand, business_count=counts[brand.id]) for brand in items]
    return ListResponse(data=data, count=len(data))


@router.get("/brands/{brand_id}", response_model=DataResponse[BrandResponse])
async def get_brand(brand_id: str, brands: Brands):
    brand = await brands.get_brand(brand_id)
    return DataResponse(
        data=BrandResponse.from_entity(brand, business_count=await brands.business_count(brand.id))
    )


@router.post("/brands", response_model=DataResponse[BrandResponse], status_code=status.HTTP_201_CREATED)
async def create_brand(
    brands: Brands,
    principal: CurrentPrincipal,
    payload: Dict[str, Any] = Body(...),
):
    """Create a brand under an existing organization."""
    brand = await brands.create_brand(payload, actor=actor_of(principal))
    return DataResponse(data=BrandResponse.from_entity(brand, business_count=0))


@router.put("/brands/{brand_id}", response_model=DataResponse[BrandResponse])
async def update_brand(
    brand_id: str,
    brands: Brands,
    principal: CurrentPrincipal,
    payload: Dict[str, Any] = Body(...),
):
    brand = await brands.update_brand(brand_id, payload, actor=actor_of(principal))
    return DataResponse(
        data=BrandResponse.from_entity(brand, business_count=await brands.business_count(brand.id))
    )


@router.delete("/brands/{brand_id}", response_model=DataResponse[DeletedResponse])
async def delete_brand(brand_id: str, brands: Brands, principal: CurrentPrincipal):
    await brands.delete_brand(brand_id, actor=actor_of(principal))
    return DataResponse(data=DeletedResponse(id=brand_id))


@router.get("/brands/{brand_id}/usage", response_model=DataResponse[UsageResponse])
async def get_brand_usage(brand_id: str, brands: Brands):
    brand = await brands.get_brand(brand_id)
    return DataResponse(data=await brands.usage(brand))
