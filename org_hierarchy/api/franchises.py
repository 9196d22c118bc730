from datetime import datetime
from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Query, status

from org_hierarchy.api.deps import CurrentPrincipal, Franchises, Page, actor_of
from org_hierarchy.schemas.common import DataResponse, DeletedResponse, ListResponse
from org_hierarchy.schemas.franchise import FranchiseResponse, OpenStatusResponse

router = APIRouter()


@router.get("/businesses/{business_id}/franchises", response_model=ListResponse[FranchiseResponse])
async def list_franchises(
    business_id: str,
    franchises: Franchises,
    page: Page,
    is_active: Optional[bool] = Query(None, alias="isActive"),
):
    """List the franchises of a business by name."""
    items = await franchises.list_by_business(
        business_id, is_active=is_active, limit=page.limit, offset=page.offset
    )
    data = [FranchiseResponse.model_validate(f) for f in items]
    return ListResponse(data=data, count=len(data))


@router.get("/franchises/{franchise_id}", response_model=DataResponse[FranchiseResponse])
async def get_franchise(franchise_id: str, franchises: Franchises):
    franchise = await franchises.get_franchise(franchise_id)
    return DataResponse(data=FranchiseResponse.model_validate(franchise))


@router.post("/franchises", response_model=DataResponse[FranchiseResponse], status_code=status.HTTP_201_CREATED)
async def create_franchise(
    franchises: Franchises,
    principal: CurrentPrincipal,
    payload: Dict[str, Any] = Body(...),
):
    """Create a franchise (location) for an existing business."""
    franchise = await franchises.create_franchise(payload, actor=actor_of(principal))
    return DataResponse(data=FranchiseResponse.model_validate(franchise))


@router.put("/franchises/{franchise_id}", response_model=DataResponse[FranchiseResponse])
async def update_franchise(
    franchise_id: str,
    franchises: Franchises,
    principal: CurrentPrincipal,
    payload: Dict[str, Any] = Body(...),
):
    franchise = await franchises.update_franchise(franchise_id, payload, actor=actor_of(principal))
    return DataResponse(data=FranchiseResponse.model_validate(franchise))


@router.delete("/franchises/{franchise_id}", response_model=DataResponse[DeletedResponse])
async def delete_franchise(franchise_id: str, franchises: Franchises, principal: CurrentPrincipal):
    await franchises.delete_franchise(franchise_id, actor=actor_of(principal))
    return DataResponse(data=DeletedResponse(id=franchise_id))


@router.get("/franchises/{franchise_id}/open-status", response_model=DataResponse[OpenStatusResponse])
async def get_open_status(
    franchise_id: str,
    franchises: Franchises,
    at: Optional[datetime] = Query(None, description="ISO 8601 instant; defaults to now"),
):
    """Whether the franchise is open at ``at`` according to its operating hours."""
    franchise = await franchises.get_franchise(franchise_id)
    return DataResponse(data=franchises.open_status(franchise, at))
