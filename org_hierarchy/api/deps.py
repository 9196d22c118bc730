"""
FastAPI Dependencies

Provides dependency injection for database sessions, the gateway-injected
principal, pagination and the entity services.

Authentication happens upstream: the gateway forwards the verified caller as
plain headers and this service only reads them.
"""

from dataclasses import dataclass, field
from typing import Annotated, List, Optional
from fastapi import Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from org_hierarchy.config import settings
from org_hierarchy.database import get_db
from org_hierarchy.exceptions import UnauthorizedError
from org_hierarchy.services import (
    BrandService,
    BusinessService,
    FranchiseService,
    HierarchyService,
    OrganizationService,
)

logger = logging.getLogger(__name__)


@dataclass
class Principal:
    """Caller identity as forwarded by the gateway."""

    user_id: str
    roles: List[str] = field(default_factory=list)
    organization_id: Optional[str] = None


async def get_principal(
    x_user_id: Annotated[Optional[str], Header()] = None,
    x_user_roles: Annotated[Optional[str], Header()] = None,
    x_organization_id: Annotated[Optional[str], Header()] = None,
) -> Optional[Principal]:
    if not x_user_id:
        if settings.REQUIRE_PRINCIPAL:
            raise UnauthorizedError()
        return None

    roles = [role.strip() for role in (x_user_roles or "").split(",") if role.strip()]
    principal = Principal(user_id=x_user_id, roles=roles, organization_id=x_organization_id)
    logger.debug("Principal resolved", extra={"user_id": principal.user_id})
    return principal


def actor_of(principal: Optional[Principal]) -> Optional[str]:
    return principal.user_id if principal else None


@dataclass
class Pagination:
    limit: int
    offset: int


def get_pagination(
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
) -> Pagination:
    return Pagination(limit=limit, offset=offset)


def get_organization_service(db: Annotated[AsyncSession, Depends(get_db)]) -> OrganizationService:
    return OrganizationService(db, enforce_limits=settings.ENFORCE_LIMITS)


def get_brand_service(db: Annotated[AsyncSession, Depends(get_db)]) -> BrandService:
    return BrandService(db, enforce_limits=settings.ENFORCE_LIMITS)


def get_business_service(db: Annotated[AsyncSession, Depends(get_db)]) -> BusinessService:
    return BusinessService(db, enforce_limits=settings.ENFORCE_LIMITS)


def get_franchise_service(db: Annotated[AsyncSession, Depends(get_db)]) -> FranchiseService:
    return FranchiseService(db, enforce_limits=settings.ENFORCE_LIMITS)


def get_hierarchy_service(db: Annotated[AsyncSession, Depends(get_db)]) -> HierarchyService:
    return HierarchyService(db, warn_threshold=settings.HIERARCHY_WARN_THRESHOLD)


# Type aliases for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentPrincipal = Annotated[Optional[Principal], Depends(get_principal)]
Page = Annotated[Pagination, Depends(get_pagination)]
Organizations = Annotated[OrganizationService, Depends(get_organization_service)]
Brands = Annotated[BrandService, Depends(get_brand_service)]
Businesses = Annotated[BusinessService, Depends(get_business_service)]
Franchises = Annotated[FranchiseService, Depends(get_franchise_service)]
Hierarchies = Annotated[HierarchyService, Depends(get_hierarchy_service)]
