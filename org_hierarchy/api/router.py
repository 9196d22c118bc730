from fastapi import APIRouter
from org_hierarchy.api import (
    organizations,
    brands,
    businesses,
    franchises,
    hierarchy,
)
from org_hierarchy.schemas.common import ErrorResponse

# Every route answers failures with the same envelope
api_router = APIRouter(
    responses={
        status_code: {"model": ErrorResponse}
        for status_code in (400, 401, 404, 409, 500)
    }
)

api_router.include_router(organizations.router, tags=["organizations"])
api_router.include_router(brands.router, tags=["brands"])
api_router.include_router(businesses.router, tags=["businesses"])
api_router.include_router(franchises.router, tags=["franchises"])
api_router.include_router(hierarchy.router, tags=["hierarchy"])
