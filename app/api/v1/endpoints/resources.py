from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.auth import get_current_user, require_admin
from app.core.dependencies import get_resource_service
from app.schemas.auth import CurrentUser
from app.schemas.entities import Resource, ResourceCreate
from app.schemas.views import ResourcesView
from app.services.resource_service import ALL, ResourceService

router = APIRouter()


@router.get(
    "",
    response_model=ResourcesView,
    summary="Browse resources",
    description="Active scripts, templates and training material, with search and category filter",
    operation_id="browse_resources",
)
async def browse_resources(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    resource_service: Annotated[ResourceService, Depends(get_resource_service)],
    search: Annotated[str, Query(description="Matches title, description or tags")] = "",
    category: Annotated[str, Query(description="Category, or 'all'")] = ALL,
) -> ResourcesView:
    return await resource_service.browse(search, category)


@router.post(
    "",
    response_model=Resource,
    status_code=status.HTTP_201_CREATED,
    summary="Add a resource",
    operation_id="create_resource",
)
async def create_resource(
    payload: ResourceCreate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    resource_service: Annotated[ResourceService, Depends(get_resource_service)],
) -> Resource:
    created = await resource_service.add(payload.model_dump())
    if created is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Resource was not stored")
    return created
