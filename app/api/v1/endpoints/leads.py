from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.core.auth import get_current_user
from app.core.dependencies import get_lead_service
from app.schemas.auth import CurrentUser
from app.schemas.entities import Lead, LeadRequest, LeadRequestCreate, LeadUpdate
from app.schemas.views import LeadsView
from app.services.lead_service import ALL, LeadService
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()

IndustryFilter = Annotated[str, Query(description="Industry, or 'all'")]
RegionFilter = Annotated[str, Query(description="Region, or 'all'")]


@router.get(
    "",
    response_model=LeadsView,
    summary="Get my leads",
    description="Leads assigned to the signed-in rep, newest first, plus their lead requests",
    operation_id="get_my_leads",
)
async def get_leads(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lead_service: Annotated[LeadService, Depends(get_lead_service)],
    status_filter: Annotated[str, Query(alias="status", description="Lead status, or 'all'")] = ALL,
    industry: IndustryFilter = ALL,
    region: RegionFilter = ALL,
) -> LeadsView:
    return await lead_service.rep_view(current_user, status_filter, industry, region)


@router.get(
    "/export",
    summary="Export leads as CSV",
    description="Download the signed-in rep's filtered leads as a CSV file",
    operation_id="export_my_leads",
    response_class=Response,
)
async def export_leads(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lead_service: Annotated[LeadService, Depends(get_lead_service)],
    status_filter: Annotated[str, Query(alias="status", description="Lead status, or 'all'")] = ALL,
    industry: IndustryFilter = ALL,
    region: RegionFilter = ALL,
) -> Response:
    export = await lead_service.export_csv(current_user, status_filter, industry, region)
    return Response(
        content=export.content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.get(
    "/requests",
    response_model=List[LeadRequest],
    summary="Get my lead requests",
    operation_id="get_my_lead_requests",
)
async def get_lead_requests(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lead_service: Annotated[LeadService, Depends(get_lead_service)],
) -> List[LeadRequest]:
    return await lead_service.my_requests(current_user)


@router.post(
    "/requests",
    response_model=LeadRequest,
    status_code=status.HTTP_201_CREATED,
    summary="Request more leads",
    description="Ask an admin for a batch of new leads in an industry and region",
    operation_id="create_lead_request",
)
async def create_lead_request(
    payload: LeadRequestCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lead_service: Annotated[LeadService, Depends(get_lead_service)],
) -> LeadRequest:
    created = await lead_service.request_leads(current_user, payload.model_dump())
    if created is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Lead request was not stored")
    LOGGER.info(f"Lead request submitted by {current_user.email}")
    return created


@router.patch(
    "/{lead_id}",
    response_model=Lead,
    summary="Update a lead",
    description="Change a lead's status or notes; a status change records today as last contacted",
    operation_id="update_lead",
)
async def update_lead(
    lead_id: str,
    payload: LeadUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lead_service: Annotated[LeadService, Depends(get_lead_service)],
) -> Lead:
    updated = await lead_service.update_lead(lead_id, payload.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lead not found")
    return updated
