from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.core.dependencies import get_dashboard_service
from app.schemas.auth import CurrentUser
from app.schemas.views import DashboardView
from app.services.dashboard_service import DashboardService

router = APIRouter()


@router.get(
    "",
    response_model=DashboardView,
    summary="Get dashboard",
    description="Stats, recent activity and announcements for the signed-in rep",
    operation_id="get_dashboard",
)
async def get_dashboard(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    dashboard_service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardView:
    return await dashboard_service.load(current_user)
