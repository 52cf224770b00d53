from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.core.dependencies import get_commission_service
from app.schemas.auth import CurrentUser
from app.schemas.views import CommissionsView
from app.services.commission_service import CommissionService

router = APIRouter()


@router.get(
    "",
    response_model=CommissionsView,
    summary="Get my commissions",
    description="The signed-in rep's sales with earned, pending and paid-out totals",
    operation_id="get_my_commissions",
)
async def get_commissions(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    commission_service: Annotated[CommissionService, Depends(get_commission_service)],
) -> CommissionsView:
    return await commission_service.rep_view(current_user)
