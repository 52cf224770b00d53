from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth import get_current_user
from app.core.dependencies import get_support_service
from app.schemas.auth import CurrentUser
from app.schemas.entities import SupportTicket, SupportTicketCreate
from app.services.support_service import SupportService

router = APIRouter()


@router.get(
    "/tickets",
    response_model=List[SupportTicket],
    summary="Get my tickets",
    operation_id="get_my_tickets",
)
async def get_my_tickets(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    support_service: Annotated[SupportService, Depends(get_support_service)],
) -> List[SupportTicket]:
    return await support_service.my_tickets(current_user)


@router.post(
    "/tickets",
    response_model=SupportTicket,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a ticket",
    description="Raise a support ticket; subject and message are required",
    operation_id="create_ticket",
)
async def create_ticket(
    payload: SupportTicketCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    support_service: Annotated[SupportService, Depends(get_support_service)],
) -> SupportTicket:
    created = await support_service.submit(current_user, payload.model_dump())
    if created is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Ticket was not stored")
    return created
