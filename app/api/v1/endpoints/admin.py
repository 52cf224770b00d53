"""Admin panel endpoints. Every route requires the ``admin`` role."""

from typing import Annotated, Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from app.core.auth import require_admin
from app.core.dependencies import (
    get_admin_service,
    get_announcement_service,
    get_commission_service,
    get_lead_service,
    get_support_service,
)
from app.schemas.auth import CurrentUser
from app.schemas.entities import (
    Announcement,
    AnnouncementCreate,
    AnnouncementUpdate,
    Lead,
    LeadCreate,
    LeadRequest,
    Sale,
    SupportTicket,
    TicketResponse,
    TicketStatusUpdate,
    UserInvite,
    UserProfile,
    UserUpdate,
)
from app.schemas.views import AdminCommissionsView, AdminOverview, AdminStats
from app.services.admin_service import AdminService
from app.services.announcement_service import AnnouncementService
from app.services.commission_service import CommissionService
from app.services.lead_service import LeadService
from app.services.support_service import SupportService
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()

AdminUser = Annotated[CurrentUser, Depends(require_admin)]


class LeadRequestAction(BaseModel):
    admin_notes: Optional[str] = Field(None, description="Note shown to the rep; a default is used when empty")


def _found(row: Any, what: str) -> Any:
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not found")
    return row


# ---------------------------------------------------------------------------
# Overview and stats
# ---------------------------------------------------------------------------


@router.get(
    "/overview",
    response_model=AdminOverview,
    summary="Get admin overview",
    description="Counts of users, leads, pending requests, open tickets, sales and unpaid commission",
    operation_id="get_admin_overview",
)
async def get_overview(
    admin: AdminUser,
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
) -> AdminOverview:
    return await admin_service.overview()


@router.get(
    "/stats",
    response_model=AdminStats,
    summary="Get team performance",
    operation_id="get_admin_stats",
)
async def get_stats(
    admin: AdminUser,
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
) -> AdminStats:
    return await admin_service.stats()


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@router.get("/users", response_model=List[UserProfile], summary="List users", operation_id="list_users")
async def list_users(
    admin: AdminUser,
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
) -> List[UserProfile]:
    return await admin_service.list_users()


@router.patch("/users/{user_id}", response_model=UserProfile, summary="Update a user", operation_id="update_user")
async def update_user(
    user_id: str,
    payload: UserUpdate,
    admin: AdminUser,
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
) -> UserProfile:
    return _found(await admin_service.update_user(user_id, payload.model_dump(exclude_unset=True)), "User")


@router.post(
    "/users/invite",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Invite a user",
    description="Send an invitation email through the auth service",
    operation_id="invite_user",
)
async def invite_user(
    payload: UserInvite,
    admin: AdminUser,
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
) -> Dict[str, Any]:
    await admin_service.invite_user(payload.email)
    return {"message": f"Invitation sent to {payload.email}", "status": "success"}


# ---------------------------------------------------------------------------
# Leads
# ---------------------------------------------------------------------------


@router.post(
    "/leads",
    response_model=Lead,
    status_code=status.HTTP_201_CREATED,
    summary="Add and assign a lead",
    operation_id="create_lead",
)
async def create_lead(
    payload: LeadCreate,
    admin: AdminUser,
    lead_service: Annotated[LeadService, Depends(get_lead_service)],
) -> Lead:
    created = await lead_service.create_lead(payload.model_dump())
    if created is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Lead was not stored")
    return created


@router.get("/reps", response_model=List[UserProfile], summary="List assignable reps", operation_id="list_reps")
async def list_reps(
    admin: AdminUser,
    lead_service: Annotated[LeadService, Depends(get_lead_service)],
) -> List[UserProfile]:
    return await lead_service.assignable_reps()


@router.get(
    "/lead-requests",
    response_model=List[LeadRequest],
    summary="List lead requests",
    operation_id="list_lead_requests",
)
async def list_lead_requests(
    admin: AdminUser,
    lead_service: Annotated[LeadService, Depends(get_lead_service)],
) -> List[LeadRequest]:
    return await lead_service.all_requests()


@router.post(
    "/lead-requests/{request_id}/{action}",
    response_model=LeadRequest,
    summary="Act on a lead request",
    description="Set a request to approved, rejected or fulfilled",
    operation_id="act_on_lead_request",
)
async def act_on_lead_request(
    request_id: str,
    action: str,
    admin: AdminUser,
    lead_service: Annotated[LeadService, Depends(get_lead_service)],
    payload: Optional[LeadRequestAction] = None,
) -> LeadRequest:
    notes = payload.admin_notes if payload else None
    return _found(await lead_service.act_on_request(request_id, action, notes), "Lead request")


# ---------------------------------------------------------------------------
# Commissions
# ---------------------------------------------------------------------------


@router.get(
    "/commissions",
    response_model=AdminCommissionsView,
    summary="List all commissions",
    operation_id="list_commissions",
)
async def list_commissions(
    admin: AdminUser,
    commission_service: Annotated[CommissionService, Depends(get_commission_service)],
) -> AdminCommissionsView:
    return await commission_service.admin_view()


@router.post(
    "/commissions/{sale_id}/paid",
    response_model=Sale,
    summary="Mark commission paid",
    operation_id="mark_commission_paid",
)
async def mark_commission_paid(
    sale_id: str,
    admin: AdminUser,
    commission_service: Annotated[CommissionService, Depends(get_commission_service)],
) -> Sale:
    return _found(await commission_service.mark_paid(sale_id), "Sale")


# ---------------------------------------------------------------------------
# Announcements
# ---------------------------------------------------------------------------


@router.get(
    "/announcements",
    response_model=List[Announcement],
    summary="List announcements",
    operation_id="list_announcements",
)
async def list_announcements(
    admin: AdminUser,
    announcement_service: Annotated[AnnouncementService, Depends(get_announcement_service)],
) -> List[Announcement]:
    return await announcement_service.all()


@router.post(
    "/announcements",
    response_model=Announcement,
    status_code=status.HTTP_201_CREATED,
    summary="Create an announcement",
    operation_id="create_announcement",
)
async def create_announcement(
    payload: AnnouncementCreate,
    admin: AdminUser,
    announcement_service: Annotated[AnnouncementService, Depends(get_announcement_service)],
) -> Announcement:
    created = await announcement_service.create(payload.model_dump(mode="json"))
    if created is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Announcement was not stored")
    return created


@router.patch(
    "/announcements/{announcement_id}",
    response_model=Announcement,
    summary="Edit an announcement",
    operation_id="update_announcement",
)
async def update_announcement(
    announcement_id: str,
    payload: AnnouncementUpdate,
    admin: AdminUser,
    announcement_service: Annotated[AnnouncementService, Depends(get_announcement_service)],
) -> Announcement:
    values = payload.model_dump(mode="json", exclude_unset=True)
    return _found(await announcement_service.update(announcement_id, values), "Announcement")


@router.delete(
    "/announcements/{announcement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an announcement",
    operation_id="delete_announcement",
)
async def delete_announcement(
    announcement_id: str,
    admin: AdminUser,
    announcement_service: Annotated[AnnouncementService, Depends(get_announcement_service)],
) -> None:
    await announcement_service.delete(announcement_id)


@router.post(
    "/announcements/{announcement_id}/toggle",
    response_model=Announcement,
    summary="Toggle an announcement",
    description="Show or hide an announcement on the dashboard",
    operation_id="toggle_announcement",
)
async def toggle_announcement(
    announcement_id: str,
    admin: AdminUser,
    announcement_service: Annotated[AnnouncementService, Depends(get_announcement_service)],
) -> Announcement:
    return _found(await announcement_service.toggle(announcement_id), "Announcement")


# ---------------------------------------------------------------------------
# Support
# ---------------------------------------------------------------------------


@router.get(
    "/tickets",
    response_model=List[SupportTicket],
    summary="List support tickets",
    operation_id="list_tickets",
)
async def list_tickets(
    admin: AdminUser,
    support_service: Annotated[SupportService, Depends(get_support_service)],
) -> List[SupportTicket]:
    return await support_service.all_tickets()


@router.patch(
    "/tickets/{ticket_id}/status",
    response_model=SupportTicket,
    summary="Change ticket status",
    operation_id="update_ticket_status",
)
async def update_ticket_status(
    ticket_id: str,
    payload: TicketStatusUpdate,
    admin: AdminUser,
    support_service: Annotated[SupportService, Depends(get_support_service)],
) -> SupportTicket:
    return _found(await support_service.set_status(ticket_id, payload.status), "Ticket")


@router.post(
    "/tickets/{ticket_id}/respond",
    response_model=SupportTicket,
    summary="Respond to a ticket",
    description="Record the admin response and resolve the ticket",
    operation_id="respond_to_ticket",
)
async def respond_to_ticket(
    ticket_id: str,
    payload: TicketResponse,
    admin: AdminUser,
    support_service: Annotated[SupportService, Depends(get_support_service)],
) -> SupportTicket:
    return _found(await support_service.respond(ticket_id, payload.response), "Ticket")
