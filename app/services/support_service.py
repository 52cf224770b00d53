"""Support tickets raised by reps and handled by admins."""

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from app.core.exceptions import BackendError, ValidationError
from app.database.store import Row, RowStore
from app.repositories.entity_repository import EntityRepository, Tables
from app.schemas.auth import CurrentUser
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

RESOLVED = "resolved"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupportService:
    """Ticket submission and the admin support queue."""

    def __init__(self, store: RowStore):
        self.tickets = EntityRepository(store, Tables.SUPPORT_TICKETS)

    async def my_tickets(self, user: CurrentUser) -> List[Row]:
        """Get the tickets the user submitted, newest first."""
        try:
            return await self.tickets.filter({"submitted_by": user.email}, "-created_date")
        except BackendError as e:
            LOGGER.error(f"Error loading tickets for {user.email}: {e}", exc_info=True)
            return []

    async def submit(self, user: CurrentUser, values: Mapping[str, Any]) -> Optional[Row]:
        """Open a new ticket.

        Raises:
            ValidationError: If the subject or message is blank
        """
        subject = (values.get("subject") or "").strip()
        message = (values.get("message") or "").strip()
        if not subject or not message:
            raise ValidationError("Subject and message are required")

        return await self.tickets.create(
            {
                "subject": subject,
                "message": message,
                "priority": values.get("priority") or "medium",
                "status": "open",
                "submitted_by": user.email,
            }
        )

    async def all_tickets(self) -> List[Row]:
        try:
            return await self.tickets.list("-created_date")
        except BackendError as e:
            LOGGER.error(f"Error loading tickets: {e}", exc_info=True)
            return []

    async def set_status(self, ticket_id: Any, status: str) -> Optional[Row]:
        """Move a ticket to ``status``; resolving it stamps ``resolved_at``."""
        changes = {"status": status}
        if status == RESOLVED:
            changes["resolved_at"] = utc_timestamp()
        return await self.tickets.update(ticket_id, changes)

    async def respond(self, ticket_id: Any, response: str) -> Optional[Row]:
        """Answer a ticket and mark it resolved.

        Raises:
            ValidationError: If the response is blank
        """
        if not response or not response.strip():
            raise ValidationError("Response must not be empty")
        return await self.tickets.update(
            ticket_id,
            {"admin_response": response, "status": RESOLVED, "resolved_at": utc_timestamp()},
        )
