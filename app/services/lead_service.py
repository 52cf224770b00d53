"""Lead management: a rep's own leads and requests, and admin assignment."""

import csv
import io
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence

from app.core.exceptions import BackendError, ValidationError
from app.database.store import Row, RowStore
from app.repositories.entity_repository import EntityRepository, Tables
from app.repositories.user_repository import UserRepository
from app.schemas.auth import CurrentUser
from app.schemas.views import CsvExport, LeadsView
from app.utils.concurrency import load_all
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

ALL = "all"

CSV_HEADER = ["Company", "Contact", "Email", "Phone", "Industry", "Region", "Status", "Notes"]
CSV_FIELDS = ["company_name", "contact_name", "email", "phone", "industry", "region", "status", "notes"]

# Admin actions on a lead request and the note recorded when none is given
REQUEST_ACTIONS: Dict[str, str] = {
    "approved": "Request approved - leads will be assigned shortly",
    "rejected": "Request declined - please reach out for more details",
    "fulfilled": "Leads have been assigned to your account",
}


def filter_leads(
    leads: Sequence[Mapping[str, Any]],
    status: str = ALL,
    industry: str = ALL,
    region: str = ALL,
) -> List[Mapping[str, Any]]:
    """Apply the view filters; ``"all"`` disables a filter."""
    selected = []
    for lead in leads:
        if status != ALL and lead.get("status") != status:
            continue
        if industry != ALL and lead.get("industry") != industry:
            continue
        if region != ALL and lead.get("region") != region:
            continue
        selected.append(lead)
    return selected


def leads_to_csv(leads: Sequence[Mapping[str, Any]]) -> str:
    """Render leads as CSV with every data field quoted.

    Embedded quotes are doubled and missing values are written as empty
    strings.
    """
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADER) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for lead in leads:
        writer.writerow(["" if lead.get(field) is None else lead.get(field) for field in CSV_FIELDS])
    return buffer.getvalue().rstrip("\n")


def export_filename(today: Optional[date] = None) -> str:
    return f"leads-{(today or date.today()).isoformat()}.csv"


class LeadService:
    """Leads as seen by a rep, plus the admin assignment workflow."""

    def __init__(self, store: RowStore):
        self.leads = EntityRepository(store, Tables.LEADS)
        self.requests = EntityRepository(store, Tables.LEAD_REQUESTS)
        self.users = UserRepository(store)

    async def rep_view(
        self,
        user: CurrentUser,
        status: str = ALL,
        industry: str = ALL,
        region: str = ALL,
    ) -> LeadsView:
        """Get the rep's leads (filtered for display) and their lead requests."""
        try:
            leads, requests = await load_all(
                self.leads.filter({"assigned_to": user.email}, "-created_date"),
                self.requests.filter({"requested_by": user.email}, "-created_date"),
            )
        except BackendError as e:
            LOGGER.error(f"Error loading leads data for {user.email}: {e}", exc_info=True)
            return LeadsView()

        return LeadsView(
            leads=filter_leads(leads, status, industry, region),
            total=len(leads),
            requests=requests,
        )

    async def my_requests(self, user: CurrentUser) -> List[Row]:
        try:
            return await self.requests.filter({"requested_by": user.email}, "-created_date")
        except BackendError as e:
            LOGGER.error(f"Error loading lead requests for {user.email}: {e}", exc_info=True)
            return []

    async def export_csv(
        self,
        user: CurrentUser,
        status: str = ALL,
        industry: str = ALL,
        region: str = ALL,
        today: Optional[date] = None,
    ) -> CsvExport:
        """Export the rep's filtered leads as a CSV download."""
        leads = await self.leads.filter({"assigned_to": user.email}, "-created_date")
        selected = filter_leads(leads, status, industry, region)
        LOGGER.info(f"Exporting {len(selected)} leads for {user.email}")
        return CsvExport(filename=export_filename(today), content=leads_to_csv(selected))

    async def update_lead(self, lead_id: Any, values: Mapping[str, Any], today: Optional[date] = None) -> Optional[Row]:
        """Update a lead's status and notes.

        A status change stamps ``last_contacted`` with today's date.

        Returns:
            The updated lead, or None if it does not exist
        """
        changes = {key: value for key, value in values.items() if value is not None}
        if "status" in changes:
            current = await self.leads.filter({"id": lead_id})
            if not current:
                return None
            if current[0].get("status") != changes["status"]:
                changes["last_contacted"] = (today or date.today()).isoformat()

        if not changes:
            current = await self.leads.filter({"id": lead_id})
            return current[0] if current else None
        return await self.leads.update(lead_id, changes)

    async def request_leads(self, user: CurrentUser, values: Mapping[str, Any]) -> Optional[Row]:
        """Submit a request for more leads on behalf of the rep."""
        return await self.requests.create({**values, "requested_by": user.email, "status": "pending"})

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    async def create_lead(self, values: Mapping[str, Any]) -> Optional[Row]:
        """Add a lead and assign it; new leads always start as ``assigned``."""
        return await self.leads.create({**values, "status": "assigned"})

    async def all_requests(self) -> List[Row]:
        try:
            return await self.requests.list("-created_date")
        except BackendError as e:
            LOGGER.error(f"Error loading lead requests: {e}", exc_info=True)
            return []

    async def act_on_request(self, request_id: Any, action: str, admin_notes: Optional[str] = None) -> Optional[Row]:
        """Approve, reject or fulfil a lead request.

        Raises:
            ValidationError: If the action is not one of the known actions
        """
        if action not in REQUEST_ACTIONS:
            raise ValidationError(f"Unknown lead request action: {action}")
        notes = admin_notes or REQUEST_ACTIONS[action]
        return await self.requests.update(request_id, {"status": action, "admin_notes": notes})

    async def assignable_reps(self) -> List[Row]:
        """Users leads can be assigned to (role ``user``)."""
        try:
            users = await self.users.list()
        except BackendError as e:
            LOGGER.error(f"Error loading team members: {e}", exc_info=True)
            return []
        return [user for user in users if user.get("role") == "user"]
