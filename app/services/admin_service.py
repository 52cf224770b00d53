"""Admin panel: overview counts, team performance and user management."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from app.core.auth_client import SupabaseAuthClient
from app.core.exceptions import BackendError
from app.database.store import Row, RowStore
from app.repositories.entity_repository import EntityRepository, Tables
from app.repositories.user_repository import UserRepository
from app.schemas.views import AdminOverview, AdminStats, RepPerformance
from app.services.commission_service import unpaid_commission_total
from app.utils.concurrency import load_all
from app.utils.dates import parse_timestamp
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

RECENT_WINDOW = timedelta(days=7)
TOP_PERFORMERS = 3


def created_since(rows: Sequence[Mapping[str, Any]], since: datetime) -> List[Mapping[str, Any]]:
    selected = []
    for row in rows:
        created = parse_timestamp(row.get("created_date"))
        if created is not None and created > since:
            selected.append(row)
    return selected


def conversion_rate(sales_count: int, leads_count: int) -> float:
    """Sales per lead as a percentage to one decimal place; 0 without leads."""
    if leads_count <= 0:
        return 0
    return round(sales_count / leads_count * 100, 1)


def rep_performance(
    users: Sequence[Mapping[str, Any]],
    leads: Sequence[Mapping[str, Any]],
    sales: Sequence[Mapping[str, Any]],
) -> List[RepPerformance]:
    """Per-rep totals for users with role ``user``, best commission first."""
    performance = []
    for rep in users:
        if rep.get("role") != "user":
            continue
        email = rep.get("email")
        rep_sales = [sale for sale in sales if sale.get("rep_email") == email]
        performance.append(
            RepPerformance(
                email=email or "",
                full_name=rep.get("full_name"),
                total_commission=sum(sale.get("commission_amount") or 0 for sale in rep_sales),
                total_sales=len(rep_sales),
                total_leads=sum(1 for lead in leads if lead.get("assigned_to") == email),
            )
        )
    return sorted(performance, key=lambda rep: rep.total_commission, reverse=True)


def admin_stats(
    users: Sequence[Mapping[str, Any]],
    leads: Sequence[Mapping[str, Any]],
    sales: Sequence[Mapping[str, Any]],
    now: Optional[datetime] = None,
) -> AdminStats:
    since = (now or datetime.now(timezone.utc)) - RECENT_WINDOW
    return AdminStats(
        total_revenue=sum(sale.get("sale_amount") or 0 for sale in sales),
        recent_sales=len(created_since(sales, since)),
        recent_leads=len(created_since(leads, since)),
        conversion_rate=conversion_rate(len(sales), len(leads)),
        top_performers=rep_performance(users, leads, sales)[:TOP_PERFORMERS],
        total_commission_owed=unpaid_commission_total(sales),
    )


class AdminService:
    """Data behind the admin panel."""

    def __init__(self, store: RowStore, auth_client: Optional[SupabaseAuthClient] = None):
        self.users = UserRepository(store)
        self.leads = EntityRepository(store, Tables.LEADS)
        self.requests = EntityRepository(store, Tables.LEAD_REQUESTS)
        self.tickets = EntityRepository(store, Tables.SUPPORT_TICKETS)
        self.sales = EntityRepository(store, Tables.SALES)
        self.auth_client = auth_client

    async def overview(self) -> AdminOverview:
        """Headline counts, all loaded together.

        Raises:
            BackendError: If any of the loads fails; no partial counts are returned
        """
        users, leads, requests, tickets, sales = await load_all(
            self.users.list(),
            self.leads.list(),
            self.requests.filter({"status": "pending"}),
            self.tickets.filter({"status": "open"}),
            self.sales.list(),
        )
        return AdminOverview(
            total_users=len(users),
            total_leads=len(leads),
            pending_requests=len(requests),
            open_tickets=len(tickets),
            total_sales=len(sales),
            unpaid_commissions=unpaid_commission_total(sales),
        )

    async def stats(self, now: Optional[datetime] = None) -> AdminStats:
        """Team performance figures; empty figures if loading fails."""
        try:
            sales, leads, users = await load_all(
                self.sales.list(),
                self.leads.list(),
                self.users.list(),
            )
        except BackendError as e:
            LOGGER.error(f"Error loading admin stats: {e}", exc_info=True)
            return AdminStats()
        return admin_stats(users, leads, sales, now)

    async def list_users(self) -> List[Row]:
        try:
            return await self.users.list()
        except BackendError as e:
            LOGGER.error(f"Error loading users: {e}", exc_info=True)
            return []

    async def update_user(self, user_id: Any, values: Mapping[str, Any]) -> Optional[Row]:
        changes: Dict[str, Any] = {key: value for key, value in values.items() if value is not None}
        LOGGER.info(f"Updating user {user_id}: {sorted(changes)}")
        return await self.users.update(user_id, changes)

    async def invite_user(self, email: str) -> Dict[str, Any]:
        """Invite a new team member through the auth service.

        Raises:
            BackendError: If the auth service refuses the invitation
        """
        if self.auth_client is None:
            raise BackendError("Auth client is not configured")
        return await self.auth_client.invite_user(email)
