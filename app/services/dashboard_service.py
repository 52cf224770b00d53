"""Dashboard view for a sales rep."""

from typing import Any, Dict, List, Mapping, Sequence

from app.core.exceptions import BackendError
from app.database.store import RowStore
from app.repositories.entity_repository import EntityRepository, Tables
from app.schemas.auth import CurrentUser
from app.schemas.views import ActivityItem, DashboardStats, DashboardView
from app.services.commission_service import unpaid_commission_total
from app.utils.concurrency import load_all
from app.utils.dates import timestamp_sort_key
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

CONTACTED_STATUSES = frozenset({"contacted", "replied", "booked", "closed"})


def dashboard_stats(leads: Sequence[Mapping[str, Any]], sales: Sequence[Mapping[str, Any]]) -> DashboardStats:
    """Compute the headline numbers from a rep's leads and sales."""
    contacted = sum(1 for lead in leads if lead.get("status") in CONTACTED_STATUSES)
    booked = sum(1 for lead in leads if lead.get("status") == "booked")
    earned = sum(sale.get("commission_amount") or 0 for sale in sales)

    return DashboardStats(
        leads_contacted=contacted,
        bookings_made=booked,
        commission_earned=earned,
        commission_pending=unpaid_commission_total(sales),
        performance_score=min(100, round(contacted * 2 + booked * 10)),
    )


def recent_activity(
    leads: Sequence[Mapping[str, Any]],
    sales: Sequence[Mapping[str, Any]],
    limit: int = 5,
) -> List[ActivityItem]:
    """Latest contacted leads and latest sales, newest first."""
    contacted = sorted(
        (lead for lead in leads if lead.get("last_contacted")),
        key=lambda lead: timestamp_sort_key(lead["last_contacted"]),
        reverse=True,
    )[:3]
    latest_sales = sorted(
        sales,
        key=lambda sale: timestamp_sort_key(sale.get("created_date")),
        reverse=True,
    )[:3]

    items = [
        ActivityItem(
            type="lead",
            title=f"Contacted {lead.get('company_name')}",
            subtitle=f"Status: {lead.get('status')}",
            date=str(lead["last_contacted"]),
            status=lead.get("status"),
        )
        for lead in contacted
    ]
    items.extend(
        ActivityItem(
            type="sale",
            title=f"Sale: {sale.get('client_name')}",
            subtitle=f"£{sale.get('sale_amount')}",
            date=str(sale.get("created_date") or ""),
            status="completed",
            amount=sale.get("sale_amount"),
        )
        for sale in latest_sales
    )
    items.sort(key=lambda item: timestamp_sort_key(item.date), reverse=True)
    return items[:limit]


class DashboardService:
    """Loads everything the dashboard shows in one concurrent fan-out."""

    def __init__(self, store: RowStore):
        self.leads = EntityRepository(store, Tables.LEADS)
        self.sales = EntityRepository(store, Tables.SALES)
        self.announcements = EntityRepository(store, Tables.ANNOUNCEMENTS)

    async def load(self, user: CurrentUser) -> DashboardView:
        """Build the dashboard for ``user``.

        Either every load succeeds or the view is empty; stats are never
        computed from a partial load.
        """
        try:
            leads, sales, announcements = await load_all(
                self.leads.filter({"assigned_to": user.email}),
                self.sales.filter({"rep_email": user.email}),
                self.announcements.filter({"is_active": True}, "-created_date"),
            )
        except BackendError as e:
            LOGGER.error(f"Error loading dashboard data for {user.email}: {e}", exc_info=True)
            return DashboardView(user=_user_summary(user), stats=DashboardStats())

        return DashboardView(
            user=_user_summary(user),
            stats=dashboard_stats(leads, sales),
            recent_activity=recent_activity(leads, sales),
            announcements=announcements,
        )


def _user_summary(user: CurrentUser) -> Dict[str, Any]:
    return {"id": user.id, "email": user.email, "full_name": user.full_name, "role": user.role}

