"""Commission tracking for reps and commission payouts for admins."""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from app.core.exceptions import BackendError
from app.database.store import Row, RowStore
from app.repositories.entity_repository import EntityRepository, Tables
from app.repositories.user_repository import UserRepository
from app.schemas.auth import CurrentUser
from app.schemas.views import AdminCommissionsView, CommissionStats, CommissionsView
from app.utils.concurrency import load_all
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


def unpaid_commission_total(sales: Sequence[Mapping[str, Any]]) -> float:
    """Sum of commission on sales whose commission has not been paid.

    A missing commission amount counts as 0.
    """
    return sum(
        sale.get("commission_amount") or 0
        for sale in sales
        if not sale.get("commission_paid")
    )


def commission_stats(sales: Sequence[Mapping[str, Any]]) -> CommissionStats:
    total = sum(sale.get("commission_amount") or 0 for sale in sales)
    pending = unpaid_commission_total(sales)
    return CommissionStats(
        total_earned=total,
        pending_payout=pending,
        paid_out=total - pending,
        total_sales=len(sales),
    )


def index_users_by_email(users: Sequence[Mapping[str, Any]]) -> Dict[str, Mapping[str, Any]]:
    """Build the email to user lookup used to resolve rep names."""
    return {user["email"]: user for user in users if user.get("email")}


class CommissionService:
    """Commission summaries and payout bookkeeping."""

    def __init__(self, store: RowStore):
        self.sales = EntityRepository(store, Tables.SALES)
        self.users = UserRepository(store)

    async def rep_view(self, user: CurrentUser) -> CommissionsView:
        """Get the signed-in rep's sales and commission totals."""
        try:
            sales = await self.sales.filter({"rep_email": user.email}, "-created_date")
        except BackendError as e:
            LOGGER.error(f"Error loading commissions for {user.email}: {e}", exc_info=True)
            sales = []
        return CommissionsView(stats=commission_stats(sales), sales=sales)

    async def admin_view(self) -> AdminCommissionsView:
        """Get every sale with its rep's name, plus the unpaid total."""
        try:
            sales, users = await load_all(
                self.sales.list("-created_date"),
                self.users.list(),
            )
        except BackendError as e:
            LOGGER.error(f"Error loading commission data: {e}", exc_info=True)
            return AdminCommissionsView()

        users_by_email = index_users_by_email(users)
        enriched: List[Row] = []
        for sale in sales:
            rep = users_by_email.get(sale.get("rep_email"))
            rep_name = (rep.get("full_name") if rep else None) or sale.get("rep_email")
            enriched.append({**sale, "rep_name": rep_name})

        return AdminCommissionsView(sales=enriched, unpaid_total=unpaid_commission_total(sales))

    async def mark_paid(self, sale_id: Any) -> Optional[Row]:
        """Mark a sale's commission as paid out."""
        LOGGER.info(f"Marking commission paid for sale {sale_id}")
        return await self.sales.update(sale_id, {"commission_paid": True})
