"""Tests for admin panel figures and user management."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import BackendError
from app.repositories.entity_repository import Tables
from app.services.admin_service import (
    AdminService,
    admin_stats,
    conversion_rate,
    rep_performance,
)

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)

USERS = [
    {"email": "admin@x.com", "role": "admin", "full_name": "Admin"},
    {"email": "a@x.com", "role": "user", "full_name": "Ann"},
    {"email": "b@x.com", "role": "user", "full_name": "Ben"},
    {"email": "c@x.com", "role": "user", "full_name": None},
    {"email": "d@x.com", "role": "user", "full_name": "Dee"},
]


def sale(rep: str, amount: float, commission: float, created: str, paid: bool = False) -> dict:
    return {
        "rep_email": rep,
        "sale_amount": amount,
        "commission_amount": commission,
        "commission_paid": paid,
        "created_date": created,
    }


class TestFormulas:
    def test_conversion_rate(self) -> None:
        assert conversion_rate(1, 3) == 33.3
        assert conversion_rate(0, 5) == 0
        assert conversion_rate(4, 0) == 0

    def test_rep_performance_skips_admins_and_sorts_by_commission(self) -> None:
        sales = [
            sale("a@x.com", 100, 10, "2024-03-01"),
            sale("b@x.com", 500, 50, "2024-03-01"),
            sale("b@x.com", 100, 10, "2024-03-01"),
        ]
        leads = [{"assigned_to": "a@x.com"}, {"assigned_to": "a@x.com"}, {"assigned_to": "admin@x.com"}]

        performance = rep_performance(USERS, leads, sales)

        assert [rep.email for rep in performance][:2] == ["b@x.com", "a@x.com"]
        assert len(performance) == 4
        assert performance[0].total_commission == 60
        assert performance[0].total_sales == 2
        assert performance[1].total_leads == 2

    def test_admin_stats(self) -> None:
        sales = [
            sale("a@x.com", 100, 10, "2024-03-09T00:00:00+00:00"),
            sale("b@x.com", 300, 30, "2024-02-01T00:00:00+00:00", paid=True),
            sale("c@x.com", 50, 5, "2024-03-08T00:00:00+00:00"),
            sale("d@x.com", 10, 1, "2024-03-08T00:00:00+00:00"),
        ]
        leads = [{"assigned_to": "a@x.com", "created_date": "2024-03-05T00:00:00+00:00"}] * 8

        stats = admin_stats(USERS, leads, sales, now=NOW)

        assert stats.total_revenue == 460
        assert stats.recent_sales == 3
        assert stats.recent_leads == 8
        assert stats.conversion_rate == 50.0
        assert [rep.email for rep in stats.top_performers] == ["b@x.com", "a@x.com", "c@x.com"]
        assert stats.total_commission_owed == 16


class TestAdminService:
    @pytest.mark.asyncio
    async def test_overview_counts(self, memory_store) -> None:
        memory_store.seed(Tables.USERS, *USERS)
        memory_store.seed(Tables.LEAD_REQUESTS, {"status": "pending"}, {"status": "approved"})
        memory_store.seed(Tables.SUPPORT_TICKETS, {"status": "open"}, {"status": "resolved"})
        memory_store.seed(Tables.SALES, sale("a@x.com", 100, 10, "2024-03-01"))

        overview = await AdminService(memory_store).overview()

        assert overview.total_users == 5
        assert overview.total_leads == 0
        assert overview.pending_requests == 1
        assert overview.open_tickets == 1
        assert overview.total_sales == 1
        assert overview.unpaid_commissions == 10

    @pytest.mark.asyncio
    async def test_overview_fails_as_a_whole(self, make_memory_store) -> None:
        store = make_memory_store(failing=[Tables.SUPPORT_TICKETS])

        with pytest.raises(BackendError):
            await AdminService(store).overview()

    @pytest.mark.asyncio
    async def test_stats_degrade_to_empty(self, make_memory_store) -> None:
        store = make_memory_store(failing=[Tables.SALES])

        stats = await AdminService(store).stats(now=NOW)

        assert stats.total_revenue == 0
        assert stats.top_performers == []

    @pytest.mark.asyncio
    async def test_update_user_ignores_unset_fields(self, memory_store) -> None:
        (user,) = memory_store.seed(Tables.USERS, {"email": "a@x.com", "role": "user", "full_name": "Ann"})

        updated = await AdminService(memory_store).update_user(user["id"], {"role": "admin", "full_name": None})

        assert updated["role"] == "admin"
        assert updated["full_name"] == "Ann"

    @pytest.mark.asyncio
    async def test_invite_user_delegates_to_auth_client(self, memory_store) -> None:
        auth_client = AsyncMock()
        auth_client.invite_user.return_value = {"email": "new@x.com"}

        result = await AdminService(memory_store, auth_client).invite_user("new@x.com")

        auth_client.invite_user.assert_awaited_once_with("new@x.com")
        assert result == {"email": "new@x.com"}

    @pytest.mark.asyncio
    async def test_invite_user_without_auth_client(self, memory_store) -> None:
        with pytest.raises(BackendError):
            await AdminService(memory_store).invite_user("new@x.com")
