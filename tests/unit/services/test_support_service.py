"""Tests for support ticket submission and handling."""

import pytest

from app.core.exceptions import ValidationError
from app.repositories.entity_repository import Tables
from app.services.support_service import SupportService


@pytest.mark.asyncio
async def test_submit_defaults_priority_and_opens_ticket(memory_store, rep_user) -> None:
    ticket = await SupportService(memory_store).submit(rep_user, {"subject": " CRM slow ", "message": "Very slow"})

    assert ticket["subject"] == "CRM slow"
    assert ticket["priority"] == "medium"
    assert ticket["status"] == "open"
    assert ticket["submitted_by"] == rep_user.email


@pytest.mark.asyncio
@pytest.mark.parametrize("values", [{"subject": "", "message": "x"}, {"subject": "x", "message": "   "}, {}])
async def test_submit_requires_subject_and_message(memory_store, rep_user, values) -> None:
    with pytest.raises(ValidationError):
        await SupportService(memory_store).submit(rep_user, values)

    assert memory_store.tables.get(Tables.SUPPORT_TICKETS, []) == []


@pytest.mark.asyncio
async def test_my_tickets_only_returns_own(memory_store, rep_user) -> None:
    memory_store.seed(
        Tables.SUPPORT_TICKETS,
        {"subject": "Mine", "submitted_by": rep_user.email},
        {"subject": "Theirs", "submitted_by": "other@byteblitz.co.uk"},
    )

    tickets = await SupportService(memory_store).my_tickets(rep_user)

    assert [t["subject"] for t in tickets] == ["Mine"]


@pytest.mark.asyncio
async def test_my_tickets_degrades_to_empty(make_memory_store, rep_user) -> None:
    store = make_memory_store(failing=[Tables.SUPPORT_TICKETS])

    assert await SupportService(store).my_tickets(rep_user) == []


@pytest.mark.asyncio
async def test_resolving_stamps_resolved_at(memory_store) -> None:
    (ticket,) = memory_store.seed(Tables.SUPPORT_TICKETS, {"subject": "x", "status": "open"})
    service = SupportService(memory_store)

    in_progress = await service.set_status(ticket["id"], "in_progress")
    assert "resolved_at" not in in_progress

    resolved = await service.set_status(ticket["id"], "resolved")
    assert resolved["status"] == "resolved"
    assert resolved["resolved_at"]


@pytest.mark.asyncio
async def test_respond_resolves_ticket(memory_store) -> None:
    (ticket,) = memory_store.seed(Tables.SUPPORT_TICKETS, {"subject": "x", "status": "open"})

    answered = await SupportService(memory_store).respond(ticket["id"], "Fixed now")

    assert answered["admin_response"] == "Fixed now"
    assert answered["status"] == "resolved"
    assert answered["resolved_at"]


@pytest.mark.asyncio
async def test_blank_response_is_rejected(memory_store) -> None:
    with pytest.raises(ValidationError):
        await SupportService(memory_store).respond("any", "  ")
