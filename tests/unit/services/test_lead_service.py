"""Tests for lead views, CSV export and the lead request workflow."""

from datetime import date

import pytest

from app.core.exceptions import ValidationError
from app.repositories.entity_repository import Tables
from app.services.lead_service import LeadService, export_filename, filter_leads, leads_to_csv


class TestCsvExport:
    def test_header_and_quoted_fields(self) -> None:
        csv_text = leads_to_csv(
            [
                {
                    "company_name": "Acme Ltd",
                    "contact_name": "Jo Bloggs",
                    "email": "jo@acme.test",
                    "phone": None,
                    "industry": "retail",
                    "region": "wales",
                    "status": "contacted",
                }
            ]
        )

        lines = csv_text.split("\n")
        assert lines[0] == "Company,Contact,Email,Phone,Industry,Region,Status,Notes"
        assert lines[1] == '"Acme Ltd","Jo Bloggs","jo@acme.test","","retail","wales","contacted",""'

    def test_embedded_quotes_are_doubled(self) -> None:
        csv_text = leads_to_csv([{"company_name": "Acme", "notes": 'He said "hi"'}])

        assert csv_text.split("\n")[1].endswith('"He said ""hi"""')

    def test_one_line_per_lead_in_input_order(self) -> None:
        csv_text = leads_to_csv(
            [
                {"company_name": "Acme", "contact_name": "Jo", "status": "booked"},
                {"company_name": "Globex", "contact_name": "Sam", "status": "assigned"},
            ]
        )

        assert csv_text.split("\n")[1:] == [
            '"Acme","Jo","","","","","booked",""',
            '"Globex","Sam","","","","","assigned",""',
        ]

    def test_no_leads_is_header_only(self) -> None:
        assert leads_to_csv([]) == "Company,Contact,Email,Phone,Industry,Region,Status,Notes"

    def test_filename(self) -> None:
        assert export_filename(date(2024, 5, 7)) == "leads-2024-05-07.csv"


class TestFilters:
    def test_all_disables_a_filter(self) -> None:
        leads = [
            {"status": "booked", "industry": "retail", "region": "wales"},
            {"status": "assigned", "industry": "retail", "region": "scotland"},
        ]

        assert len(filter_leads(leads)) == 2
        assert filter_leads(leads, status="booked") == [leads[0]]
        assert filter_leads(leads, industry="retail", region="scotland") == [leads[1]]
        assert filter_leads(leads, industry="finance") == []


class TestLeadService:
    @pytest.mark.asyncio
    async def test_status_change_stamps_last_contacted(self, memory_store) -> None:
        (lead,) = memory_store.seed(Tables.LEADS, {"company_name": "Acme", "status": "assigned"})

        updated = await LeadService(memory_store).update_lead(
            lead["id"], {"status": "contacted", "notes": "Left voicemail"}, today=date(2024, 6, 1)
        )

        assert updated["status"] == "contacted"
        assert updated["last_contacted"] == "2024-06-01"
        assert updated["notes"] == "Left voicemail"

    @pytest.mark.asyncio
    async def test_notes_only_update_keeps_last_contacted(self, memory_store) -> None:
        (lead,) = memory_store.seed(
            Tables.LEADS, {"company_name": "Acme", "status": "contacted", "last_contacted": "2024-01-01"}
        )

        updated = await LeadService(memory_store).update_lead(lead["id"], {"status": "contacted", "notes": "x"})

        assert updated["last_contacted"] == "2024-01-01"

    @pytest.mark.asyncio
    async def test_update_missing_lead_returns_none(self, memory_store) -> None:
        assert await LeadService(memory_store).update_lead("missing", {"status": "booked"}) is None

    @pytest.mark.asyncio
    async def test_request_leads_records_requester(self, memory_store, rep_user) -> None:
        created = await LeadService(memory_store).request_leads(
            rep_user, {"industry": "retail", "region": "wales", "quantity": 20}
        )

        assert created["requested_by"] == rep_user.email
        assert created["status"] == "pending"

    @pytest.mark.asyncio
    async def test_rep_view_filters_leads_but_counts_all(self, memory_store, rep_user) -> None:
        memory_store.seed(
            Tables.LEADS,
            {"company_name": "A", "assigned_to": rep_user.email, "status": "booked"},
            {"company_name": "B", "assigned_to": rep_user.email, "status": "assigned"},
        )

        view = await LeadService(memory_store).rep_view(rep_user, status="booked")

        assert [lead["company_name"] for lead in view.leads] == ["A"]
        assert view.total == 2

    @pytest.mark.asyncio
    async def test_export_csv(self, memory_store, rep_user) -> None:
        memory_store.seed(Tables.LEADS, {"company_name": "A", "assigned_to": rep_user.email, "status": "booked"})

        export = await LeadService(memory_store).export_csv(rep_user, today=date(2024, 1, 2))

        assert export.filename == "leads-2024-01-02.csv"
        assert '"A"' in export.content

    @pytest.mark.asyncio
    async def test_admin_created_leads_start_assigned(self, memory_store) -> None:
        created = await LeadService(memory_store).create_lead({"company_name": "Acme", "status": "booked"})

        assert created["status"] == "assigned"

    @pytest.mark.asyncio
    async def test_request_action_uses_default_note(self, memory_store) -> None:
        (request,) = memory_store.seed(Tables.LEAD_REQUESTS, {"status": "pending"})

        updated = await LeadService(memory_store).act_on_request(request["id"], "approved")

        assert updated["status"] == "approved"
        assert updated["admin_notes"] == "Request approved - leads will be assigned shortly"

    @pytest.mark.asyncio
    async def test_unknown_request_action_is_rejected(self, memory_store) -> None:
        with pytest.raises(ValidationError):
            await LeadService(memory_store).act_on_request("any", "escalated")

    @pytest.mark.asyncio
    async def test_assignable_reps_are_role_user(self, memory_store) -> None:
        memory_store.seed(Tables.USERS, {"email": "a@x.com", "role": "admin"}, {"email": "r@x.com", "role": "user"})

        reps = await LeadService(memory_store).assignable_reps()

        assert [rep["email"] for rep in reps] == ["r@x.com"]
