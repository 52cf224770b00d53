"""Tests for the resource library."""

import pytest

from app.repositories.entity_repository import Tables
from app.services.resource_service import ResourceService, distinct_categories, search_resources, split_tags

RESOURCES = [
    {"title": "Cold open", "description": "Opening lines", "category": "cold_call_scripts", "tags": ["phone"]},
    {"title": "Follow up", "description": "Second email", "category": "email_templates", "tags": ["Healthcare"]},
    {"title": "Pricing pushback", "description": None, "category": "objection_handling", "tags": None},
]


class TestResourceSearch:
    def test_search_is_case_insensitive_over_title_description_and_tags(self) -> None:
        assert [r["title"] for r in search_resources(RESOURCES, "COLD")] == ["Cold open"]
        assert [r["title"] for r in search_resources(RESOURCES, "second")] == ["Follow up"]
        assert [r["title"] for r in search_resources(RESOURCES, "healthcare")] == ["Follow up"]

    def test_category_filter(self) -> None:
        assert [r["title"] for r in search_resources(RESOURCES, category="objection_handling")] == ["Pricing pushback"]
        assert len(search_resources(RESOURCES, category="all")) == 3

    def test_distinct_categories_in_first_seen_order(self) -> None:
        assert distinct_categories(RESOURCES + RESOURCES[:1]) == [
            "cold_call_scripts",
            "email_templates",
            "objection_handling",
        ]

    def test_split_tags(self) -> None:
        assert split_tags("healthcare, opening, ,closing") == ["healthcare", "opening", "closing"]
        assert split_tags(["a", " b "]) == ["a", "b"]
        assert split_tags(None) == []


class TestResourceService:
    @pytest.mark.asyncio
    async def test_browse_hides_inactive_resources(self, memory_store) -> None:
        memory_store.seed(
            Tables.RESOURCES,
            {"title": "Live", "category": "training", "is_active": True},
            {"title": "Retired", "category": "other", "is_active": False},
        )

        view = await ResourceService(memory_store).browse()

        assert [r["title"] for r in view.resources] == ["Live"]
        assert view.categories == ["training"]

    @pytest.mark.asyncio
    async def test_add_splits_comma_tags(self, memory_store) -> None:
        created = await ResourceService(memory_store).add(
            {"title": "Script", "category": "cold_call_scripts", "tags": "opening, closing"}
        )

        assert created["tags"] == ["opening", "closing"]
        assert created["is_active"] is True
