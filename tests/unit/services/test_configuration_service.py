"""Tests for the configuration resolver and navigation helpers."""

import asyncio

import pytest

from app.repositories.entity_repository import EntityRepository, Tables
from app.services.configuration_service import (
    DEFAULT_APP_NAME,
    ConfigurationResolver,
    external_tools,
    navigation_items,
    resolve_lock,
    shell,
)


class TestConfigurationResolver:
    @pytest.mark.asyncio
    async def test_resolve_creates_default_once(self, sql_store) -> None:
        resolver = ConfigurationResolver(sql_store, lock=asyncio.Lock())

        first = await resolver.resolve()
        second = await resolver.resolve()

        rows = await EntityRepository(sql_store, Tables.APP_CONFIGURATIONS).list()
        assert len(rows) == 1
        assert first["id"] == second["id"]
        assert first["app_name"] == DEFAULT_APP_NAME
        assert [item["order"] for item in first["navigation_items"]] == [1, 2, 3, 4, 5]
        assert len(first["external_tools"]) == 5

    @pytest.mark.asyncio
    async def test_concurrent_first_resolves_insert_once(self, memory_store) -> None:
        resolver = ConfigurationResolver(memory_store, lock=asyncio.Lock())

        results = await asyncio.gather(*(resolver.resolve() for _ in range(5)))

        assert len(memory_store.tables[Tables.APP_CONFIGURATIONS]) == 1
        assert len({row["id"] for row in results}) == 1

    @pytest.mark.asyncio
    async def test_lowest_id_wins_when_several_exist(self, memory_store) -> None:
        memory_store.seed(Tables.APP_CONFIGURATIONS, {"id": "b", "app_name": "Second"}, {"id": "a", "app_name": "First"})
        resolver = ConfigurationResolver(memory_store, lock=asyncio.Lock())

        assert (await resolver.resolve())["app_name"] == "First"

    @pytest.mark.asyncio
    async def test_save_updates_effective_row(self, memory_store) -> None:
        memory_store.seed(Tables.APP_CONFIGURATIONS, {"id": "a", "app_name": "Old"})
        resolver = ConfigurationResolver(memory_store, lock=asyncio.Lock())

        saved = await resolver.save({"app_name": "New", "primary_color": "#000000"})

        assert saved["app_name"] == "New"
        assert len(memory_store.tables[Tables.APP_CONFIGURATIONS]) == 1

    @pytest.mark.asyncio
    async def test_resolvers_share_a_lock_per_store(self, memory_store, make_memory_store) -> None:
        assert resolve_lock(memory_store) is resolve_lock(memory_store)
        assert resolve_lock(memory_store) is not resolve_lock(make_memory_store())

        first = ConfigurationResolver(memory_store)
        second = ConfigurationResolver(memory_store)
        await asyncio.gather(first.resolve(), second.resolve())

        assert len(memory_store.tables[Tables.APP_CONFIGURATIONS]) == 1


class TestNavigation:
    def test_navigation_items_filter_and_sort(self) -> None:
        config = {
            "navigation_items": [
                {"title": "Support", "page": "Support", "order": 5},
                {"title": "Hidden", "page": "Leads", "is_active": False, "order": 0},
                {"title": "Unordered", "page": "Resources"},
                {"title": "Dashboard", "page": "Dashboard", "is_active": True, "order": 1},
            ]
        }

        titles = [item["title"] for item in navigation_items(config)]

        assert titles == ["Unordered", "Dashboard", "Support"]

    def test_missing_navigation_falls_back_to_defaults(self) -> None:
        assert [item["page"] for item in navigation_items({})] == [
            "Dashboard",
            "Leads",
            "Resources",
            "Commissions",
            "Support",
        ]

    def test_stored_empty_lists_stay_empty(self) -> None:
        config = {"navigation_items": [], "external_tools": []}

        assert navigation_items(config) == []
        assert external_tools(config) == []
        assert shell(config)["navigation_items"] == []

    def test_external_tools_drop_inactive(self) -> None:
        config = {
            "external_tools": [
                {"title": "On", "url": "https://on.example"},
                {"title": "Off", "url": "https://off.example", "is_active": False},
            ]
        }

        assert [tool["title"] for tool in external_tools(config)] == ["On"]

    def test_shell_applies_branding_fallbacks(self) -> None:
        view = shell({"app_name": "", "primary_color": "#111111"})

        assert view["app_name"] == DEFAULT_APP_NAME
        assert view["primary_color"] == "#111111"
        assert view["secondary_color"] == "#EC4899"
        assert view["company_phone"] == "07359 735508"
        assert view["navigation_items"][0]["url"] == "/Dashboard"
