import pytest

from app.repositories.entity_repository import Tables
from app.services.announcement_service import AnnouncementService


@pytest.mark.asyncio
async def test_active_returns_only_active_newest_first(memory_store) -> None:
    memory_store.seed(
        Tables.ANNOUNCEMENTS,
        {"title": "Old", "is_active": True},
        {"title": "Hidden", "is_active": False},
        {"title": "New", "is_active": True},
    )

    active = await AnnouncementService(memory_store).active()

    assert [a["title"] for a in active] == ["New", "Old"]


@pytest.mark.asyncio
async def test_toggle_flips_is_active(memory_store) -> None:
    (announcement,) = memory_store.seed(Tables.ANNOUNCEMENTS, {"title": "x", "is_active": True})
    service = AnnouncementService(memory_store)

    assert (await service.toggle(announcement["id"]))["is_active"] is False
    assert (await service.toggle(announcement["id"]))["is_active"] is True


@pytest.mark.asyncio
async def test_toggle_missing_returns_none(memory_store) -> None:
    assert await AnnouncementService(memory_store).toggle("missing") is None


@pytest.mark.asyncio
async def test_delete_removes_row(memory_store) -> None:
    (announcement,) = memory_store.seed(Tables.ANNOUNCEMENTS, {"title": "x"})

    assert await AnnouncementService(memory_store).delete(announcement["id"]) is True
    assert memory_store.tables[Tables.ANNOUNCEMENTS] == []


@pytest.mark.asyncio
async def test_all_degrades_to_empty(make_memory_store) -> None:
    store = make_memory_store(failing=[Tables.ANNOUNCEMENTS])

    assert await AnnouncementService(store).all() == []
