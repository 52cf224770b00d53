"""Team announcements."""

from typing import Any, List, Mapping, Optional

from app.core.exceptions import BackendError
from app.database.store import Row, RowStore
from app.repositories.entity_repository import EntityRepository, Tables
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class AnnouncementService:
    def __init__(self, store: RowStore):
        self.announcements = EntityRepository(store, Tables.ANNOUNCEMENTS)

    async def active(self) -> List[Row]:
        """Active announcements, newest first."""
        try:
            return await self.announcements.filter({"is_active": True}, "-created_date")
        except BackendError as e:
            LOGGER.error(f"Error loading announcements: {e}", exc_info=True)
            return []

    async def all(self) -> List[Row]:
        try:
            return await self.announcements.list("-created_date")
        except BackendError as e:
            LOGGER.error(f"Error loading announcements: {e}", exc_info=True)
            return []

    async def create(self, values: Mapping[str, Any]) -> Optional[Row]:
        return await self.announcements.create(values)

    async def update(self, announcement_id: Any, values: Mapping[str, Any]) -> Optional[Row]:
        return await self.announcements.update(announcement_id, values)

    async def delete(self, announcement_id: Any) -> bool:
        return await self.announcements.delete(announcement_id)

    async def toggle(self, announcement_id: Any) -> Optional[Row]:
        """Flip ``is_active``.

        Returns:
            The updated announcement, or None if it no longer exists
        """
        current = await self.announcements.filter({"id": announcement_id})
        if not current:
            LOGGER.info(f"Announcement {announcement_id} not found, nothing to toggle")
            return None
        return await self.announcements.update(
            announcement_id, {"is_active": not current[0].get("is_active", True)}
        )
