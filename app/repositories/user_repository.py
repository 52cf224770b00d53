"""Repository for user profile rows.

Profiles live in the ``users`` collection and are keyed logically by email;
authentication identities live in the auth service and are merged in by the
session resolver.
"""

from typing import Optional

from app.database.store import Row, RowStore
from app.repositories.entity_repository import EntityRepository, Tables


class UserRepository(EntityRepository):
    """Repository for User profile operations."""

    def __init__(self, store: RowStore):
        super().__init__(store, Tables.USERS)

    async def get_by_email(self, email: str) -> Optional[Row]:
        """Get a profile by exact email match.

        Args:
            email: User email address

        Returns:
            The first matching profile row or None if there is none
        """
        rows = await self.filter({"email": email})
        return rows[0] if rows else None
