"""Generic entity accessor shared by every Staff Hub collection.

Every collection gets the same five operations; there is no per-table
logic here. Ordering uses the ``"-column"`` convention and filtering uses a
criteria mapping AND-ed across keys, where ``None`` means IS NULL.
"""

from typing import Any, List, Mapping, Optional

from app.core.exceptions import BackendError
from app.database.store import Row, RowStore, criteria_to_predicates, parse_order_spec
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class Tables:
    """Names of the collections the application reads and writes."""

    LEADS = "leads"
    LEAD_REQUESTS = "lead_requests"
    SALES = "sales"
    RESOURCES = "resources"
    ANNOUNCEMENTS = "announcements"
    SUPPORT_TICKETS = "support_tickets"
    APP_CONFIGURATIONS = "app_configurations"
    USERS = "users"


class EntityRepository:
    """Uniform CRUD interface over one named collection."""

    def __init__(self, store: RowStore, table: str):
        """Initialize the repository.

        Args:
            store: Backing row store
            table: Name of the collection this repository manages
        """
        self.store = store
        self.table = table
        self.logger = LOGGER

    async def list(self, order: Optional[str] = None) -> List[Row]:
        """Get every row in the collection.

        Args:
            order: Column to sort on, prefixed with ``-`` for descending

        Returns:
            List of rows, empty when the collection is empty
        """
        return await self.filter(None, order)

    async def filter(
        self,
        criteria: Optional[Mapping[str, Any]] = None,
        order: Optional[str] = None,
    ) -> List[Row]:
        """Get the rows matching every key/value pair in ``criteria``.

        Args:
            criteria: Column to value mapping; a None value matches NULL
            order: Column to sort on, prefixed with ``-`` for descending

        Returns:
            List of matching rows, empty when nothing matches
        """
        try:
            rows = await self.store.select(
                self.table,
                filters=criteria_to_predicates(criteria),
                order=parse_order_spec(order),
            )
            return rows or []
        except BackendError as e:
            self.logger.error(f"Error retrieving {self.table} rows: {e}", exc_info=True)
            raise

    async def create(self, values: Mapping[str, Any]) -> Optional[Row]:
        """Insert a new row.

        Args:
            values: Column values for the new row

        Returns:
            The inserted row with store-assigned fields, or None if the store
            accepted the insert but returned no row
        """
        try:
            row = await self.store.insert(self.table, values)
        except BackendError as e:
            self.logger.error(f"Error creating {self.table} row: {e}", exc_info=True)
            raise

        if row is None:
            self.logger.warning(f"Insert into {self.table} returned no row")
        else:
            self.logger.info(f"Created {self.table} row {row.get('id')}")
        return row

    async def update(self, id: Any, values: Mapping[str, Any]) -> Optional[Row]:
        """Update the row with the given primary key.

        Args:
            id: Primary key of the row
            values: Columns to change

        Returns:
            The updated row, or None if no row has that id
        """
        try:
            row = await self.store.update(self.table, id, values)
        except BackendError as e:
            self.logger.error(f"Error updating {self.table} row {id}: {e}", exc_info=True)
            raise

        if row is None:
            self.logger.info(f"No {self.table} row {id} to update")
        else:
            self.logger.info(f"Updated {self.table} row {id}")
        return row

    async def delete(self, id: Any) -> bool:
        """Delete the row with the given primary key.

        Deleting an id that does not exist is not an error.

        Returns:
            True once the store has accepted the delete
        """
        try:
            await self.store.delete(self.table, id)
        except BackendError as e:
            self.logger.error(f"Error deleting {self.table} row {id}: {e}", exc_info=True)
            raise

        self.logger.info(f"Deleted {self.table} row {id}")
        return True


def create_entity_repository(table: str, store: RowStore) -> EntityRepository:
    """Build the accessor for a named collection."""
    return EntityRepository(store, table)

