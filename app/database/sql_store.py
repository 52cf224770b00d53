"""Row store that speaks SQL directly through SQLAlchemy Core.

Used for direct Postgres connections to the hosted database and for local
SQLite databases in development and tests.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import Date, DateTime, Table, delete, insert, select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.config import DatabaseSettings
from app.core.exceptions import BackendError
from app.database.base import Base
from app.database.models import new_id
from app.database.store import OrderBy, Predicate, Row, RowStore
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


def create_engine_from_settings(db_settings: DatabaseSettings) -> AsyncEngine:
    """Create an async engine suited to the configured database URL."""
    url = db_settings.connection_url
    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=db_settings.echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(
        url,
        pool_size=db_settings.pool_size,
        max_overflow=db_settings.max_overflow,
        echo=db_settings.echo,
        pool_pre_ping=True,
        # Disable prepared statement cache for PgBouncer compatibility
        connect_args={"statement_cache_size": 0},
    )


def _parse_temporal(column_type: Any, value: Any) -> Any:
    """Coerce ISO strings into the date/datetime objects the driver expects."""
    if not isinstance(value, str):
        return value
    if isinstance(column_type, DateTime):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(column_type, Date):
        return date.fromisoformat(value[:10])
    return value


def _render(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class SqlStore(RowStore):
    """RowStore over an async SQLAlchemy engine and the declarative metadata."""

    def __init__(self, engine: AsyncEngine):
        """Initialize the store.

        Args:
            engine: SQLAlchemy async engine
        """
        self.engine = engine
        self.metadata = Base.metadata

    async def create_tables(self) -> None:
        """Create all tables that don't exist yet, without dropping anything."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(self.metadata.create_all)
            LOGGER.info("Database tables created/verified successfully")
        except SQLAlchemyError as e:
            LOGGER.error("Failed to create database tables", exc_info=True)
            raise BackendError(f"Failed to create tables: {e}", original_error=e) from e

    async def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        order: Optional[OrderBy] = None,
    ) -> List[Row]:
        tbl = self._table(table)
        stmt = select(tbl)
        for predicate in filters:
            column = self._column(tbl, predicate.column)
            if predicate.is_null:
                stmt = stmt.where(column.is_(None))
            else:
                stmt = stmt.where(column == _parse_temporal(column.type, predicate.value))
        if order is not None:
            column = self._column(tbl, order.column)
            stmt = stmt.order_by(column.desc() if order.descending else column.asc())

        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt)
                return [self._to_row(r) for r in result]
        except SQLAlchemyError as e:
            raise self._backend_error("select", table, e) from e

    async def insert(self, table: str, values: Mapping[str, Any]) -> Optional[Row]:
        tbl = self._table(table)
        payload = self._coerce(tbl, values)
        payload.setdefault("id", new_id())

        try:
            async with self.engine.begin() as conn:
                await conn.execute(insert(tbl).values(**payload))
                result = await conn.execute(select(tbl).where(tbl.c.id == payload["id"]))
                row = result.first()
        except SQLAlchemyError as e:
            raise self._backend_error("insert", table, e) from e

        LOGGER.debug(f"Inserted row {payload['id']} into {table}")
        return self._to_row(row) if row is not None else None

    async def update(self, table: str, row_id: Any, values: Mapping[str, Any]) -> Optional[Row]:
        tbl = self._table(table)
        payload = self._coerce(tbl, values)
        payload.pop("id", None)

        try:
            async with self.engine.begin() as conn:
                if payload:
                    await conn.execute(update(tbl).where(tbl.c.id == row_id).values(**payload))
                result = await conn.execute(select(tbl).where(tbl.c.id == row_id))
                row = result.first()
        except SQLAlchemyError as e:
            raise self._backend_error("update", table, e) from e

        return self._to_row(row) if row is not None else None

    async def delete(self, table: str, row_id: Any) -> None:
        tbl = self._table(table)
        try:
            async with self.engine.begin() as conn:
                await conn.execute(delete(tbl).where(tbl.c.id == row_id))
        except SQLAlchemyError as e:
            raise self._backend_error("delete", table, e) from e

    async def health_check(self) -> Dict[str, Any]:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "healthy"}
        except SQLAlchemyError as e:
            LOGGER.error("Database health check failed", exc_info=True)
            return {"status": "unhealthy", "error": str(e)}

    async def close(self) -> None:
        await self.engine.dispose()
        LOGGER.info("Database connection closed")

    def _table(self, name: str) -> Table:
        tbl = self.metadata.tables.get(name)
        if tbl is None:
            raise BackendError(f"Unknown table: {name}", status_code=404, detail={"table": name})
        return tbl

    @staticmethod
    def _column(tbl: Table, name: str):
        if name not in tbl.c:
            raise BackendError(
                f"Unknown column {name} on {tbl.name}",
                status_code=400,
                detail={"table": tbl.name, "column": name},
            )
        return tbl.c[name]

    def _coerce(self, tbl: Table, values: Mapping[str, Any]) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for key, value in values.items():
            column = self._column(tbl, key)
            try:
                payload[key] = _parse_temporal(column.type, value)
            except ValueError as e:
                raise BackendError(
                    f"Invalid value for {tbl.name}.{key}: {value!r}",
                    status_code=400,
                    detail={"column": key, "value": value},
                    original_error=e,
                ) from e
        return payload

    @staticmethod
    def _to_row(result_row: Any) -> Row:
        return {key: _render(value) for key, value in result_row._mapping.items()}

    @staticmethod
    def _backend_error(operation: str, table: str, error: SQLAlchemyError) -> BackendError:
        detail = str(getattr(error, "orig", None) or error)
        status_code = 409 if isinstance(error, IntegrityError) else None
        LOGGER.error(
            f"SQL {operation} on {table} failed: {detail}",
            exc_info=True,
            extra={"table": table},
        )
        return BackendError(
            f"Store rejected {operation} on {table}: {detail}",
            status_code=status_code,
            detail=detail,
            original_error=error,
        )
