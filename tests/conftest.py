"""Pytest configuration and shared fixtures."""

import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pytest
import pytest_asyncio

# Set required environment variables for testing BEFORE importing app
os.environ.setdefault("STORE_BACKEND", "sql")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.exceptions import BackendError
from app.database.sql_store import SqlStore
from app.database.store import OrderBy, Predicate, Row, RowStore
from app.main import app
from app.schemas.auth import CurrentUser


class MemoryStore(RowStore):
    """Dict-backed RowStore for service and API tests.

    Tables named in ``failing`` raise ``BackendError`` on every call.
    """

    def __init__(self, failing: Sequence[str] = ()):
        self.tables: Dict[str, List[Row]] = {}
        self.failing = set(failing)
        self._clock = 0

    def _check(self, table: str) -> List[Row]:
        if table in self.failing:
            raise BackendError(f"{table} is unavailable", status_code=503, detail="unavailable")
        return self.tables.setdefault(table, [])

    def seed(self, table: str, *rows: Mapping[str, Any]) -> List[Row]:
        seeded = []
        for row in rows:
            self._clock += 1
            stored = {"id": str(uuid.uuid4()), "created_date": f"2024-01-01T00:00:{self._clock:02d}", **row}
            self.tables.setdefault(table, []).append(stored)
            seeded.append(stored)
        return seeded

    async def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        order: Optional[OrderBy] = None,
    ) -> List[Row]:
        rows = [
            dict(row)
            for row in self._check(table)
            if all(row.get(p.column) is None if p.is_null else row.get(p.column) == p.value for p in filters)
        ]
        if order is not None:
            rows.sort(key=lambda row: str(row.get(order.column) or ""), reverse=order.descending)
        return rows

    async def insert(self, table: str, values: Mapping[str, Any]) -> Optional[Row]:
        rows = self._check(table)
        row = {"id": str(uuid.uuid4()), "created_date": datetime.now(timezone.utc).isoformat(), **values}
        rows.append(row)
        return dict(row)

    async def update(self, table: str, row_id: Any, values: Mapping[str, Any]) -> Optional[Row]:
        for row in self._check(table):
            if row["id"] == row_id:
                row.update(values)
                return dict(row)
        return None

    async def delete(self, table: str, row_id: Any) -> None:
        rows = self._check(table)
        rows[:] = [row for row in rows if row["id"] != row_id]


@pytest.fixture
def memory_store() -> MemoryStore:
    """Create an empty in-memory row store.

    Returns:
        MemoryStore: Store with no rows
    """
    return MemoryStore()


@pytest.fixture
def make_memory_store():
    """Factory for in-memory stores, optionally with failing tables."""
    return MemoryStore


@pytest_asyncio.fixture
async def sql_store():
    """Create a SqlStore over a fresh in-memory SQLite database.

    Yields:
        SqlStore: Store with every table created
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    store = SqlStore(engine)
    await store.create_tables()
    yield store
    await store.close()


@pytest.fixture
def rep_user() -> CurrentUser:
    return CurrentUser(id="rep-1", email="rep@byteblitz.co.uk", role="user", full_name="Riley Rep", commission_rate=0.1)


@pytest.fixture
def admin_user() -> CurrentUser:
    return CurrentUser(id="admin-1", email="admin@byteblitz.co.uk", role="admin", full_name="Alex Admin")


@pytest.fixture
def test_client() -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}
