"""Row store lifecycle and the FastAPI dependency that hands it out."""

from typing import Optional

from app.core.config import Settings, settings
from app.core.exceptions import ConfigurationError
from app.database.postgrest import PostgrestStore
from app.database.sql_store import SqlStore, create_engine_from_settings
from app.database.store import RowStore
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

_store: Optional[RowStore] = None


def build_store(app_settings: Settings) -> RowStore:
    """Create the RowStore selected by STORE_BACKEND.

    Raises:
        ConfigurationError: If the PostgREST backend is selected without Supabase credentials
    """
    if app_settings.store_backend == "sql":
        LOGGER.info("Using SQL row store")
        return SqlStore(create_engine_from_settings(app_settings.db))

    supabase = app_settings.supabase
    api_key = supabase.service_role_key or supabase.anon_key
    if not supabase.url or not api_key:
        raise ConfigurationError("SUPABASE_URL and a Supabase API key are required for the PostgREST store")

    LOGGER.info(f"Using PostgREST row store at {supabase.rest_url}")
    return PostgrestStore(
        base_url=supabase.rest_url,
        api_key=api_key,
        timeout=app_settings.http_timeout,
    )


async def init_store(app_settings: Settings = settings) -> RowStore:
    """Open the process-wide store, creating local tables when asked to."""
    global _store
    if _store is None:
        _store = build_store(app_settings)
        if isinstance(_store, SqlStore) and app_settings.db.create_tables:
            await _store.create_tables()
    return _store


async def close_store() -> None:
    global _store
    if _store is not None:
        await _store.close()
        _store = None


async def get_store() -> RowStore:
    """FastAPI dependency for the shared row store.

    Returns:
        RowStore: The store opened at startup (opened lazily if needed)
    """
    return await init_store()
