"""Database module: row store contract, backends and table models."""

from app.database.base import Base
from app.database.postgrest import PostgrestStore
from app.database.session import build_store, close_store, get_store, init_store
from app.database.sql_store import SqlStore, create_engine_from_settings
from app.database.store import (
    OrderBy,
    Predicate,
    Row,
    RowStore,
    criteria_to_predicates,
    parse_order_spec,
)

__all__ = [
    "Base",
    "OrderBy",
    "Predicate",
    "PostgrestStore",
    "Row",
    "RowStore",
    "SqlStore",
    "build_store",
    "close_store",
    "create_engine_from_settings",
    "criteria_to_predicates",
    "get_store",
    "init_store",
    "parse_order_spec",
]
