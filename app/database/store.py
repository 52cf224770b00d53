"""Row store contract shared by every backing-store implementation.

A row store speaks in untyped rows (``dict`` of column name to JSON-like
value) and knows four operations: select with equality/null predicates and a
single-column ordering, insert returning the row, update-by-id returning the
row, and delete-by-id. Every failure reported by the backend is raised as
``BackendError``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

Row = Dict[str, Any]


@dataclass(frozen=True)
class Predicate:
    """Filter on one column.

    ``value is None`` means an IS NULL test, anything else an equality test.
    """

    column: str
    value: Any = None

    @property
    def is_null(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class OrderBy:
    """Single-column ordering."""

    column: str
    descending: bool = False


def parse_order_spec(order: Optional[str]) -> Optional[OrderBy]:
    """Translate an order string into an ``OrderBy``.

    ``"-created_date"`` sorts descending on ``created_date``; any other
    non-empty string sorts ascending on the literal column name. An absent or
    empty string leaves ordering to the store.
    """
    if not order:
        return None
    if order.startswith("-"):
        return OrderBy(column=order[1:], descending=True)
    return OrderBy(column=order, descending=False)


def criteria_to_predicates(criteria: Optional[Mapping[str, Any]]) -> List[Predicate]:
    """Turn a criteria mapping into AND-ed predicates, one per key."""
    if not criteria:
        return []
    return [Predicate(column=key, value=value) for key, value in criteria.items()]


class RowStore(ABC):
    """Abstract row-oriented backing store."""

    @abstractmethod
    async def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        order: Optional[OrderBy] = None,
    ) -> List[Row]:
        """Return rows matching every predicate, in the requested order."""

    @abstractmethod
    async def insert(self, table: str, values: Mapping[str, Any]) -> Optional[Row]:
        """Insert one row and return it, or None if the store returned nothing."""

    @abstractmethod
    async def update(self, table: str, row_id: Any, values: Mapping[str, Any]) -> Optional[Row]:
        """Update the row with primary key ``row_id``; None when no row matched."""

    @abstractmethod
    async def delete(self, table: str, row_id: Any) -> None:
        """Delete the row with primary key ``row_id``; no error if it is absent."""

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy"}

    async def close(self) -> None:
        return None
