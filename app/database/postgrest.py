"""Row store backed by Supabase's PostgREST endpoint."""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import httpx

from app.core.exceptions import BackendError
from app.database.store import OrderBy, Predicate, Row, RowStore
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


def render_value(value: Any) -> str:
    """Render a Python value the way PostgREST expects it in a filter."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_params(
    filters: Sequence[Predicate] = (),
    order: Optional[OrderBy] = None,
) -> List[Tuple[str, str]]:
    """Translate predicates and ordering into PostgREST query parameters.

    Args:
        filters: AND-ed predicates; a None value becomes ``is.null``
        order: Optional single-column ordering

    Returns:
        List of (name, value) query parameter pairs, ``select=*`` first
    """
    params: List[Tuple[str, str]] = [("select", "*")]
    for predicate in filters:
        if predicate.is_null:
            params.append((predicate.column, "is.null"))
        else:
            params.append((predicate.column, f"eq.{render_value(predicate.value)}"))
    if order is not None:
        direction = "desc" if order.descending else "asc"
        params.append(("order", f"{order.column}.{direction}"))
    return params


class PostgrestStore(RowStore):
    """RowStore that talks to ``{SUPABASE_URL}/rest/v1`` over HTTP."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        bearer_token: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the store.

        Args:
            base_url: PostgREST root, e.g. ``https://xyz.supabase.co/rest/v1``
            api_key: Supabase API key sent as ``apikey``
            bearer_token: Token for the Authorization header (defaults to api_key)
            timeout: Per-request timeout in seconds
            client: Pre-built client, mostly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {bearer_token or api_key}",
            "Accept": "application/json",
        }
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        order: Optional[OrderBy] = None,
    ) -> List[Row]:
        params = build_query_params(filters, order)
        LOGGER.debug(f"PostgREST select {table}", extra={"params": params})
        data = await self._request("GET", table, params=params)
        return list(data or [])

    async def insert(self, table: str, values: Mapping[str, Any]) -> Optional[Row]:
        data = await self._request(
            "POST",
            table,
            params=[("select", "*")],
            json=dict(values),
            headers=RETURN_REPRESENTATION,
        )
        return self._first(data)

    async def update(self, table: str, row_id: Any, values: Mapping[str, Any]) -> Optional[Row]:
        data = await self._request(
            "PATCH",
            table,
            params=[("id", f"eq.{render_value(row_id)}"), ("select", "*")],
            json=dict(values),
            headers=RETURN_REPRESENTATION,
        )
        return self._first(data)

    async def delete(self, table: str, row_id: Any) -> None:
        await self._request("DELETE", table, params=[("id", f"eq.{render_value(row_id)}")])

    async def health_check(self) -> Dict[str, Any]:
        try:
            response = await self._client.get(f"{self.base_url}/", headers=self.headers)
            healthy = response.status_code < 500
            return {"status": "healthy" if healthy else "unhealthy", "status_code": response.status_code}
        except httpx.HTTPError as e:
            LOGGER.error(f"PostgREST health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}

    async def close(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _first(data: Any) -> Optional[Row]:
        if isinstance(data, list):
            return data[0] if data else None
        return data or None

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[List[Tuple[str, str]]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send one request and decode the JSON body.

        Raises:
            BackendError: On transport failures and any HTTP status >= 400
        """
        url = f"{self.base_url}/{table}"
        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers={**self.headers, **(headers or {})},
            )
        except httpx.HTTPError as e:
            LOGGER.error(f"PostgREST {method} {table} failed: {e}", exc_info=True)
            raise BackendError(f"Store request failed: {e}", original_error=e) from e

        if response.status_code >= 400:
            try:
                detail = response.json()
            except ValueError:
                detail = response.text
            LOGGER.error(
                f"PostgREST {method} {table} returned {response.status_code}",
                extra={"table": table, "status_code": response.status_code, "detail": detail},
            )
            message = detail.get("message") if isinstance(detail, dict) else detail
            raise BackendError(
                f"Store rejected {method} on {table}: {message}",
                status_code=response.status_code,
                detail=detail,
            )

        if response.status_code == 204 or not response.content:
            return None
        return response.json()
