"""``DataStorePort`` over a Supabase/PostgREST endpoint.

Plain CRUD goes through the REST resources; the two atomic operations go
through the ``increment_columns`` and ``upsert_increment`` SQL functions
(see ``db/schema.sql``), so they execute as a single statement.
"""

from typing import Any

import httpx
import structlog

from storefront.core.application.ports import DataStorePort, Filter, Query, Row, RowKey
from storefront.core.exceptions import DataStoreError, StorageUnavailableError, UniqueViolationError
from storefront.infrastructure.configuration import SupabaseSettings
from storefront.infrastructure.drivers.postgrest.postgrest_query_builder import (
    filter_params,
    filters_json,
    query_params,
    to_json,
)

logger = structlog.get_logger()

_UNIQUE_VIOLATION = "23505"
_RETURN_ROWS = {"Prefer": "return=representation"}


class PostgrestDataStore(DataStorePort):
    def __init__(self, settings: SupabaseSettings, client: httpx.AsyncClient | None = None) -> None:
        settings.validate_credentials()
        key = settings.service_key.get_secret_value()  # type: ignore[union-attr]
        self._client = client or httpx.AsyncClient(timeout=settings.timeout_seconds)
        self._base_url = f"{settings.url.rstrip('/')}/rest/v1"  # type: ignore[union-attr]
        self._headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    async def aclose(self) -> None:
        await self._client.aclose()

    async def select(self, table: str, query: Query | None = None) -> list[Row]:
        return await self._send("GET", table, table, params=query_params(query))

    async def insert(self, table: str, row: Row) -> Row:
        rows = await self._send("POST", table, table, json=to_json(row), headers=_RETURN_ROWS)
        return rows[0]

    async def insert_many(self, table: str, rows: list[Row]) -> list[Row]:
        if not rows:
            return []
        return await self._send("POST", table, table, json=to_json(rows), headers=_RETURN_ROWS)

    async def update(self, table: str, filters: tuple[Filter, ...], patch: Row) -> list[Row]:
        return await self._send(
            "PATCH", table, table, params=filter_params(filters), json=to_json(patch), headers=_RETURN_ROWS
        )

    async def delete(self, table: str, filters: tuple[Filter, ...]) -> int:
        rows = await self._send("DELETE", table, table, params=filter_params(filters), headers=_RETURN_ROWS)
        return len(rows)

    async def increment(
        self,
        table: str,
        filters: tuple[Filter, ...],
        deltas: dict[str, int],
        floor: int | None = 0,
        request_key: str | None = None,
    ) -> list[Row]:
        payload = {"target_table": table, "filters": filters_json(filters), "deltas": deltas, "floor": floor}
        if request_key is not None:
            payload["request_key"] = request_key
        return await self._send("POST", table, "rpc/increment_columns", json=payload)

    async def upsert_increment(
        self,
        table: str,
        key: RowKey,
        column: str,
        delta: int,
        defaults: Row | None = None,
    ) -> Row:
        payload = {
            "target_table": table,
            "key": to_json(key.values),
            "target_column": column,
            "delta": delta,
            "defaults": to_json(defaults or {}),
        }
        result = await self._send("POST", table, "rpc/upsert_increment", json=payload)
        return result[0] if isinstance(result, list) else result

    async def _send(
        self,
        method: str,
        table: str,
        path: str,
        *,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                f"{self._base_url}/{path}",
                params=params,
                json=json,
                headers={**self._headers, **(headers or {})},
            )
        except httpx.TransportError as exc:
            logger.warning("Data service unreachable", table=table, method=method, error_details=str(exc))
            raise StorageUnavailableError(table=table, message=f"transport error: {exc}") from exc

        if response.is_success:
            return response.json() if response.content else []
        raise _to_error(table, response)


def _to_error(table: str, response: httpx.Response) -> DataStoreError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    code = body.get("code")
    message = body.get("message") or response.text or response.reason_phrase
    status = response.status_code

    if code == _UNIQUE_VIOLATION or status == 409:
        return UniqueViolationError(table=table, message=message, status_code=status, error_code=code)
    if status >= 500 or status == 429:
        return StorageUnavailableError(table=table, message=message, status_code=status, error_code=code)
    return DataStoreError(table=table, message=message, status_code=status, error_code=code)
