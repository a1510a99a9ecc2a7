"""Process-local ``DataStorePort`` used by the test-suite and the ``memory`` backend.

Every operation runs under one ``asyncio.Lock`` so increments and upserts
are atomic with respect to concurrent tasks, and the same uniqueness
constraints as the relational schema are enforced on insert and update.
"""

import asyncio
import copy
import uuid
from collections import defaultdict
from collections.abc import Iterable
from typing import Any

from storefront.core.application.ports import DataStorePort, Filter, FilterOp, OrderBy, Query, Row, RowKey, Table
from storefront.core.exceptions import UniqueViolationError

UNIQUE_KEYS: dict[str, tuple[tuple[str, ...], ...]] = {
    Table.CART_LINES: (("user_id", "product_id"),),
    Table.REVIEWS: (("user_id", "product_id"),),
    Table.RETURN_REQUESTS: (("order_id", "product_id"),),
    Table.STORES: (("seller_id",),),
    Table.CATEGORIES: (("name",),),
}


class InMemoryDataStore(DataStorePort):
    def __init__(self, seed: dict[str, list[Row]] | None = None) -> None:
        self._tables: dict[str, dict[str, Row]] = defaultdict(dict)
        self._lock = asyncio.Lock()
        self._applied_requests: set[str] = set()
        for table, rows in (seed or {}).items():
            self.load(table, rows)

    def load(self, table: str, rows: Iterable[Row]) -> None:
        """Seed rows synchronously, bypassing uniqueness checks."""
        for row in rows:
            stored = _with_id(row)
            self._tables[table][stored["id"]] = stored

    def rows(self, table: str) -> list[Row]:
        """Snapshot of a table, for assertions."""
        return [copy.deepcopy(r) for r in self._tables[table].values()]

    async def select(self, table: str, query: Query | None = None) -> list[Row]:
        query = query or Query()
        async with self._lock:
            found = [r for r in self._tables[table].values() if _matches_query(r, query)]
            found = _sorted(found, query.order_by)
            if query.limit is not None:
                found = found[: query.limit]
            return [copy.deepcopy(r) for r in found]

    async def insert(self, table: str, row: Row) -> Row:
        async with self._lock:
            stored = _with_id(row)
            self._check_unique(table, stored)
            self._tables[table][stored["id"]] = stored
            return copy.deepcopy(stored)

    async def insert_many(self, table: str, rows: list[Row]) -> list[Row]:
        async with self._lock:
            staged = [_with_id(r) for r in rows]
            for index, row in enumerate(staged):
                self._check_unique(table, row, extra=staged[:index])
            for row in staged:
                self._tables[table][row["id"]] = row
            return [copy.deepcopy(r) for r in staged]

    async def update(self, table: str, filters: tuple[Filter, ...], patch: Row) -> list[Row]:
        async with self._lock:
            targets = [r for r in self._tables[table].values() if _matches_all(r, filters)]
            for row in targets:
                self._check_unique(table, {**row, **patch}, ignore_id=row["id"])
            for row in targets:
                row.update(copy.deepcopy(patch))
            return [copy.deepcopy(r) for r in targets]

    async def delete(self, table: str, filters: tuple[Filter, ...]) -> int:
        async with self._lock:
            doomed = [key for key, r in self._tables[table].items() if _matches_all(r, filters)]
            for key in doomed:
                del self._tables[table][key]
            return len(doomed)

    async def increment(
        self,
        table: str,
        filters: tuple[Filter, ...],
        deltas: dict[str, int],
        floor: int | None = 0,
        request_key: str | None = None,
    ) -> list[Row]:
        async with self._lock:
            if request_key is not None and request_key in self._applied_requests:
                return [copy.deepcopy(r) for r in self._tables[table].values() if _matches_all(r, filters)]
            changed = []
            for row in self._tables[table].values():
                if not _matches_all(row, filters):
                    continue
                new_values = {col: (row.get(col) or 0) + delta for col, delta in deltas.items()}
                if floor is not None and any(v < floor for v in new_values.values()):
                    continue
                row.update(new_values)
                changed.append(copy.deepcopy(row))
            if changed and request_key is not None:
                self._applied_requests.add(request_key)
            return changed

    async def upsert_increment(
        self,
        table: str,
        key: RowKey,
        column: str,
        delta: int,
        defaults: Row | None = None,
    ) -> Row:
        async with self._lock:
            filters = key.as_filters()
            for row in self._tables[table].values():
                if _matches_all(row, filters):
                    row[column] = (row.get(column) or 0) + delta
                    return copy.deepcopy(row)
            stored = _with_id({**(defaults or {}), **key.values, column: delta})
            self._tables[table][stored["id"]] = stored
            return copy.deepcopy(stored)

    def _check_unique(
        self, table: str, candidate: Row, ignore_id: str | None = None, extra: list[Row] | None = None
    ) -> None:
        others = [r for r in self._tables[table].values() if r["id"] != ignore_id] + (extra or [])
        if any(r["id"] == candidate["id"] for r in others):
            raise UniqueViolationError(table=table, message=f"duplicate id {candidate['id']}", error_code="23505")
        for columns in UNIQUE_KEYS.get(table, ()):
            wanted = tuple(candidate.get(c) for c in columns)
            if any(tuple(r.get(c) for c in columns) == wanted for r in others):
                raise UniqueViolationError(
                    table=table,
                    message=f"duplicate key ({', '.join(columns)})",
                    status_code=409,
                    error_code="23505",
                )


def _with_id(row: Row) -> Row:
    stored = copy.deepcopy(row)
    stored["id"] = str(stored.get("id") or uuid.uuid4())
    return stored


def _matches_query(row: Row, query: Query) -> bool:
    if not _matches_all(row, query.filters):
        return False
    return all(any(_matches(row, f) for f in group) for group in query.any_of)


def _matches_all(row: Row, filters: Iterable[Filter]) -> bool:
    return all(_matches(row, f) for f in filters)


def _matches(row: Row, flt: Filter) -> bool:
    value = row.get(flt.column)
    match flt.op:
        case FilterOp.EQ:
            return value == flt.value
        case FilterOp.NEQ:
            return value != flt.value
        case FilterOp.IN:
            return value in flt.value
        case FilterOp.ILIKE:
            return value is not None and str(flt.value).lower() in str(value).lower()
    if value is None:
        return False
    match flt.op:
        case FilterOp.GT:
            return value > flt.value
        case FilterOp.GTE:
            return value >= flt.value
        case FilterOp.LT:
            return value < flt.value
        case FilterOp.LTE:
            return value <= flt.value
    raise ValueError(f"Unsupported filter operator: {flt.op}")


def _sorted(rows: list[Row], order_by: tuple[OrderBy, ...]) -> list[Row]:
    # Stable sorts applied from the least to the most significant key; NULLs always last.
    for ob in reversed(order_by):
        if ob.descending:
            rows = sorted(rows, key=lambda r: _sort_key(r.get(ob.column), nulls_high=False), reverse=True)
        else:
            rows = sorted(rows, key=lambda r: _sort_key(r.get(ob.column), nulls_high=True))
    return rows


def _sort_key(value: Any, nulls_high: bool) -> tuple[bool, Any]:
    if value is None:
        return (nulls_high, 0)
    return (not nulls_high, value)
