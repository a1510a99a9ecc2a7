from abc import ABC, abstractmethod
from typing import Any

from storefront.core.application.ports.query import Filter, Query, RowKey

Row = dict[str, Any]


class DataStorePort(ABC):
    """Generic access to the relational data service.

    Drivers raise ``UniqueViolationError`` when an insert collides with a
    uniqueness constraint and ``StorageUnavailableError`` on transient
    failures.
    """

    @abstractmethod
    async def select(self, table: str, query: Query | None = None) -> list[Row]:
        pass

    @abstractmethod
    async def insert(self, table: str, row: Row) -> Row:
        """Insert one row and return it as stored (with generated id/timestamps)."""
        pass

    @abstractmethod
    async def insert_many(self, table: str, rows: list[Row]) -> list[Row]:
        """Insert all rows or none."""
        pass

    @abstractmethod
    async def update(self, table: str, filters: tuple[Filter, ...], patch: Row) -> list[Row]:
        pass

    @abstractmethod
    async def delete(self, table: str, filters: tuple[Filter, ...]) -> int:
        pass

    @abstractmethod
    async def increment(
        self,
        table: str,
        filters: tuple[Filter, ...],
        deltas: dict[str, int],
        floor: int | None = 0,
        request_key: str | None = None,
    ) -> list[Row]:
        """Atomically add ``deltas`` to numeric columns of every matching row.

        A row where any resulting value would drop below ``floor`` is left
        untouched and is not returned, so callers detect a refused decrement
        by an empty result.

        With a ``request_key`` the deltas are applied at most once per key: a
        repeated call returns the matching rows as they are, so a retry after a
        lost response cannot add twice.
        """
        pass

    @abstractmethod
    async def upsert_increment(
        self,
        table: str,
        key: RowKey,
        column: str,
        delta: int,
        defaults: Row | None = None,
    ) -> Row:
        """Insert ``key + defaults + {column: delta}`` or atomically add ``delta`` to the existing row."""
        pass
