"""Storage-agnostic query description consumed by ``DataStorePort`` drivers."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class FilterOp(StrEnum):
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    ILIKE = "ilike"  # case-insensitive substring


@dataclass(frozen=True)
class Filter:
    column: str
    op: FilterOp
    value: Any

    @classmethod
    def eq(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.EQ, value)

    @classmethod
    def neq(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.NEQ, value)

    @classmethod
    def gte(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.GTE, value)

    @classmethod
    def lte(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.LTE, value)

    @classmethod
    def is_in(cls, column: str, values: list[Any] | tuple[Any, ...] | set[Any]) -> "Filter":
        return cls(column, FilterOp.IN, tuple(values))

    @classmethod
    def contains_text(cls, column: str, text: str) -> "Filter":
        return cls(column, FilterOp.ILIKE, text)


@dataclass(frozen=True)
class OrderBy:
    column: str
    descending: bool = False


@dataclass(frozen=True)
class Query:
    """AND of ``filters``; every group in ``any_of`` is an OR, groups are ANDed."""

    filters: tuple[Filter, ...] = ()
    any_of: tuple[tuple[Filter, ...], ...] = ()
    order_by: tuple[OrderBy, ...] = ()
    limit: int | None = None

    @classmethod
    def where(cls, *filters: Filter, order_by: tuple[OrderBy, ...] = (), limit: int | None = None) -> "Query":
        return cls(filters=tuple(filters), order_by=order_by, limit=limit)


@dataclass(frozen=True)
class RowKey:
    """Equality key identifying at most one row (e.g. a uniqueness constraint)."""

    values: dict[str, Any] = field(default_factory=dict)

    def as_filters(self) -> tuple[Filter, ...]:
        return tuple(Filter.eq(k, v) for k, v in self.values.items())
