"""Translates port-level ``Query``/``Filter`` objects into PostgREST URL parameters."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from storefront.core.application.ports import Filter, FilterOp, OrderBy, Query

_RESERVED = set(',()". :')


def literal(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, datetime):
        value = value.isoformat()
    text = str(value)
    if any(ch in _RESERVED for ch in text):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def condition(flt: Filter) -> str:
    """Right-hand side of ``column=<condition>``."""
    match flt.op:
        case FilterOp.EQ if flt.value is None:
            return "is.null"
        case FilterOp.NEQ if flt.value is None:
            return "not.is.null"
        case FilterOp.IN:
            return f"in.({','.join(literal(v) for v in flt.value)})"
        case FilterOp.ILIKE:
            pattern = str(flt.value).replace("*", "")
            return f"ilike.{literal(f'*{pattern}*')}"
        case _:
            return f"{flt.op.value}.{literal(flt.value)}"


def _or_group(group: tuple[Filter, ...]) -> str:
    return f"({','.join(f'{f.column}.{condition(f)}' for f in group)})"


def _order(order_by: tuple[OrderBy, ...]) -> str:
    return ",".join(f"{o.column}.{'desc' if o.descending else 'asc'}.nullslast" for o in order_by)


def filter_params(filters: tuple[Filter, ...]) -> list[tuple[str, str]]:
    return [(f.column, condition(f)) for f in filters]


def query_params(query: Query | None) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = [("select", "*")]
    if query is None:
        return params
    params.extend(filter_params(query.filters))
    if len(query.any_of) == 1:
        params.append(("or", _or_group(query.any_of[0])))
    elif query.any_of:
        params.append(("and", f"({','.join('or' + _or_group(g) for g in query.any_of)})"))
    if query.order_by:
        params.append(("order", _order(query.order_by)))
    if query.limit is not None:
        params.append(("limit", str(query.limit)))
    return params


def filters_json(filters: tuple[Filter, ...]) -> list[dict[str, Any]]:
    """Filter list for the RPC functions, which evaluate them server-side."""
    return [{"column": f.column, "op": f.op.value, "value": to_json(f.value)} for f in filters]


def to_json(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, list | tuple | set):
        return [to_json(v) for v in value]
    return value
