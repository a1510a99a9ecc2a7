"""Structlog processor shaping flat event dicts into the storefront log schema.

Root fields (timestamp, level, service, IDs, message) stay flat; optional
``processing``, ``error`` and ``context`` blocks are nested only
when their leading key is present. Anything left over lands in ``extra``.
"""

from __future__ import annotations

import os
from typing import Any


def _build_root_fields(event_dict: dict[str, Any]) -> dict[str, Any]:
    return {
        "timestamp": event_dict.pop("timestamp", None),
        "level": event_dict.pop("level", "info"),
        "service": os.environ.get("SERVICE_NAME", "storefront"),
        "environment": os.environ.get("STOREFRONT_ENV", "local"),
        "correlation_id": event_dict.pop("correlation_id", None),
        "trace_id": event_dict.pop("trace_id", None),
        "message": event_dict.pop("event", ""),
    }


def _safe_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _build_processing(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    status = event_dict.pop("processing_status", None)
    if status is None:
        return None
    return {
        "status": status,
        "duration_ms": _safe_float(event_dict.pop("processing_duration_ms", None)),
        "retries": event_dict.pop("processing_retries", None),
    }


def _build_error(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    error_type = event_dict.pop("error_type", None)
    if error_type is None:
        return None
    return {
        "type": error_type,
        "code": event_dict.pop("error_code", None),
        "details": event_dict.pop("error_details", None),
        "retryable": event_dict.pop("error_retryable", False),
    }


def _build_context(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    endpoint = event_dict.pop("context_endpoint", None)
    method = event_dict.pop("context_method", None)
    component = event_dict.pop("context_component", None)
    if endpoint is None and component is None:
        return None
    return {
        "component": component,
        "endpoint": endpoint,
        "method": method,
        "user_id": event_dict.pop("user_id", None),
    }


def storefront_schema_processor(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    result = _build_root_fields(event_dict)

    processing = _build_processing(event_dict)
    if processing is not None:
        result["processing"] = processing

    error = _build_error(event_dict)
    if error is not None:
        result["error"] = error

    context = _build_context(event_dict)
    if context is not None:
        result["context"] = context

    if event_dict:
        result["extra"] = dict(event_dict)

    return result
