"""OpenTelemetry tracing configuration.

- configure_tracing(): one-shot TracerProvider setup
- get_tracer(): named Tracer
- trace_operation(): decorator opening a span around sync or async callables
"""

from __future__ import annotations

import functools
import inspect
import os
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

_CONFIGURED = False

P = ParamSpec("P")
R = TypeVar("R")


def configure_tracing(export_to_console: bool = False) -> None:
    global _CONFIGURED  # noqa: PLW0603
    if _CONFIGURED:
        return
    _CONFIGURED = True

    resource = Resource.create(
        {
            "service.name": os.environ.get("SERVICE_NAME", "storefront"),
            "deployment.environment": os.environ.get("STOREFRONT_ENV", "local"),
        }
    )
    provider = TracerProvider(resource=resource)
    if export_to_console:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)


def get_tracer(name: str = "storefront") -> trace.Tracer:
    return trace.get_tracer(name)


def trace_operation(span_name: str, attributes: dict[str, str] | None = None) -> Callable:
    """Wrap a function in an OTel span.

    Usage:
        @trace_operation("workflow.checkout")
        async def execute(self, command): ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        tracer = get_tracer()

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                with tracer.start_as_current_span(span_name) as span:
                    _set_attributes(span, attributes)
                    return await func(*args, **kwargs)  # type: ignore[misc]

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with tracer.start_as_current_span(span_name) as span:
                _set_attributes(span, attributes)
                return func(*args, **kwargs)

        return sync_wrapper

    return decorator


def _set_attributes(span: Any, attributes: dict[str, str] | None) -> None:
    if attributes:
        for k, v in attributes.items():
            span.set_attribute(k, v)
