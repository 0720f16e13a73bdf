"""Span helpers for distributed tracing of hierarchy operations."""

import inspect
from collections.abc import Callable
from enum import Enum
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Argument names recorded as span attributes. Chains and views are not
# recorded: ids are fine but names are user content.
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "level", "child_level", "operation", "page", "page_size",
    "sort_property", "sort_order", "tenant_id", "entity_type",
})


def _span_value(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _set_safe_span_attrs(span: trace.Span, arguments: dict[str, Any]) -> None:
    """Set span attributes from bound call arguments; only allowlisted names are recorded."""
    for key, value in arguments.items():
        if value is not None and key.lower() in _SAFE_SPAN_ATTR_KEYS:
            span.set_attribute(f"arg.{key}", _span_value(value))


def _bind(signature: inspect.Signature, args: tuple, kwargs: dict) -> dict[str, Any]:
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return kwargs
    return dict(bound.arguments)


def _record_error(span: trace.Span, exc: Exception) -> None:
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)
    error_code = getattr(exc, "error_code", None)
    if error_code:
        span.set_attribute("error.code", error_code)


def traced(
    operation_name: str | None = None,
    attributes: dict | None = None,
) -> Callable:
    """Decorator that runs a function (sync or async) inside a new span.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Optional static attributes set on every span.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"
        signature = inspect.signature(func)

        def annotate(span: trace.Span, args: tuple, kwargs: dict) -> None:
            for key, value in (attributes or {}).items():
                span.set_attribute(key, value)
            _set_safe_span_attrs(span, _bind(signature, args, kwargs))

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name, record_exception=False) as span:
                annotate(span, args, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _record_error(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name, record_exception=False) as span:
                annotate(span, args, kwargs)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _record_error(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


def get_trace_id() -> str | None:
    """Return the current trace ID as 32-char hex, or None."""
    span = trace.get_current_span()
    if span:
        ctx = span.get_span_context()
        if ctx.is_valid:
            return format(ctx.trace_id, "032x")
    return None
