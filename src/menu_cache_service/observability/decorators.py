"""OpenTelemetry tracing decorators."""

import asyncio
import functools
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span

F = TypeVar("F", bound=Callable[..., Any])


def _start(span: Span, service_name: str, func_name: str, custom_name: bool) -> None:
    span.set_attribute("service.name", service_name)
    if custom_name:
        span.set_attribute("function.name", func_name)


def _record_failure(span: Span, exc: BaseException) -> None:
    span.set_attribute("success", False)
    span.set_attribute("error.type", type(exc).__name__)
    span.set_attribute("error.message", str(exc))
    span.record_exception(exc)


def traced(span_name: str | None = None, service_name: str = "menu-cache-svc") -> Callable[[F], F]:
    """Wrap a function, sync or async, in an OpenTelemetry span.

    The span is marked ``success`` or carries the error type and message of
    the exception, which is re-raised unchanged.

    Args:
        span_name: Name for the span (defaults to the function name)
        service_name: Service name recorded on the span

    Example:
        @traced("catalog.fetch")
        async def fetch(self) -> list[MenuItem]:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(service_name)

        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with tracer.start_as_current_span(name, record_exception=False) as span:
                    _start(span, service_name, func.__name__, span_name is not None)
                    try:
                        result = await func(*args, **kwargs)
                    except Exception as e:
                        _record_failure(span, e)
                        raise
                    span.set_attribute("success", True)
                    return result

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name, record_exception=False) as span:
                _start(span, service_name, func.__name__, span_name is not None)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _record_failure(span, e)
                    raise
                span.set_attribute("success", True)
                return result

        return sync_wrapper  # type: ignore

    return decorator
