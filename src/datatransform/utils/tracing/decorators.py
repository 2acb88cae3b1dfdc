"""
Decorators for adding tracing to functions.

Spans are named after the function unless a name is given; coroutine
functions get a span covering the awaited call.
"""

import functools
import inspect

from .context import trace_operation


def trace_function(operation_name: str | None = None, **default_attributes):
    """
    Decorator for tracing function calls.

    Args:
        operation_name: Optional span name (defaults to module.qualname)
        **default_attributes: Default attributes to add to all spans

    Example:
        >>> @trace_function("datatransform.spec.from_dict", component="spec")
        ... def load(config):
        ...     ...
    """
    def decorator(func):
        name = operation_name or f"{func.__module__}.{func.__qualname__}"
        attributes = default_attributes.copy()
        attributes["function"] = func.__name__

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                with trace_operation(name, **attributes):
                    return await func(*args, **kwargs)

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with trace_operation(name, **attributes):
                return func(*args, **kwargs)

        return wrapper
    return decorator
