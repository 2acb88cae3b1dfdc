"""
Named transform handlers.

Specifications authored as data refer to operate handlers by name; names are
resolved here to pre-registered callables. Text is never evaluated as code.
"""

import logging
from collections.abc import Callable
from typing import Any

from .base import Transformer
from .types import FunctionTransformer, TypeConversionTransformer

logger = logging.getLogger(__name__)

Handler = Callable[[Any, Any], Any]


class UnknownTransformError(KeyError):
    """Raised when a transform name has no registered handler."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No transform registered under '{self.name}'"


class TransformRegistry:
    """Registry mapping transform names to handlers."""

    def __init__(self):
        self._handlers: dict[str, Handler] = {}

    def register(
        self,
        name: str,
        handler: Handler | None = None,
        replace: bool = False,
    ):
        """
        Register a handler under ``name``.

        Can be used directly or as a decorator::

            @registry.register("slugify")
            def slugify(value, context):
                ...

        Raises:
            ValueError: If the name is taken and ``replace`` is False
            TypeError: If the handler is not callable
        """
        if handler is None:
            def decorator(func: Handler) -> Handler:
                self.register(name, func, replace=replace)
                return func
            return decorator

        if not callable(handler):
            raise TypeError(f"Handler for '{name}' is not callable")
        if name in self._handlers and not replace:
            raise ValueError(f"Transform '{name}' is already registered")

        self._handlers[name] = handler
        logger.debug(f"Registered transform '{name}'")
        return handler

    def unregister(self, name: str) -> None:
        if name not in self._handlers:
            raise UnknownTransformError(name)
        del self._handlers[name]

    def get(self, name: str) -> Handler:
        try:
            return self._handlers[name]
        except KeyError:
            raise UnknownTransformError(name) from None

    def resolve(self, handler: str | Handler) -> Handler:
        """Return the handler for a name, or the callable itself."""
        if isinstance(handler, str):
            return self.get(handler)
        if not callable(handler):
            raise TypeError(
                f"Transform must be a name or a callable, got {type(handler).__name__}"
            )
        return handler

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


def _upper(value: Any, context: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


def _lower(value: Any, context: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _strip(value: Any, context: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _identity(value: Any, context: Any) -> Any:
    return value


def create_default_registry() -> TransformRegistry:
    """
    Create a registry populated with the built-in handlers.

    Returns:
        TransformRegistry with str/int/float/bool conversions and the
        upper/lower/strip/identity string helpers
    """
    registry = TransformRegistry()

    for target_type in (str, int, float, bool):
        registry.register(target_type.__name__, TypeConversionTransformer(target_type))

    registry.register("upper", FunctionTransformer(_upper, name="upper"))
    registry.register("lower", FunctionTransformer(_lower, name="lower"))
    registry.register("strip", FunctionTransformer(_strip, name="strip"))
    registry.register("identity", FunctionTransformer(_identity, name="identity"))

    logger.debug(f"Created default transform registry with {len(registry)} handlers")
    return registry


_default_registry: TransformRegistry | None = None


def get_registry() -> TransformRegistry:
    """Get the process-wide default registry, creating it on first use."""
    global _default_registry

    if _default_registry is None:
        _default_registry = create_default_registry()

    return _default_registry


def handler_name(handler: Any) -> str:
    """Name used for a handler in metrics and logs."""
    if isinstance(handler, Transformer):
        return handler.get_type()
    return getattr(handler, "__name__", type(handler).__name__)
