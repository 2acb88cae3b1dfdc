"""
Built-in value transformers.

Provides type conversion, callable wrapping, conditional application and
chaining of transformers for use as operate-stage handlers.
"""

import logging
from collections.abc import Callable
from typing import Any

from ..metrics import CONVERSION_ERRORS
from .base import Transformer

logger = logging.getLogger(__name__)


class TypeConversionTransformer(Transformer):
    """
    Convert values to a target type.

    None passes through. A failed conversion keeps the original value.
    """

    def __init__(self, target_type: type):
        """
        Initialize type conversion transformer.

        Args:
            target_type: Target Python type (str, int, float, bool, etc.)
        """
        self.target_type = target_type

    def transform(self, value: Any, context: Any) -> Any:
        """Transform value by converting type."""
        if value is None:
            return None

        try:
            return self.target_type(value)
        except (ValueError, TypeError) as e:
            CONVERSION_ERRORS.labels(
                transformer_type=self.get_type(),
                error_type=type(e).__name__,
            ).inc()
            logger.warning(
                f"Conversion to {self.target_type.__name__} failed for {value!r}: {e}"
            )
            return value

    def get_type(self) -> str:
        return f"{self.__class__.__name__}[{self.target_type.__name__}]"


class FunctionTransformer(Transformer):
    """Wrap a ``(value, context) -> value`` callable."""

    def __init__(self, func: Callable[[Any, Any], Any], name: str | None = None):
        self.func = func
        self.name = name or getattr(func, "__name__", "function")

    def transform(self, value: Any, context: Any) -> Any:
        return self.func(value, context)

    def get_type(self) -> str:
        return self.name


class ConditionalTransformer(Transformer):
    """
    Apply a transformation when a predicate holds.

    Errors raised by the predicate or the wrapped transformers propagate.
    """

    def __init__(
        self,
        predicate: Callable[[Any, Any], bool],
        transformer: Callable[[Any, Any], Any],
        else_transformer: Callable[[Any, Any], Any] | None = None,
    ):
        """
        Initialize conditional transformer.

        Args:
            predicate: Returns True if ``transformer`` should apply
            transformer: Applied when the predicate is True
            else_transformer: Optional handler applied when it is False
        """
        self.predicate = predicate
        self.transformer = transformer
        self.else_transformer = else_transformer

    def transform(self, value: Any, context: Any) -> Any:
        if self.predicate(value, context):
            return self.transformer(value, context)
        if self.else_transformer is not None:
            return self.else_transformer(value, context)
        return value


class ChainTransformer(Transformer):
    """Apply several transformers in order, feeding each result to the next."""

    def __init__(self, *transformers: Callable[[Any, Any], Any]):
        self.transformers = list(transformers)

    def transform(self, value: Any, context: Any) -> Any:
        for transformer in self.transformers:
            value = transformer(value, context)
        return value

    def get_transformer_count(self) -> int:
        return len(self.transformers)
