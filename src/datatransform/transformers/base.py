"""
Base transformer class.

Operate-stage handlers are plain callables ``(value, context) -> value``;
``Transformer`` subclasses are callable the same way.
"""

from abc import ABC, abstractmethod
from typing import Any


class Transformer(ABC):
    """Base class for value transformers."""

    @abstractmethod
    def transform(self, value: Any, context: Any) -> Any:
        """
        Transform a single value.

        Args:
            value: Value read at the operation's path (None when absent)
            context: Opaque caller context passed to the transform call

        Returns:
            Transformed value
        """
        pass

    def __call__(self, value: Any, context: Any = None) -> Any:
        return self.transform(value, context)

    def get_type(self) -> str:
        """Get transformer type for metrics."""
        return self.__class__.__name__
