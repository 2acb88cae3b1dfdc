"""
Operate-stage value transformers.

Supports:
- Type conversion handlers
- Wrapping plain callables
- Conditional and chained application
- A registry resolving handler names to callables
"""

from .base import Transformer
from .registry import (
    TransformRegistry,
    UnknownTransformError,
    create_default_registry,
    get_registry,
    handler_name,
)
from .types import (
    ChainTransformer,
    ConditionalTransformer,
    FunctionTransformer,
    TypeConversionTransformer,
)

__all__ = [
    "Transformer",
    "TypeConversionTransformer",
    "FunctionTransformer",
    "ConditionalTransformer",
    "ChainTransformer",
    "TransformRegistry",
    "UnknownTransformError",
    "create_default_registry",
    "get_registry",
    "handler_name",
]
