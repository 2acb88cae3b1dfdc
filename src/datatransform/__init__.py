"""
Declarative record reshaping.

Reshapes records (or lists of records) into a target shape described by a
MappingSpec: dotted-path field access, recursive templates, ordered value
transforms, per-record callbacks, field removal and default values.

Usage:
    from datatransform import MappingSpec, transform

    spec = MappingSpec.from_dict({
        "list": "users",
        "item": {"fullName": "name", "city": "address.city"},
        "defaults": {"fullName": "Unknown"},
        "operate": [{"run": "upper", "on": "city"}],
    })
    transform({"users": [{"name": "Ann", "address": {"city": "Oslo"}}]}, spec)
    # [{"fullName": "Ann", "city": "OSLO"}]
"""

from .engine import transform, transform_async
from .paths import MISSING, get_value, set_value
from .spec import MappingSpec, Operation, SpecificationError
from .template import Group, Malformed, PathRef, Template, compile_template
from .transformers import (
    Transformer,
    TransformRegistry,
    UnknownTransformError,
    create_default_registry,
    get_registry,
)

__version__ = "1.0.0"

__all__ = [
    "transform",
    "transform_async",
    "MappingSpec",
    "Operation",
    "SpecificationError",
    "PathRef",
    "Group",
    "Template",
    "Malformed",
    "compile_template",
    "MISSING",
    "get_value",
    "set_value",
    "Transformer",
    "TransformRegistry",
    "UnknownTransformError",
    "create_default_registry",
    "get_registry",
]
