"""
Mapping specifications.

A MappingSpec describes one transformation: where the records live
(``list_path``), how each output record is built (``item``), and the
post-processing applied afterwards (``operate``, ``each``, ``remove``).
Specs are immutable and safe to reuse across calls.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .template import NODE_TYPES, Node, compile_template
from .transformers.registry import TransformRegistry, get_registry, handler_name
from .utils.tracing import trace_function

logger = logging.getLogger(__name__)

SPEC_KEYS = frozenset({"list", "item", "remove", "operate", "defaults", "each"})


class SpecificationError(ValueError):
    """Raised when a mapping specification cannot be built."""


@dataclass(frozen=True)
class Operation:
    """
    One operate-stage entry.

    ``transform`` is a ``(value, context) -> value`` callable, a Transformer,
    or the name of a handler in the default registry.
    """

    transform: Callable[[Any, Any], Any]
    on: str
    name: str = ""

    def __post_init__(self):
        if not isinstance(self.on, str) or not self.on:
            raise SpecificationError(f"Operation path must be a non-empty string, got {self.on!r}")

        handler = self.transform
        if isinstance(handler, str):
            object.__setattr__(self, "name", self.name or handler)
            handler = get_registry().get(handler)
            object.__setattr__(self, "transform", handler)
        elif not callable(handler):
            raise SpecificationError(
                f"Operation on '{self.on}' needs a callable or a transform name"
            )

        if not self.name:
            object.__setattr__(self, "name", handler_name(handler))

    def __call__(self, value: Any, context: Any) -> Any:
        return self.transform(value, context)


@dataclass(frozen=True)
class MappingSpec:
    """Immutable description of one transformation."""

    list_path: str | None = None
    item: Node | None = None
    remove: tuple[str, ...] = ()
    operate: tuple[Operation, ...] = ()
    defaults: Mapping[str, Any] = field(default_factory=dict)
    each: Callable[..., Any] | None = None

    def __post_init__(self):
        if self.list_path is not None and not isinstance(self.list_path, str):
            raise SpecificationError(f"'list' must be a path string, got {self.list_path!r}")

        if self.item is not None and not isinstance(self.item, NODE_TYPES):
            object.__setattr__(self, "item", compile_template(self.item))

        remove = self.remove
        if isinstance(remove, str):
            remove = (remove,)
        remove = tuple(remove or ())
        for name in remove:
            if not isinstance(name, str):
                raise SpecificationError(f"'remove' entries must be strings, got {name!r}")
        object.__setattr__(self, "remove", remove)

        object.__setattr__(
            self, "operate", tuple(_as_operation(entry) for entry in self.operate or ())
        )

        if not isinstance(self.defaults, Mapping):
            raise SpecificationError("'defaults' must be a mapping")
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))

        if self.each is not None and not callable(self.each):
            raise SpecificationError("'each' must be callable")

    @classmethod
    @trace_function("datatransform.spec.from_dict")
    def from_dict(
        cls,
        config: Mapping[str, Any],
        registry: TransformRegistry | None = None,
    ) -> "MappingSpec":
        """
        Build a spec from plain data.

        Args:
            config: Mapping with keys list/item/remove/operate/defaults/each;
                operate entries are ``{"run": name_or_callable, "on": path}``
                (``transform`` is accepted in place of ``run``)
            registry: Registry used to resolve handler names
                (default: the process-wide registry)

        Returns:
            MappingSpec

        Raises:
            SpecificationError: If the configuration is malformed
            UnknownTransformError: If a handler name is not registered
        """
        if not isinstance(config, Mapping):
            raise SpecificationError(
                f"Specification must be a mapping, got {type(config).__name__}"
            )

        unknown = set(config) - SPEC_KEYS
        if unknown:
            raise SpecificationError(f"Unknown specification keys: {sorted(unknown)}")

        registry = registry or get_registry()

        operations = []
        for entry in config.get("operate") or ():
            operations.append(_operation_from_dict(entry, registry))

        remove = config.get("remove") or ()
        if not isinstance(remove, (list, tuple, set, frozenset)):
            raise SpecificationError("'remove' must be a list of field names")

        spec = cls(
            list_path=config.get("list") or None,
            item=config.get("item"),
            remove=tuple(remove),
            operate=tuple(operations),
            defaults=config.get("defaults") or {},
            each=config.get("each"),
        )
        logger.debug(
            f"Built mapping spec: list={spec.list_path!r}, "
            f"operations={len(spec.operate)}, remove={len(spec.remove)}"
        )
        return spec


def _operation_from_dict(entry: Any, registry: TransformRegistry) -> Operation:
    if isinstance(entry, Operation):
        return entry
    if not isinstance(entry, Mapping):
        raise SpecificationError(f"Operate entries must be mappings, got {entry!r}")
    if "on" not in entry:
        raise SpecificationError(f"Operate entry is missing 'on': {dict(entry)!r}")

    handler = entry.get("run", entry.get("transform"))
    if handler is None:
        raise SpecificationError(f"Operate entry on '{entry['on']}' has no 'run'")

    name = handler if isinstance(handler, str) else ""
    try:
        resolved = registry.resolve(handler)
    except TypeError as e:
        raise SpecificationError(str(e)) from e
    return Operation(transform=resolved, on=entry["on"], name=name)


def _as_operation(entry: Any) -> Operation:
    if isinstance(entry, Operation):
        return entry
    if isinstance(entry, Mapping):
        return _operation_from_dict(entry, get_registry())
    if isinstance(entry, tuple) and len(entry) == 2:
        return Operation(transform=entry[0], on=entry[1])
    raise SpecificationError(f"Cannot build an operation from {entry!r}")
