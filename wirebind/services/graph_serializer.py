"""Graph Serializer: typed objects back to wire-shaped values.

Invariants:
    - None serializes to None
    - Any collection becomes a list of serialized elements, in iteration order
    - A specialized converter's output is returned as-is (no further recursion)
    - No converter: dates format to the canonical long ISO-8601 form,
      everything else passes through unchanged
    - A fresh converter instance is built for every call; failures building
      or running it are wrapped as ConversionError
    - With detect_cycles, re-entering a collection raises CyclicGraphError
    - Any failure reading a property surfaces as UnreadablePropertyError

Design Decisions:
    - Pass-through of unknown values is deliberate: primitives are wire-ready.
      The wire encoder downstream rejects whatever it cannot represent
    - Cycle tracking keyed by id() and scoped to the active recursion path, so
      the same list appearing twice side by side is not a cycle
"""

import logging
from datetime import date
from typing import Any

from wirebind.core.converter_protocols import ConverterLookup
from wirebind.core.domain_types import Representation
from wirebind.core.errors import (
    ConversionError,
    CyclicGraphError,
    ErrorCategory,
    ErrorContext,
    UnreadablePropertyError,
    type_name,
)
from wirebind.core.property_table import find_property
from wirebind.core.primitive_codec import format_date
from wirebind.core.type_descriptor import is_collection_value

logger = logging.getLogger(__name__)


class GraphSerializer:
    """Turns domain objects into representation-shaped output."""

    def __init__(self, registry: ConverterLookup, detect_cycles: bool = True):
        self._registry = registry
        self._detect_cycles = detect_cycles

    def to_representation(self, value: Any, rep: Representation) -> Any:
        return self._serialize(value, rep, set())

    def property_to_representation(
        self, bean: Any, name: str, rep: Representation,
    ) -> Any:
        """Read `name` off `bean` and serialize it; collections become lists."""
        prop = find_property(type(bean), name)
        if name.startswith("_") or (prop is not None and not prop.readable):
            raise UnreadablePropertyError(name, type(bean))
        try:
            value = prop.get(bean) if prop is not None else getattr(bean, name)
        except Exception as exc:
            raise UnreadablePropertyError(name, type(bean), cause=exc) from exc
        return self.to_representation(value, rep)

    def _serialize(self, value: Any, rep: Representation, active: set[int]) -> Any:
        if value is None:
            return None

        if is_collection_value(value):
            if not self._detect_cycles:
                return [self._serialize(element, rep, active) for element in value]
            key = id(value)
            if key in active:
                raise CyclicGraphError(type(value))
            active.add(key)
            try:
                return [self._serialize(element, rep, active) for element in value]
            finally:
                active.discard(key)

        converter = self._registry.preferred_converter_for(type(value))
        if converter is None:
            if isinstance(value, date):
                return format_date(value)
            return value

        try:
            fresh = type(converter)()
            logger.debug(f"serializing {type(value).__name__} as {rep} via {type(fresh).__name__}")
            return fresh.to_representation(value, rep)
        except Exception as exc:
            raise ConversionError(
                f"converting {type_name(type(value))} to {rep}",
                cause=exc,
                context=ErrorContext(
                    source_type=type_name(type(value)), representation=str(rep),
                ),
                category=ErrorCategory.SERIALIZATION,
            ) from exc
