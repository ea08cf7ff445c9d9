"""Conversion Engine: the public entry points, wired around one registry.

Invariants:
    - One registry per engine, passed in explicitly (no module-level registry)
    - bind_all / bind / to_representation / property_to_representation are
      the whole public contract; convert is exposed for direct type coercion
    - Safe to share across threads as long as the registry's converters are

Design Decisions:
    - Facade over three collaborators: callers never wire TypeConverter,
      PropertyBinder and GraphSerializer themselves (ADR: one wiring point)
"""

from collections.abc import Mapping
from typing import Any

from wirebind.config import Settings
from wirebind.core.converter_protocols import ConverterLookup
from wirebind.core.domain_types import DEFAULT, Representation
from wirebind.services.graph_serializer import GraphSerializer
from wirebind.services.type_converter import TypeConverter


class ConversionEngine:
    """Binds wire data onto domain objects and serializes them back."""

    def __init__(self, registry: ConverterLookup, detect_cycles: bool = True):
        self.registry = registry
        self._converter = TypeConverter(registry)
        self._binder = self._converter.binder
        self._serializer = GraphSerializer(registry, detect_cycles=detect_cycles)

    @classmethod
    def from_settings(cls, registry: ConverterLookup, settings: Settings) -> "ConversionEngine":
        return cls(registry, detect_cycles=settings.detect_cycles)

    # ─── Inbound ────────────────────────────────────────────────

    def bind_all(self, target: Any, properties: Mapping[str, Any]) -> Any:
        """Apply every property onto `target`; returns `target` for chaining."""
        self._binder.bind_all(target, properties)
        return target

    def bind(self, target: Any, name: str, value: Any) -> Any:
        self._binder.bind(target, name, value)
        return target

    def convert(self, value: Any, target: Any) -> Any:
        return self._converter.convert(value, target)

    # ─── Outbound ───────────────────────────────────────────────

    def to_representation(self, value: Any, rep: Representation = DEFAULT) -> Any:
        return self._serializer.to_representation(value, rep)

    def property_to_representation(
        self, bean: Any, name: str, rep: Representation = DEFAULT,
    ) -> Any:
        return self._serializer.property_to_representation(bean, name, rep)
