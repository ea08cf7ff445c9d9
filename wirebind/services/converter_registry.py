"""Converter Registry: explicit supported-type -> converter-class mapping.

Invariants:
    - Lookup walks the runtime type's MRO; the first level with any entry decides
    - Within one level the entry with the lowest `order` is preferred
    - No converter found returns None (ordinary control flow, never raises)
    - One converter instance per converter class, created lazily and reused

Design Decisions:
    - Explicit registration at process start, no auto-discovery
      (ADR: every mapping visible in one place)
    - Registry instance passed into the engine's constructor, never a module global
    - Classes registered, not instances: the serializer needs to be able to
      build a fresh converter per call
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from wirebind.core.converter_protocols import SpecializedConverter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    converter_cls: type
    order: int


class ConverterRegistry:
    """Picks the preferred SpecializedConverter for a runtime type."""

    def __init__(self):
        self._entries: dict[type, list[_Entry]] = {}
        self._instances: dict[type, Any] = {}
        self._lock = threading.Lock()

    def register(
        self, supported_type: type, converter_cls: type, order: int = 0,
    ) -> None:
        """Register `converter_cls` for `supported_type` and its subclasses."""
        entries = self._entries.setdefault(supported_type, [])
        entries.append(_Entry(converter_cls, order))
        entries.sort(key=lambda e: e.order)
        logger.debug(
            f"Registered {converter_cls.__name__} for "
            f"{supported_type.__name__} (order={order})",
        )

    def handler(self, supported_type: type, order: int = 0) -> Callable[[type], type]:
        """Class decorator form of register()."""
        def decorate(converter_cls: type) -> type:
            self.register(supported_type, converter_cls, order)
            return converter_cls
        return decorate

    def preferred_converter_for(self, cls: type) -> SpecializedConverter | None:
        for klass in getattr(cls, "__mro__", (cls,)):
            entries = self._entries.get(klass)
            if entries:
                return self._instance_of(entries[0].converter_cls)
        return None

    def supported_types(self) -> list[type]:
        return list(self._entries)

    def _instance_of(self, converter_cls: type) -> Any:
        instance = self._instances.get(converter_cls)
        if instance is None:
            with self._lock:
                instance = self._instances.get(converter_cls)
                if instance is None:
                    instance = converter_cls()
                    self._instances[converter_cls] = instance
        return instance
