"""Property Binder: applies name -> raw value maps onto typed objects.

Invariants:
    - A specialized converter for the target's type owns assignment entirely;
      the binder does not look at the property at all in that case
    - A property whose declared type could not be resolved is never written
    - None, or a value already satisfying the declared type, is written as-is
    - Anything else goes through TypeConverter using the declared type
      (element type included for parameterized collections)
    - Every failure is re-raised as ConversionError("setting <name> on <type>"),
      with the original failure as cause
    - bind_all stops at the first failure; properties applied before it stay applied

Design Decisions:
    - No rollback of partially bound targets: the caller owns the target and
      discards it on failure (ADR: no hidden copies)
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from wirebind.core.converter_protocols import ConverterLookup
from wirebind.core.errors import (
    ConversionError,
    ErrorCategory,
    ErrorContext,
    UnresolvedPropertyTypeError,
    UnwritablePropertyError,
    type_name,
)
from wirebind.core.property_table import find_property

if TYPE_CHECKING:
    from wirebind.services.type_converter import TypeConverter

logger = logging.getLogger(__name__)


class PropertyBinder:
    """Sets converted properties on a target object."""

    def __init__(self, registry: ConverterLookup, converter: "TypeConverter"):
        self._registry = registry
        self._converter = converter

    def bind_all(self, target: Any, properties: Mapping[str, Any]) -> None:
        """Bind every entry of `properties` onto `target`. First failure aborts."""
        for name, value in properties.items():
            self.bind(target, name, value)

    def bind(self, target: Any, name: str, value: Any) -> None:
        """Bind one property, converting `value` to the declared type if needed."""
        target_type = type(target)
        try:
            converter = self._registry.preferred_converter_for(target_type)
            if converter is not None:
                logger.debug(f"delegating {name} on {target_type.__name__} to {type(converter).__name__}")
                converter.set_property(target, name, value)
                return

            prop = find_property(target_type, name)
            if prop is None or not prop.writable:
                raise UnwritablePropertyError(name, target_type)
            if not prop.is_resolved:
                raise UnresolvedPropertyTypeError(name, target_type, prop.unresolved_hint)

            if value is None or prop.declared_type.is_satisfied_by(value):
                logger.debug(f"setting {name} directly, {type(value).__name__} is compatible")
                prop.set(target, value)
            else:
                logger.debug(
                    f"converting {name} from {type(value).__name__} to {prop.declared_type}",
                )
                prop.set(target, self._converter.convert(value, prop.declared_type))
        except Exception as exc:
            raise ConversionError(
                f"setting {name} on {type_name(target_type)}",
                cause=exc,
                context=ErrorContext(
                    property_name=name,
                    source_type=type_name(type(value)),
                    target_type=type_name(target_type),
                ),
                category=ErrorCategory.BINDING,
            ) from exc
