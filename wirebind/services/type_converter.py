"""Type Converter: recursive, type-directed conversion of wire values.

Invariants:
    - None converts to None, for every target
    - Collection targets accept only collection sources (no scalar -> list)
    - Sorted-set target builds a SortedSet, set target a set, anything else a list
      (tuple targets get a tuple); source order kept for sequences
    - Unparameterized collection targets copy elements unconverted
    - A value already of the target class is returned as-is (no copy)
    - Strings resolve through a specialized converter BEFORE date parsing:
      a date-shaped identifier still goes to resolve_by_identifier
    - Strings with no converter: dates first, then plain scalars (int, bool, ...)
    - Numbers widen int -> float and int/float -> Decimal, nothing else
    - Mappings become a default-constructed instance bound via PropertyBinder
    - Every failure raises ConversionError (or a subclass); nothing is swallowed

Design Decisions:
    - TypeConverter owns its PropertyBinder: the mapping case recurses into
      binding, binding recurses back into conversion (ADR: one wiring point)
    - Accepts a TypeDescriptor or any typing hint, so callers can pass list[int]
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from sortedcontainers import SortedSet

from wirebind.core.converter_protocols import ConverterLookup
from wirebind.core.domain_types import CollectionKind
from wirebind.core.primitive_codec import (
    has_scalar_parser,
    is_date_like,
    parse_date,
    parse_scalar,
    widen_number,
)
from wirebind.core.errors import (
    ConversionError,
    ErrorContext,
    UninstantiableTargetError,
    UnsupportedCollectionError,
    UnsupportedConversionError,
    type_name,
)
from wirebind.core.type_descriptor import TypeDescriptor, is_collection_value
from wirebind.services.property_binder import PropertyBinder

logger = logging.getLogger(__name__)


class TypeConverter:
    """Converts a wire value to a target type, recursing through collections and mappings."""

    def __init__(self, registry: ConverterLookup):
        self._registry = registry
        self.binder = PropertyBinder(registry, self)

    def convert(self, value: Any, target: Any) -> Any:
        """Convert `value` to `target` (a TypeDescriptor or a typing hint)."""
        descriptor = target if isinstance(target, TypeDescriptor) else TypeDescriptor.of(target)
        if value is None:
            return None

        if descriptor.is_collection:
            return self._convert_collection(value, descriptor)

        if isinstance(value, descriptor.raw):
            return value

        if isinstance(value, str):
            converter = self._registry.preferred_converter_for(descriptor.raw)
            if converter is not None:
                return self._resolve(converter, value, descriptor)
            if is_date_like(descriptor.raw):
                parsed = parse_date(value)
                return parsed.date() if descriptor.raw is date else parsed
            if has_scalar_parser(descriptor.raw):
                return parse_scalar(value, descriptor.raw)
        elif isinstance(value, Mapping):
            return self._convert_mapping(value, descriptor)
        else:
            widened = widen_number(value, descriptor.raw)
            if widened is not None:
                return widened

        raise UnsupportedConversionError(type(value), descriptor)

    def _convert_collection(self, value: Any, descriptor: TypeDescriptor) -> Any:
        if not is_collection_value(value):
            raise UnsupportedCollectionError(
                "Can only convert a Collection to a Collection. "
                f"Not {type_name(type(value))} to {descriptor}",
                descriptor,
            )
        kind = descriptor.collection_kind
        if kind is None:
            raise UnsupportedCollectionError(
                f"Don't know how to handle collection class: {descriptor}",
                descriptor,
            )

        if descriptor.element is None:
            # no element type: copied through unconverted
            elements = list(value)
        else:
            elements = [self.convert(element, descriptor.element) for element in value]

        try:
            return _materialize(kind, descriptor.raw, elements)
        except TypeError as exc:
            raise ConversionError(
                f"building {descriptor} from {type_name(type(value))}",
                cause=exc,
                context=ErrorContext(
                    source_type=type_name(type(value)), target_type=str(descriptor),
                ),
            ) from exc

    def _convert_mapping(self, value: Mapping, descriptor: TypeDescriptor) -> Any:
        try:
            instance = descriptor.raw()
        except Exception as exc:
            raise UninstantiableTargetError(descriptor, cause=exc) from exc
        logger.debug(f"binding {len(value)} properties onto new {descriptor}")
        self.binder.bind_all(instance, value)
        return instance

    def _resolve(self, converter: Any, unique_id: str, descriptor: TypeDescriptor) -> Any:
        logger.debug(f"resolving '{unique_id}' as {descriptor} by identifier")
        try:
            return converter.resolve_by_identifier(unique_id)
        except ConversionError:
            raise
        except Exception as exc:
            raise ConversionError(
                f"resolving '{unique_id}' as {descriptor}",
                cause=exc,
                context=ErrorContext(source_type="str", target_type=str(descriptor)),
            ) from exc


def _materialize(kind: CollectionKind, raw: type, elements: list) -> Any:
    if kind is CollectionKind.SORTED_SET:
        return SortedSet(elements)
    if kind is CollectionKind.SET:
        return frozenset(elements) if issubclass(raw, frozenset) else set(elements)
    return tuple(elements) if issubclass(raw, tuple) else elements

