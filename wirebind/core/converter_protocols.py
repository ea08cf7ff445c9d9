"""Boundary Protocols: contracts between the engine and per-type converters.

Invariants:
    - The engine NEVER imports a concrete domain converter; it only sees these Protocols
    - "No converter for this type" is a None return, never an exception
    - A SpecializedConverter owns its type entirely: property assignment,
      identifier resolution and representation

Design Decisions:
    - Protocol over ABC: structural subtyping, converters need not inherit anything
      (ADR: no inheritance hierarchy for plug-ins)
    - Synchronous: conversion is in-memory graph traversal, no IO
"""

from typing import Any, Protocol, runtime_checkable

from wirebind.core.domain_types import Representation


@runtime_checkable
class SpecializedConverter(Protocol):
    """Per-domain-type converter registered by the host application."""

    def set_property(self, instance: Any, name: str, value: Any) -> None: ...

    def resolve_by_identifier(self, unique_id: str) -> Any: ...

    def to_representation(self, instance: Any, rep: Representation) -> Any: ...


class ConverterLookup(Protocol):
    """Anything that can pick the preferred converter for a runtime type."""

    def preferred_converter_for(self, cls: type) -> SpecializedConverter | None: ...
