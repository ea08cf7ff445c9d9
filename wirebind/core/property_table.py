"""Property Tables: name -> getter/setter/declared type, built once per class.

Invariants:
    - property_table(cls) is computed once per class and cached
    - Annotated attributes are readable and writable; `property` objects are
      readable, and writable only when they have a setter
    - Private names (leading underscore) and ClassVars are never exposed
    - Declared collection element types are kept (list[int] keeps `int`)
    - A hint that cannot be resolved is kept as text in unresolved_hint, never
      widened to Any: binding such a property fails instead of storing raw input

Design Decisions:
    - Explicit descriptor table over ad-hoc getattr/setattr: the declared type
      travels with the property, so binding knows what to convert to
      (ADR: no reflection at the call site)
    - Annotations resolved with typing.get_type_hints so dataclasses, plain
      annotated classes and pydantic models all describe themselves the same way
    - When the whole class fails to resolve, each hint is retried on its own
      against its defining class, so one unreachable name (a local class under
      postponed annotations, a TYPE_CHECKING-only import) only taints its own
      property
"""

import inspect
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, ClassVar

from wirebind.core.type_descriptor import TypeDescriptor


@dataclass(frozen=True)
class PropertyDescriptor:
    """One exposed property of a domain type."""
    name: str
    declared_type: TypeDescriptor
    readable: bool = True
    writable: bool = True
    unresolved_hint: str | None = None

    @property
    def is_resolved(self) -> bool:
        return self.unresolved_hint is None

    def get(self, obj: Any) -> Any:
        return getattr(obj, self.name)

    def set(self, obj: Any, value: Any) -> None:
        setattr(obj, self.name, value)


@lru_cache(maxsize=None)
def property_table(cls: type) -> dict[str, PropertyDescriptor]:
    """Build the name -> PropertyDescriptor table for `cls`."""
    table: dict[str, PropertyDescriptor] = {}
    for name, hint in _annotations(cls).items():
        if name.startswith("_") or typing.get_origin(hint) is ClassVar or hint is ClassVar:
            continue
        table[name] = _describe(name, hint)

    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if name.startswith("_") or not isinstance(attr, property):
                continue
            table[name] = _describe(
                name, _return_hint(attr),
                readable=attr.fget is not None,
                writable=attr.fset is not None,
            )
    return table


def find_property(cls: type, name: str) -> PropertyDescriptor | None:
    return property_table(cls).get(name)


def _describe(name: str, hint: Any, readable: bool = True, writable: bool = True) -> PropertyDescriptor:
    if isinstance(hint, str):
        return PropertyDescriptor(
            name, TypeDescriptor(object),
            readable=readable, writable=writable, unresolved_hint=hint,
        )
    return PropertyDescriptor(name, TypeDescriptor.of(hint), readable=readable, writable=writable)


def _annotations(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        return _annotations_one_by_one(cls)


def _annotations_one_by_one(cls: type) -> dict[str, Any]:
    """Resolve each public annotation separately; failures stay as their text.

    Some base classes (pydantic's BaseModel among them) annotate private names
    with types that only exist under TYPE_CHECKING, which makes get_type_hints
    fail for the whole class.
    """
    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, hint in inspect.get_annotations(klass).items():
            if name.startswith("_"):
                continue
            hints[name] = _resolve_one(klass, name, hint)
    return hints


def _resolve_one(owner: type, name: str, hint: Any) -> Any:
    # a one-annotation stand-in living in owner's module, with owner's body as locals
    holder = type(owner.__name__, (), {
        "__module__": owner.__module__,
        "__annotations__": {name: hint},
    })
    try:
        return typing.get_type_hints(holder, localns=dict(vars(owner)))[name]
    except (NameError, TypeError):
        return hint if isinstance(hint, str) else repr(hint)


def _return_hint(prop: property) -> Any:
    if prop.fget is None:
        return Any
    try:
        return typing.get_type_hints(prop.fget).get("return", Any)
    except (NameError, TypeError):
        hint = inspect.get_annotations(prop.fget).get("return")
        if hint is None:
            return Any
        return hint if isinstance(hint, str) else repr(hint)
