"""Type Descriptors: a raw class plus, for collections, one element descriptor.

Invariants:
    - element is set ONLY when raw is a collection type (enforced on construction)
    - element is None means "unparameterized": elements are copied unconverted
    - Strings, bytes and mappings are never collection-like
    - SortedSet is checked before Set and Sequence (it is both)

Design Decisions:
    - Built from typing hints (list[int], set[str], SortedSet[Date], Optional[X]),
      so domain classes declare element types with ordinary annotations
    - Unions other than Optional degrade to `object`: anything satisfies them,
      so no conversion is attempted
"""

import collections.abc
import types
import typing
from dataclasses import dataclass
from typing import Any

from sortedcontainers import SortedSet

from wirebind.core.domain_types import CollectionKind

_NOT_COLLECTIONS = (str, bytes, bytearray, collections.abc.Mapping)


def is_collection_type(raw: Any) -> bool:
    return (
        isinstance(raw, type)
        and issubclass(raw, collections.abc.Collection)
        and not issubclass(raw, _NOT_COLLECTIONS)
    )


def is_collection_value(value: Any) -> bool:
    return (
        isinstance(value, collections.abc.Collection)
        and not isinstance(value, _NOT_COLLECTIONS)
    )


@dataclass(frozen=True)
class TypeDescriptor:
    """Target type for binding: raw class and optional element descriptor."""
    raw: type
    element: "TypeDescriptor | None" = None

    def __post_init__(self):
        if self.element is not None and not is_collection_type(self.raw):
            raise ValueError(
                f"element type given for non-collection {self.raw!r}",
            )

    def __str__(self) -> str:
        name = getattr(self.raw, "__qualname__", repr(self.raw))
        if self.element is None:
            return name
        return f"{name}[{self.element}]"

    @property
    def is_collection(self) -> bool:
        return is_collection_type(self.raw)

    @property
    def collection_kind(self) -> CollectionKind | None:
        """Kind of container to build, or None when not a recognized collection."""
        if not self.is_collection:
            return None
        if issubclass(self.raw, SortedSet):
            return CollectionKind.SORTED_SET
        if issubclass(self.raw, collections.abc.Set):
            return CollectionKind.SET
        if issubclass(self.raw, collections.abc.Sequence):
            return CollectionKind.SEQUENCE
        return None

    def is_satisfied_by(self, value: Any) -> bool:
        """True when `value` can be assigned as-is: right class, and right elements if declared."""
        if not isinstance(value, self.raw):
            return False
        if self.element is None or not self.is_collection:
            return True
        return all(
            element is None or self.element.is_satisfied_by(element)
            for element in value
        )

    @classmethod
    def of(cls, hint: Any) -> "TypeDescriptor":
        """Describe a typing hint or a plain class."""
        hint = _unwrap(hint)
        origin = typing.get_origin(hint)
        if origin is None:
            return cls(hint if isinstance(hint, type) else object)
        if not isinstance(origin, type):
            return cls(object)
        args = typing.get_args(hint)
        if not is_collection_type(origin) or not args:
            return cls(origin)
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return cls(tuple, cls.of(args[0]))
            return cls(tuple)
        return cls(origin, cls.of(args[0]))


def _unwrap(hint: Any) -> Any:
    """Strip Optional, Annotated and NewType down to the type that matters."""
    while True:
        if hint is None or hint is type(None) or hint is Any:
            return object
        supertype = getattr(hint, "__supertype__", None)
        if supertype is not None:
            hint = supertype
            continue
        origin = typing.get_origin(hint)
        if origin is typing.Annotated:
            hint = typing.get_args(hint)[0]
            continue
        if origin is typing.Union or origin is types.UnionType:
            members = [a for a in typing.get_args(hint) if a is not type(None)]
            if len(members) == 1:
                hint = members[0]
                continue
            return object
        return hint

