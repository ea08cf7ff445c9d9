"""Postponed Annotations: string hints resolve, or binding refuses the property.

Tests cover:
    - Module-level classes under postponed annotations bind nested objects
    - A locally defined nested class cannot be resolved: binding it fails
      instead of storing the raw mapping
    - Resolvable neighbours of an unresolvable hint still bind normally
    - Properties whose getter return hint is unresolvable refuse writes
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from wirebind.core.errors import ConversionError, UnresolvedPropertyTypeError
from wirebind.core.property_table import find_property, property_table
from wirebind.core.type_descriptor import TypeDescriptor


@dataclass
class Bed:
    number: int = 0


@dataclass
class Ward:
    name: str = ""
    head_bed: Bed | None = None
    beds: list[Bed] = field(default_factory=list)


def test_module_level_string_hints_resolve():
    table = property_table(Ward)
    assert table["head_bed"].declared_type == TypeDescriptor(Bed)
    assert table["beds"].declared_type == TypeDescriptor(list, TypeDescriptor(Bed))
    assert all(prop.is_resolved for prop in table.values())


def test_module_level_nested_binding(engine):
    ward = engine.bind_all(Ward(), {
        "head_bed": {"number": "3"},
        "beds": [{"number": 1}, {"number": "2"}],
    })
    assert ward.head_bed == Bed(3)
    assert ward.beds == [Bed(1), Bed(2)]


def test_local_nested_dataclass_is_not_bound_raw(engine):
    @dataclass
    class Inner:
        first: str = ""

    @dataclass
    class Outer:
        label: str = ""
        name: Inner | None = None

    prop = find_property(Outer, "name")
    assert not prop.is_resolved
    assert prop.unresolved_hint == "Inner | None"

    outer = Outer()
    with pytest.raises(ConversionError) as exc_info:
        engine.bind_all(outer, {"name": {"first": "Ann"}})
    assert exc_info.value.context.property_name == "name"
    assert isinstance(exc_info.value.cause, UnresolvedPropertyTypeError)
    assert "Inner | None" in exc_info.value.cause.message
    assert outer.name is None


def test_resolvable_neighbour_still_binds(engine):
    class Unknown:
        pass

    @dataclass
    class Holder:
        label: str = ""
        mystery: Unknown | None = None

    holder = engine.bind_all(Holder(), {"label": "kept"})
    assert holder.label == "kept"
    assert find_property(Holder, "label").declared_type == TypeDescriptor(str)


def test_unresolvable_property_setter_refused(engine):
    class Hidden:
        pass

    class Box:
        def __init__(self):
            self._content = None

        @property
        def content(self) -> Hidden:
            return self._content

        @content.setter
        def content(self, value):
            self._content = value

    box = Box()
    with pytest.raises(ConversionError) as exc_info:
        engine.bind(box, "content", {"anything": 1})
    assert isinstance(exc_info.value.cause, UnresolvedPropertyTypeError)
    assert box.content is None
