"""Type Descriptors: built from typing hints, collection kinds, satisfaction.

Tests cover:
    - Plain classes, Optional, Any, unions, NewType
    - Parameterized collections keep their element descriptor; bare ones do not
    - Collection kinds: sequence, set, sorted set, unrecognized
    - Element type on a non-collection is rejected
    - is_satisfied_by checks elements when declared
"""

import collections.abc
from datetime import date
from typing import Any, NewType, Optional, Union

import pytest
from sortedcontainers import SortedSet

from wirebind.core.domain_types import CollectionKind
from wirebind.core.type_descriptor import (
    TypeDescriptor, is_collection_type, is_collection_value,
)

PatientId = NewType("PatientId", str)


def test_plain_class():
    assert TypeDescriptor.of(int) == TypeDescriptor(int)


def test_optional_unwraps():
    assert TypeDescriptor.of(Optional[date]) == TypeDescriptor(date)
    assert TypeDescriptor.of(date | None) == TypeDescriptor(date)


def test_any_and_multi_union_degrade_to_object():
    assert TypeDescriptor.of(Any).raw is object
    assert TypeDescriptor.of(Union[int, str]).raw is object


def test_newtype_uses_supertype():
    assert TypeDescriptor.of(PatientId).raw is str


def test_parameterized_list_keeps_element():
    descriptor = TypeDescriptor.of(list[int])
    assert descriptor.raw is list
    assert descriptor.element == TypeDescriptor(int)
    assert str(descriptor) == "list[int]"


def test_nested_collections():
    descriptor = TypeDescriptor.of(list[set[int]])
    assert descriptor.element == TypeDescriptor(set, TypeDescriptor(int))


def test_bare_collection_is_unparameterized():
    assert TypeDescriptor.of(list).element is None


def test_homogeneous_tuple():
    assert TypeDescriptor.of(tuple[int, ...]) == TypeDescriptor(tuple, TypeDescriptor(int))
    assert TypeDescriptor.of(tuple[int, str]).element is None


def test_dict_is_not_a_collection():
    descriptor = TypeDescriptor.of(dict[str, int])
    assert descriptor.raw is dict
    assert descriptor.element is None
    assert not descriptor.is_collection


def test_collection_kinds():
    assert TypeDescriptor.of(list[int]).collection_kind is CollectionKind.SEQUENCE
    assert TypeDescriptor.of(collections.abc.Sequence[int]).collection_kind is CollectionKind.SEQUENCE
    assert TypeDescriptor.of(set[int]).collection_kind is CollectionKind.SET
    assert TypeDescriptor.of(frozenset[int]).collection_kind is CollectionKind.SET
    assert TypeDescriptor.of(collections.abc.MutableSet[int]).collection_kind is CollectionKind.SET
    assert TypeDescriptor.of(SortedSet[int]).collection_kind is CollectionKind.SORTED_SET
    assert TypeDescriptor.of(int).collection_kind is None


def test_unrecognized_collection_kind():
    descriptor = TypeDescriptor.of(collections.abc.Collection[int])
    assert descriptor.is_collection
    assert descriptor.collection_kind is None


def test_element_on_scalar_rejected():
    with pytest.raises(ValueError):
        TypeDescriptor(int, TypeDescriptor(str))


def test_strings_are_not_collections():
    assert not is_collection_type(str)
    assert not is_collection_type(bytes)
    assert not is_collection_value("abc")
    assert not is_collection_value({"a": 1})
    assert is_collection_value((1, 2))
    assert is_collection_value(SortedSet([1]))


def test_is_satisfied_by_checks_elements():
    descriptor = TypeDescriptor.of(list[int])
    assert descriptor.is_satisfied_by([1, 2])
    assert not descriptor.is_satisfied_by(["1", "2"])
    assert descriptor.is_satisfied_by([1, None])
    assert not descriptor.is_satisfied_by((1, 2))


def test_is_satisfied_by_unparameterized():
    assert TypeDescriptor(list).is_satisfied_by(["a", 1])
    assert TypeDescriptor(object).is_satisfied_by("anything")
