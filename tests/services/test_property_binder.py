"""Property Binder: per-property binding and bind_all failure semantics.

Tests cover:
    - Compatible values written as-is (same object), None written directly
    - Values converted to the declared type, element types included
    - Nested mapping default-constructed and bound
    - Converter for the target's type owns assignment entirely
    - Unknown and read-only properties fail with the property named
    - Converter exceptions wrapped, not swallowed
    - bind_all aborts on the first failure; later properties untouched
"""

from datetime import date, datetime

import pytest
from sortedcontainers import SortedSet

from wirebind.core.errors import ConversionError, UnwritablePropertyError
from wirebind.services.converter_registry import ConverterRegistry
from wirebind.services.conversion_engine import ConversionEngine
from tests.services.fake_domain import (
    Concept, Encounter, ExplodingConverter, Gender, Location, LocationConverter,
    Person, PersonName,
)


def test_compatible_value_written_as_is(engine):
    person = Person()
    name = PersonName("Ann", "Lee")
    engine.bind(person, "name", name)
    assert person.name is name


def test_none_written_directly(engine):
    person = Person(age=40)
    engine.bind(person, "age", None)
    assert person.age is None


def test_value_converted_to_declared_type(engine):
    person = Person()
    engine.bind_all(person, {
        "birthdate": "1980-07-01T08:30:00.000+0000",
        "age": "44",
        "weight": 71,
        "gender": "M",
        "dead": "false",
    })
    assert person.birthdate.year == 1980 and person.birthdate.hour == 8
    assert person.age == 44
    assert person.weight == 71.0 and isinstance(person.weight, float)
    assert person.gender is Gender.MALE
    assert person.dead is False


def test_collection_properties_use_element_type(engine):
    person = Person()
    engine.bind_all(person, {
        "tags": ["vip", "vip", "new"],
        "scores": ["9", "7"],
        "visit_days": ["2020-02-01", "2020-01-01"],
    })
    assert person.tags == {"vip", "new"}
    assert person.scores == [9, 7]
    assert isinstance(person.visit_days, SortedSet)
    assert list(person.visit_days) == [date(2020, 1, 1), date(2020, 2, 1)]


def test_list_already_satisfying_elements_kept(engine):
    person = Person()
    scores = [1, 2]
    engine.bind(person, "scores", scores)
    assert person.scores is scores


def test_nested_object_binding(engine):
    person = Person()
    engine.bind_all(person, {"name": {"first": "Ann"}})
    assert isinstance(person.name, PersonName)
    assert person.name.first == "Ann"
    assert person.name.last is None


def test_reference_by_identifier(engine):
    encounter = Encounter()
    engine.bind_all(encounter, {
        "location": "loc-1",
        "diagnoses": ["flu", {"code": "cold", "display": "Common cold"}],
        "when": "2021-05-06",
        "notes": "  stable ",
    })
    assert encounter.location.name == "Ward A"
    assert [c.code for c in encounter.diagnoses] == ["flu", "cold"]
    assert encounter.diagnoses[1].display == "Common cold"
    assert encounter.when == date(2021, 5, 6)
    assert encounter.notes == "stable"


def test_converter_owns_assignment(engine):
    location = Location()
    engine.bind(location, "display", "loc-5|Lab")
    assert (location.uuid, location.name) == ("loc-5", "Lab")
    assert LocationConverter.set_calls == [("display", "loc-5|Lab")]


def test_unknown_property_fails_naming_it(engine):
    with pytest.raises(ConversionError) as exc_info:
        engine.bind(Person(), "nickname", "Annie")
    error = exc_info.value
    assert error.message.startswith("setting nickname on ")
    assert error.context.property_name == "nickname"
    assert isinstance(error.cause, UnwritablePropertyError)


def test_read_only_property_fails(engine):
    with pytest.raises(ConversionError) as exc_info:
        engine.bind(Person(), "display", "Ann Lee")
    assert isinstance(exc_info.value.cause, UnwritablePropertyError)


def test_private_attribute_not_bindable(engine):
    person = Person()
    with pytest.raises(ConversionError):
        engine.bind(person, "_secret", "leak")
    assert person._secret == "hidden"


def test_conversion_failure_wrapped_with_property(engine):
    with pytest.raises(ConversionError) as exc_info:
        engine.bind(Person(), "birthdate", "yesterday")
    assert exc_info.value.context.property_name == "birthdate"
    assert "yyyy-MM-dd'T'HH:mm:ss.SSSZ" in str(exc_info.value.cause)


def test_converter_exception_wrapped():
    registry = ConverterRegistry()
    registry.register(Concept, ExplodingConverter)
    engine = ConversionEngine(registry)
    with pytest.raises(ConversionError) as exc_info:
        engine.bind(Concept(), "code", "x")
    assert isinstance(exc_info.value.cause, RuntimeError)
    assert exc_info.value.context.property_name == "code"


def test_nested_failure_keeps_full_cause_chain(engine):
    with pytest.raises(ConversionError) as exc_info:
        engine.bind_all(Person(), {"name": {"middle": "X"}})
    error = exc_info.value
    assert error.context.property_name == "name"
    inner = error.cause
    assert isinstance(inner, ConversionError)
    assert inner.context.property_name == "middle"
    assert isinstance(inner.cause, UnwritablePropertyError)


def test_bind_all_aborts_on_first_failure(engine):
    person = Person()
    with pytest.raises(ConversionError) as exc_info:
        engine.bind_all(person, {
            "age": "30",
            "nickname": "Annie",
            "birthdate": "2020-01-02",
            "tags": ["late"],
        })
    assert exc_info.value.context.property_name == "nickname"
    assert "nickname" in exc_info.value.message
    # applied before the failure, not after
    assert person.age == 30
    assert person.birthdate is None
    assert person.tags == set()


def test_bind_all_returns_target(engine):
    person = Person()
    assert engine.bind_all(person, {"birthdate": datetime(2020, 1, 2)}) is person
