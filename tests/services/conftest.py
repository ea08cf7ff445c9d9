"""Service test fixtures: a registry with the fake domain converters and an engine around it.

Invariants:
    - Every test gets a fresh registry and engine
    - LocationConverter call logs are cleared before each test
"""

import pytest

from wirebind.services.conversion_engine import ConversionEngine
from wirebind.services.converter_registry import ConverterRegistry
from tests.services.fake_domain import (
    Concept, ConceptConverter, Location, LocationConverter,
)


@pytest.fixture
def registry():
    LocationConverter.reset()
    reg = ConverterRegistry()
    reg.register(Location, LocationConverter)
    reg.register(Concept, ConceptConverter)
    return reg


@pytest.fixture
def engine(registry):
    return ConversionEngine(registry)


@pytest.fixture
def bare_engine():
    """No converters registered at all."""
    return ConversionEngine(ConverterRegistry())
