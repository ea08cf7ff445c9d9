"""Domain Types: representation selectors and collection kinds.

Invariants:
    - Representation values are immutable and hashable
    - The engine never branches on a Representation; it only forwards it to converters
    - CollectionKind has exactly three members: sequence, set, sorted set

Design Decisions:
    - Frozen dataclasses for representations: custom selectors carry a payload,
      so a bare Enum is not enough (ADR: representations are open-ended)
    - str Enum for CollectionKind: serializes to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum


# ─── Representations ─────────────────────────────────────────────

@dataclass(frozen=True)
class Representation:
    """Depth/detail selector passed through to specialized converters."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class NamedRepresentation(Representation):
    """A representation a converter knows by name (anything but ref/default/full)."""


@dataclass(frozen=True)
class CustomRepresentation(Representation):
    """Caller-described field selection, e.g. `custom:(uuid,display)`."""
    spec: str = ""

    def __str__(self) -> str:
        return f"custom:{self.spec}"


REF = Representation("ref")
DEFAULT = Representation("default")
FULL = Representation("full")

_STANDARD = {rep.name: rep for rep in (REF, DEFAULT, FULL)}
_CUSTOM_PREFIX = "custom:"


def parse_representation(text: str | None) -> Representation:
    """Map a request parameter to a Representation. Empty means DEFAULT."""
    if not text:
        return DEFAULT
    lowered = text.strip().lower()
    if lowered in _STANDARD:
        return _STANDARD[lowered]
    if lowered.startswith(_CUSTOM_PREFIX):
        return CustomRepresentation("custom", spec=text.strip()[len(_CUSTOM_PREFIX):])
    return NamedRepresentation(text.strip())


# ─── Enums ───────────────────────────────────────────────────────

class CollectionKind(str, Enum):
    """Container families the converter can materialize."""
    SEQUENCE = "sequence"
    SET = "set"
    SORTED_SET = "sorted_set"
