"""Primitive Codec: strings to scalar values (dates first of all) and back.

Invariants:
    - DATE_FORMATS is tried strictly in order; the first full-string match wins
    - Offset-and-milliseconds form is tried first, bare date last
    - format_date ALWAYS emits the long ISO-8601 form (CANONICAL_FORMAT),
      whatever pattern the value was parsed from
    - Total date parse failure raises DateFormatError naming CANONICAL_FORMAT,
      chained to the last strptime error
    - Millisecond patterns (SSS) accept exactly three fraction digits: ".5" and
      ".500000" match no pattern rather than being read as a decimal fraction
    - Other scalars (int, float, Decimal, bool, UUID, Enum) parse strictly:
      bad text raises ConversionError, never a default value

Design Decisions:
    - Wire patterns kept in their Java-style literal form next to the strptime
      equivalent: the literal is what clients are told, strptime is what runs
    - Patterns without an offset produce naive datetimes (local time); formatting
      a naive value interprets it as local time, matching how it was parsed
    - bool parses only "true"/"false" (any case): "yes", "1" and friends are
      ambiguous on the wire
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable
from uuid import UUID

from wirebind.core.errors import ConversionError, DateFormatError, ErrorContext, type_name

# (wire pattern, strptime pattern), in trial order
DATE_FORMATS: tuple[tuple[str, str], ...] = (
    ("yyyy-MM-dd'T'HH:mm:ss.SSSZ", "%Y-%m-%dT%H:%M:%S.%f%z"),
    ("yyyy-MM-dd'T'HH:mm:ss.SSS", "%Y-%m-%dT%H:%M:%S.%f"),
    ("yyyy-MM-dd'T'HH:mm:ssZ", "%Y-%m-%dT%H:%M:%S%z"),
    ("yyyy-MM-dd'T'HH:mm:ss", "%Y-%m-%dT%H:%M:%S"),
    ("yyyy-MM-dd HH:mm:ss", "%Y-%m-%d %H:%M:%S"),
    ("yyyy-MM-dd", "%Y-%m-%d"),
)

CANONICAL_FORMAT = DATE_FORMATS[0][0]

_MILLIS = re.compile(r":\d{2}\.\d{3}(?!\d)")


# ─── Dates ───────────────────────────────────────────────────────

def is_date_like(tp: type) -> bool:
    """True when a parsed datetime can be assigned to `tp`."""
    return isinstance(tp, type) and issubclass(datetime, tp) and tp is not object


def parse_date(text: str) -> datetime:
    """Parse `text` with the first matching pattern of DATE_FORMATS."""
    last_error: ValueError | None = None
    for _, pattern in DATE_FORMATS:
        if "%f" in pattern and _MILLIS.search(text) is None:
            continue
        try:
            return datetime.strptime(text, pattern)
        except ValueError as exc:
            last_error = exc
    raise DateFormatError(CANONICAL_FORMAT, cause=last_error) from last_error


def format_date(value: date) -> str:
    """Render as yyyy-MM-dd'T'HH:mm:ss.SSS±hhmm."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None or value.utcoffset() is None:
        value = value.astimezone()
    millis = value.microsecond // 1000
    return value.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}" + value.strftime("%z")


# ─── Other scalars ───────────────────────────────────────────────

def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _parse_decimal(text: str) -> Decimal:
    try:
        return Decimal(text.strip())
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal: {text!r}") from exc


_SCALAR_PARSERS: dict[type, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: int,
    float: float,
    Decimal: _parse_decimal,
    UUID: UUID,
}


def has_scalar_parser(tp: type) -> bool:
    return tp in _SCALAR_PARSERS or (isinstance(tp, type) and issubclass(tp, Enum))


def parse_scalar(text: str, tp: type) -> Any:
    """Parse `text` as `tp`. Enums match by value first, then by member name."""
    try:
        if issubclass(tp, Enum):
            return _parse_enum(text, tp)
        return _SCALAR_PARSERS[tp](text)
    except (ValueError, KeyError) as exc:
        raise ConversionError(
            f"Error converting '{text}' to {type_name(tp)}",
            cause=exc,
            context=ErrorContext(source_type="str", target_type=type_name(tp)),
        ) from exc


def _parse_enum(text: str, tp: type[Enum]) -> Enum:
    for member in tp:
        if member.value == text or str(member.value) == text:
            return member
    return tp[text]


def widen_number(value: Any, tp: type) -> Any:
    """int -> float/Decimal, float -> Decimal. None when no widening applies."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if tp is float and isinstance(value, int):
        return float(value)
    if tp is Decimal:
        return Decimal(str(value))
    return None
