"""Error Hierarchy: typed, categorized exceptions for every conversion failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every ConversionError carries a context string and an optional cause
    - to_response() produces the REST envelope, including the cause chain
    - Nothing in this module logs; failures are raised and surfaced to the caller

Design Decisions:
    - Single hierarchy with WirebindError base: the transport layer catches one type
      (ADR: uniform error shape)
    - ConversionError is the catch-all; subclasses narrow the failure kind so callers
      can branch with isinstance instead of string matching
    - cause is stored explicitly AND chained via `raise ... from` so both
      exc.cause and traceback rendering see it
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONVERSION = "conversion"
    BINDING = "binding"
    SERIALIZATION = "serialization"
    VALIDATION = "validation"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """What was being converted, to what, when it failed."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    property_name: str | None = None
    source_type: str | None = None
    target_type: str | None = None
    representation: str | None = None
    debug_info: dict[str, Any] | None = None


def type_name(tp: Any) -> str:
    """Readable name for a class, a typing hint, or a TypeDescriptor."""
    if tp is None:
        return "None"
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}" if tp.__module__ != "builtins" else tp.__qualname__
    return str(tp)


class WirebindError(Exception):
    """Base exception for all wirebind errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "property_name": self.context.property_name,
                    "source_type": self.context.source_type,
                    "target_type": self.context.target_type,
                    "representation": self.context.representation,
                },
            }
        }


class ConversionError(WirebindError):
    """Something could not be converted. Carries a context string and the cause."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        context: ErrorContext | None = None,
        code: str = "CONVERSION_ERROR",
        category: ErrorCategory = ErrorCategory.CONVERSION,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.ERROR, context, 400,
        )
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def cause_chain(self) -> list[BaseException]:
        """Underlying causes, outermost first. Stops on a repeated exception."""
        chain: list[BaseException] = []
        seen: set[int] = set()
        current = self.__cause__
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            chain.append(current)
            current = current.__cause__
        return chain

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["causes"] = [
            {"type": type(exc).__name__, "message": str(exc)}
            for exc in self.cause_chain()
        ]
        return response


# ─── Structural failures ────────────────────────────────────────

class UnsupportedConversionError(ConversionError):
    """No structural rule matches the (source, target) pair."""
    def __init__(self, source_type: Any, target_type: Any, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.source_type = type_name(source_type)
        ctx.target_type = type_name(target_type)
        super().__init__(
            f"Don't know how to convert from {ctx.source_type} to {ctx.target_type}",
            context=ctx, code="UNSUPPORTED_CONVERSION",
        )


class UnsupportedCollectionError(ConversionError):
    """Target collection is not a sequence, a set or a sorted set, or the source is not a collection."""
    def __init__(self, message: str, target_type: Any, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.target_type = type_name(target_type)
        super().__init__(message, context=ctx, code="UNSUPPORTED_COLLECTION")


class DateFormatError(ConversionError):
    """No candidate date pattern parsed the input."""
    def __init__(self, expected_format: str, cause: BaseException | None = None):
        super().__init__(
            f"Error converting date - correct format (ISO8601 Long): {expected_format}",
            cause=cause, code="DATE_FORMAT_ERROR",
        )
        self.expected_format = expected_format


class UninstantiableTargetError(ConversionError):
    """A nested mapping's target type cannot be default-constructed."""
    def __init__(self, target_type: Any, cause: BaseException | None = None):
        ctx = ErrorContext(target_type=type_name(target_type))
        super().__init__(
            f"instantiating {ctx.target_type}", cause=cause, context=ctx,
            code="UNINSTANTIABLE_TARGET", category=ErrorCategory.BINDING,
        )


class UnwritablePropertyError(ConversionError):
    """No writable property of that name on the target's type."""
    def __init__(self, property_name: str, owner: Any):
        ctx = ErrorContext(property_name=property_name, target_type=type_name(owner))
        super().__init__(
            f"no writable property '{property_name}' on {ctx.target_type}",
            context=ctx, code="UNWRITABLE_PROPERTY", category=ErrorCategory.BINDING,
        )


class UnresolvedPropertyTypeError(ConversionError):
    """The property's declared type names something that cannot be resolved."""
    def __init__(self, property_name: str, owner: Any, hint: str):
        ctx = ErrorContext(property_name=property_name, target_type=type_name(owner))
        super().__init__(
            f"cannot resolve declared type '{hint}' of {ctx.target_type}.{property_name}",
            context=ctx, code="UNRESOLVED_PROPERTY_TYPE", category=ErrorCategory.BINDING,
        )
        self.hint = hint


class UnreadablePropertyError(ConversionError):
    """No readable property of that name on the source's type."""
    def __init__(self, property_name: str, owner: Any, cause: BaseException | None = None):
        ctx = ErrorContext(property_name=property_name, source_type=type_name(owner))
        super().__init__(
            f"no readable property '{property_name}' on {ctx.source_type}",
            cause=cause, context=ctx, code="UNREADABLE_PROPERTY",
            category=ErrorCategory.SERIALIZATION,
        )


class CyclicGraphError(ConversionError):
    """A collection was reached again while it was still being serialized."""
    def __init__(self, source_type: Any):
        ctx = ErrorContext(source_type=type_name(source_type))
        super().__init__(
            f"cyclic object graph detected while serializing {ctx.source_type}",
            context=ctx, code="CYCLIC_GRAPH", category=ErrorCategory.SERIALIZATION,
        )
