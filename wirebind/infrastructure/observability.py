"""Structured Logging: one JSON object per record, conversion context included.

Invariants:
    - Every record carries timestamp (from the record, UTC), level, logger, message
    - Context extras (property_name, source/target type, representation, error
      code, request path) appear only when set
    - A record logged with a ConversionError attached also carries that error's
      code and cause chain
    - setup_logging replaces its own previous handler instead of stacking a second one

Design Decisions:
    - stdlib logging with a custom Formatter: services only ever call
      logging.getLogger(__name__), the host decides the output shape
"""

import json
import logging
from datetime import datetime, timezone

from wirebind.core.errors import ConversionError

HANDLER_NAME = "wirebind"

CONTEXT_FIELDS = (
    "property_name", "source_type", "target_type", "representation",
    "error_code", "path",
)


class JSONFormatter(logging.Formatter):
    """Render records as single-line JSON."""

    def __init__(self, context_fields: tuple[str, ...] = CONTEXT_FIELDS):
        super().__init__()
        self.context_fields = context_fields

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in self.context_fields:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value
        if record.exc_info:
            exc = record.exc_info[1]
            if isinstance(exc, ConversionError):
                entry.setdefault("error_code", exc.code)
                entry["causes"] = [type(cause).__name__ for cause in exc.cause_chain()]
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the wirebind handler on the root logger and return it."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
