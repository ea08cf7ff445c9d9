"""Request Dependencies: engine and representation selector for host routes.

Invariants:
    - The engine lives on app.state, created once by create_app()
    - `?v=` selects the representation; absent falls back to the configured default
"""

from fastapi import Query, Request

from wirebind.config import get_settings
from wirebind.core.domain_types import Representation, parse_representation
from wirebind.services.conversion_engine import ConversionEngine


def get_engine(request: Request) -> ConversionEngine:
    return request.app.state.engine


def get_representation(v: str | None = Query(default=None)) -> Representation:
    """Representation requested by the client (`?v=ref|default|full|custom:...`)."""
    return parse_representation(v or get_settings().default_representation)
