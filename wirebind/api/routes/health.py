"""Health Probe: liveness endpoint, plus the converter types the engine knows.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up
"""

import logging

from fastapi import APIRouter, Depends, status

from wirebind.api.dependencies import get_engine
from wirebind.services.conversion_engine import ConversionEngine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(engine: ConversionEngine = Depends(get_engine)):
    """Basic liveness probe. Returns 200 if the process is up."""
    supported = getattr(engine.registry, "supported_types", lambda: [])()
    return {
        "status": "healthy",
        "service": "wirebind",
        "converters": sorted(t.__name__ for t in supported),
    }
