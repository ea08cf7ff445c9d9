"""wirebind API: FastAPI application factory for hosts that expose the engine.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map WirebindError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One ConversionEngine per app, stored on app.state

Design Decisions:
    - Factory over module-level app: the host supplies its converter registry
    - Lifespan over @app.on_event: logging configured once on startup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wirebind.api.error_handlers import register_error_handlers
from wirebind.api.routes import health
from wirebind.config import Settings, get_settings
from wirebind.core.converter_protocols import ConverterLookup
from wirebind.infrastructure.observability import setup_logging
from wirebind.services.conversion_engine import ConversionEngine
from wirebind.services.converter_registry import ConverterRegistry

logger = logging.getLogger(__name__)


def create_app(
    registry: ConverterLookup | None = None, settings: Settings | None = None,
) -> FastAPI:
    """Build the FastAPI app around `registry` (an empty registry by default)."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_format)
        logger.info("wirebind API started")
        yield
        logger.info("wirebind API shutting down")

    app = FastAPI(title="wirebind API", version="1.0.0", lifespan=lifespan)
    app.state.engine = ConversionEngine.from_settings(
        registry if registry is not None else ConverterRegistry(), settings,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    register_error_handlers(app)
    return app
