"""Document Matrix API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DocMatrixError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - No per-request document state: routes receive a tree and return a new one
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docmatrix.api.error_handlers import register_error_handlers
from docmatrix.api.middleware import register_request_tracking
from docmatrix.api.routes import documents, health, legacy
from docmatrix.config import get_settings
from docmatrix.infrastructure.metrics import request_metrics
from docmatrix.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Document Matrix API started")
    yield
    logger.info("Document Matrix API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Document Matrix API", version=settings.version, lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_request_tracking(app, request_metrics)

    app.include_router(health.router)
    app.include_router(documents.router)
    app.include_router(legacy.router)

    register_error_handlers(app)
    return app


app = create_app()
