"""GDP Records API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the {success: false, ...} envelope
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - Static UI mounted AFTER API routes so /api/* takes precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from gdp_records.api.error_handlers import register_error_handlers
from gdp_records.api.routes import gdp_records, health
from gdp_records.config import get_settings
from gdp_records.infrastructure import database
from gdp_records.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.auto_create_tables:
        await manager.create_tables()
    logger.info("GDP records database ready")
    yield
    await manager.close()
    logger.info("GDP records API shutting down")


def create_app() -> FastAPI:
    """Build the FastAPI application with routes, middleware and handlers."""
    settings = get_settings()
    app = FastAPI(title="GDP Records API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(gdp_records.router)
    register_error_handlers(app)

    # html=True serves index.html for "/"
    if os.path.isdir(settings.static_dir):
        app.mount(
            "/", StaticFiles(directory=settings.static_dir, html=True),
            name="static",
        )
    return app


app = create_app()
