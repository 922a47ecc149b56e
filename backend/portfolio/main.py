"""Portfolio API — FastAPI application entry point.

Invariants:
    - Route groups registered explicitly (no auto-discovery)
    - Global error handlers map PortfolioError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Record store connected on startup; a failed connection aborts startup (no retry)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Health router first, then protected group, public group, catch-all fallback last
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio.api.error_handlers import register_error_handlers
from portfolio.api.route_groups import include_route_groups
from portfolio.api.routes import health
from portfolio.core.errors import StorageError
from portfolio.infrastructure.database import init_db
from portfolio.infrastructure.observability import setup_logging
from portfolio.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        await manager.connect(create_tables=settings.database_create_tables)
    except StorageError:
        logger.critical("Failed to connect to the database, exiting")
        raise
    logger.info("Portfolio API started")
    yield
    logger.info("Portfolio API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Portfolio API", version="1.0.0", lifespan=lifespan,
)

# CORS configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
include_route_groups(app, settings.site_root)
