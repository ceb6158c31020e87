"""St. Paul Crime API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CrimeApiError → plain-text responses
    - One IncidentStore per process: opened in lifespan, kept on app.state, disposed on shutdown
    - CORS enabled only when origins are configured

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store on app.state over a module singleton: handlers get it through Depends,
      tests swap it through dependency_overrides
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crime_api.api.error_handlers import register_error_handlers
from crime_api.api.routes import health, incidents
from crime_api.config import get_settings
from crime_api.infrastructure.database import IncidentStore
from crime_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = IncidentStore(settings.database_url)
    if settings.create_tables:
        await store.create_tables()
    if await store.health_check():
        logger.info(f"Now connected to {store.database_name}")
    else:
        logger.error(f"Error opening {store.database_name}")
    app.state.store = store
    yield
    logger.info("St. Paul Crime API shutting down")
    await store.dispose()


app = FastAPI(
    title="St. Paul Crime API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Routes — explicit registration
app.include_router(health.router)
app.include_router(incidents.router)

register_error_handlers(app)
