"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from hotspot_engine import __version__
from hotspot_engine.config import get_settings
from hotspot_engine.database import close_db, init_db
from hotspot_engine.routers import health_router, hotspots_router, metrics_router
from hotspot_engine.services.aggregation import build_aggregation_run
from hotspot_engine.services.scheduler import AggregationScheduler

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting hotspot engine...")

    await init_db()
    logger.info("Database initialized")

    scheduler = AggregationScheduler(
        build_aggregation_run(settings),
        interval_minutes=settings.aggregation_interval_minutes,
    )
    app.state.scheduler = scheduler
    if settings.scheduler_enabled:
        await scheduler.start()
    else:
        logger.info("Aggregation scheduler disabled")

    yield

    # Shutdown
    logger.info("Shutting down hotspot engine...")
    await scheduler.stop()
    await close_db()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Hotspot Engine",
    description="Aggregates wildlife sighting reports into map hotspots",
    version=__version__,
    lifespan=lifespan,
)

# Session middleware carries the caller identity for authenticated endpoints
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    max_age=86400,  # 24 hours
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(hotspots_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Hotspot Engine",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics",
    }
