"""API routers."""

from hotspot_engine.routers.health import router as health_router
from hotspot_engine.routers.hotspots import router as hotspots_router
from hotspot_engine.routers.metrics import router as metrics_router

__all__ = [
    "health_router",
    "hotspots_router",
    "metrics_router",
]
