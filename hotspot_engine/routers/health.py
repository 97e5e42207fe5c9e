"""Health check endpoint."""

from fastapi import APIRouter, Request

from hotspot_engine import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict:
    """Liveness check with scheduler state."""
    scheduler = getattr(request.app.state, "scheduler", None)
    return {
        "status": "ok",
        "version": __version__,
        "scheduler_running": bool(scheduler and scheduler.running),
    }
