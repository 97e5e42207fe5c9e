"""Hotspot query and on-demand aggregation endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from hotspot_engine.auth.middleware import get_current_user
from hotspot_engine.config import Settings, get_settings
from hotspot_engine.database import async_session_maker
from hotspot_engine.exceptions import AggregationError
from hotspot_engine.schemas.auth import CallerIdentity
from hotspot_engine.schemas.hotspots import (
    HotspotResponse,
    NearbyHotspot,
    NearbyHotspotsResponse,
    RefreshResponse,
)
from hotspot_engine.services.aggregation import AggregationRun, build_aggregation_run
from hotspot_engine.services.repository import HotspotRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/hotspots", tags=["hotspots"])


def get_hotspot_repository() -> HotspotRepository:
    """Dependency that provides the hotspot repository."""
    return HotspotRepository(async_session_maker)


def get_aggregation_run() -> AggregationRun:
    """Dependency that provides an aggregation run wired to the database."""
    return build_aggregation_run()


@router.get("", response_model=list[HotspotResponse])
async def list_hotspots(
    repository: HotspotRepository = Depends(get_hotspot_repository),
) -> list[HotspotResponse]:
    """Get all current hotspots for the map overlay."""
    hotspots = await repository.list_all()
    return [HotspotResponse.model_validate(hotspot) for hotspot in hotspots]


@router.get("/nearby", response_model=NearbyHotspotsResponse)
async def nearby_hotspots(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    _user: CallerIdentity = Depends(get_current_user),
    repository: HotspotRepository = Depends(get_hotspot_repository),
    settings: Settings = Depends(get_settings),
) -> NearbyHotspotsResponse:
    """Get hotspots within the alert radius of the caller's position."""
    try:
        nearby = await repository.list_near(latitude, longitude, settings.nearby_radius_km)
    except SQLAlchemyError:
        logger.exception("Failed to retrieve nearby hotspots")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="internal",
        )

    hotspots = [
        NearbyHotspot(
            **HotspotResponse.model_validate(hotspot).model_dump(),
            distance_km=round(distance, 3),
        )
        for hotspot, distance in nearby
    ]
    return NearbyHotspotsResponse(
        hotspots=hotspots,
        count=len(hotspots),
        radius_km=settings.nearby_radius_km,
    )


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_hotspots(
    user: CallerIdentity = Depends(get_current_user),
    aggregation: AggregationRun = Depends(get_aggregation_run),
) -> RefreshResponse:
    """Recompute hotspots now, e.g. right after a report is submitted."""
    logger.info(f"On-demand aggregation requested by {user.user_id}")
    try:
        summary = await aggregation.run()
    except AggregationError:
        logger.exception("On-demand aggregation run failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="internal",
        )

    return RefreshResponse(
        success=True,
        hotspots_updated=summary.hotspots_updated,
        reports_processed=summary.reports_processed,
        message=(
            f"Processed {summary.reports_processed} reports into "
            f"{summary.hotspots_updated} hotspots"
        ),
    )
