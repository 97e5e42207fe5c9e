"""Schemas for hotspot queries and aggregation runs."""

from datetime import datetime

from pydantic import BaseModel

from hotspot_engine.models import HeatLevel


class HotspotResponse(BaseModel):
    """A hotspot as served to map and alerting clients."""

    grid_id: str
    latitude: float
    longitude: float
    heat_level: HeatLevel
    report_count: int
    radius: float
    last_updated: datetime

    model_config = {"from_attributes": True}


class NearbyHotspot(HotspotResponse):
    """A hotspot with its distance from the queried point."""

    distance_km: float


class NearbyHotspotsResponse(BaseModel):
    """Hotspots within the search radius, closest first."""

    hotspots: list[NearbyHotspot]
    count: int
    radius_km: float


class RefreshResponse(BaseModel):
    """Result of an on-demand aggregation run."""

    success: bool
    hotspots_updated: int
    reports_processed: int
    message: str
