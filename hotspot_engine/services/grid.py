"""Grid indexing for hotspot aggregation.

Coordinates are snapped to the center of a roughly square cell whose edge
is a fixed number of meters. Longitude is scaled by the cosine of the
latitude so cells keep their width away from the equator (accuracy falls
off near the poles).
"""

import math
from typing import NamedTuple

# Meters per degree of latitude
METERS_PER_DEGREE_LAT = 111320.0
EARTH_RADIUS_KM = 6371.0

DEFAULT_GRID_SIZE_METERS = 1000.0


class GridCell(NamedTuple):
    """A grid cell's center and its string identity."""

    cell_lat: float
    cell_lng: float
    grid_id: str


def _round_half_up(value: float) -> int:
    # Halves round towards +infinity, like Math.round in the mobile backend.
    # floor(value + 0.5) would round 0.49999999999999994 up.
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


def format_grid_id(cell_lat: float, cell_lng: float) -> str:
    """Build the fixed-precision key for a cell center."""
    return f"{cell_lat:.6f}_{cell_lng:.6f}"


def parse_grid_id(grid_id: str) -> tuple[float, float]:
    """Recover the (latitude, longitude) center encoded in a grid id."""
    lat_text, lng_text = grid_id.split("_")
    return float(lat_text), float(lng_text)


def index_of(
    lat: float,
    lng: float,
    cell_size_meters: float = DEFAULT_GRID_SIZE_METERS,
) -> GridCell:
    """Map a coordinate to the grid cell containing it."""
    k = METERS_PER_DEGREE_LAT / cell_size_meters
    cell_lat = _round_half_up(lat * k) / k

    # The step is chosen at the point's latitude, the center at the cell's
    lng_step = _round_half_up(lng * k * math.cos(math.radians(lat)))
    cell_lng = lng_step / (k * math.cos(math.radians(cell_lat)))

    return GridCell(cell_lat, cell_lng, format_grid_id(cell_lat, cell_lng))


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in kilometers."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dl = math.radians(lng2 - lng1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dl / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
