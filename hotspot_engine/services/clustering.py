"""Group sighting reports into grid cells."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from hotspot_engine.services.grid import DEFAULT_GRID_SIZE_METERS, index_of, parse_grid_id


class ReportLike(Protocol):
    """The report fields clustering reads."""

    latitude: float
    longitude: float
    timestamp: datetime


@dataclass
class ClusterStats:
    """Per-cell statistics for one aggregation window."""

    grid_id: str
    center_lat: float
    center_lng: float
    report_count: int
    oldest_timestamp: datetime
    newest_timestamp: datetime

    def hours_since_oldest(self, now: datetime) -> float:
        return (now - self.oldest_timestamp).total_seconds() / 3600


def aggregate(
    reports: Iterable[ReportLike],
    cell_size_meters: float = DEFAULT_GRID_SIZE_METERS,
) -> dict[str, ClusterStats]:
    """Group reports by grid cell.

    Each cluster's center is the cell's canonical center (decoded from the
    grid id) rather than the centroid of its reports, so every report in a
    cell resolves to the same point. The result does not depend on the
    order of ``reports``.
    """
    clusters: dict[str, ClusterStats] = {}

    for report in reports:
        grid_id = index_of(report.latitude, report.longitude, cell_size_meters).grid_id
        cluster = clusters.get(grid_id)
        if cluster is None:
            center_lat, center_lng = parse_grid_id(grid_id)
            clusters[grid_id] = ClusterStats(
                grid_id=grid_id,
                center_lat=center_lat,
                center_lng=center_lng,
                report_count=1,
                oldest_timestamp=report.timestamp,
                newest_timestamp=report.timestamp,
            )
            continue

        cluster.report_count += 1
        if report.timestamp < cluster.oldest_timestamp:
            cluster.oldest_timestamp = report.timestamp
        if report.timestamp > cluster.newest_timestamp:
            cluster.newest_timestamp = report.timestamp

    return clusters
