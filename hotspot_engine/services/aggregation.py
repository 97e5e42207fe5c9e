"""Aggregation run: fetch recent reports, cluster, classify and commit."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from hotspot_engine.config import Settings, get_settings
from hotspot_engine.database import async_session_maker, utc_now
from hotspot_engine.services.clustering import aggregate
from hotspot_engine.services.heat import HeatThresholds, classify
from hotspot_engine.services.repository import HotspotRecord, HotspotRepository, ReportSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunSummary:
    """Outcome of one aggregation run."""

    reports_processed: int
    hotspots_updated: int
    hotspots_pruned: int = 0


class AggregationRun:
    """Recompute every hotspot from the reports in the lookback window.

    Scheduled and on-demand triggers both call :meth:`run`. Hotspots are
    always recomputed from scratch and written by key, so a run can be
    repeated or overlap another run without double counting.
    """

    def __init__(
        self,
        report_source: ReportSource,
        repository: HotspotRepository,
        grid_size_meters: float = 1000.0,
        lookback_hours: int = 24,
        thresholds: HeatThresholds | None = None,
    ):
        self._report_source = report_source
        self._repository = repository
        self._grid_size_meters = grid_size_meters
        self._lookback_hours = lookback_hours
        self._thresholds = thresholds or HeatThresholds()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        report_source: ReportSource,
        repository: HotspotRepository,
    ) -> "AggregationRun":
        return cls(
            report_source,
            repository,
            grid_size_meters=settings.grid_size_meters,
            lookback_hours=settings.lookback_hours,
            thresholds=HeatThresholds.from_settings(settings),
        )

    @property
    def radius(self) -> float:
        return self._grid_size_meters / 2

    def build_records(self, reports: list, now: datetime) -> dict[str, HotspotRecord]:
        """Turn a window of reports into one hotspot record per grid cell."""
        computed: dict[str, HotspotRecord] = {}
        for grid_id, cluster in aggregate(reports, self._grid_size_meters).items():
            computed[grid_id] = HotspotRecord(
                grid_id=grid_id,
                latitude=cluster.center_lat,
                longitude=cluster.center_lng,
                heat_level=classify(
                    cluster.report_count,
                    cluster.hours_since_oldest(now),
                    self._thresholds,
                ),
                report_count=cluster.report_count,
                last_updated=now,
                radius=self.radius,
            )
        return computed

    async def run(
        self,
        now: datetime | None = None,
        lookback_hours: int | None = None,
    ) -> RunSummary:
        """Run one fetch, cluster, classify and commit pass.

        Fetch and commit errors propagate to the caller; nothing is written
        unless the commit succeeds as a whole.
        """
        now = now or utc_now()
        hours = lookback_hours if lookback_hours is not None else self._lookback_hours
        window_start = now - timedelta(hours=hours)

        logger.info(f"Starting aggregation run for reports since {window_start.isoformat()}")
        reports = await self._report_source.fetch_since(window_start)

        if not reports:
            logger.info("No recent reports found, pruning stale hotspots only")
            result = await self._repository.commit({}, window_start)
            return RunSummary(reports_processed=0, hotspots_updated=0, hotspots_pruned=result.pruned)

        computed = self.build_records(reports, now)
        result = await self._repository.commit(computed, window_start)

        logger.info(
            f"Processed {len(reports)} reports into {len(computed)} hotspots "
            f"({result.pruned} stale hotspots pruned)"
        )
        return RunSummary(
            reports_processed=len(reports),
            hotspots_updated=len(computed),
            hotspots_pruned=result.pruned,
        )


def build_aggregation_run(settings: Settings | None = None) -> AggregationRun:
    """Wire an aggregation run to the application database."""
    settings = settings or get_settings()
    return AggregationRun.from_settings(
        settings,
        ReportSource(async_session_maker),
        HotspotRepository(async_session_maker),
    )
