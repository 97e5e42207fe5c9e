"""Background service that runs hotspot aggregation on a fixed interval."""

import asyncio
import logging
from datetime import datetime

from hotspot_engine.database import utc_now
from hotspot_engine.services.aggregation import AggregationRun, RunSummary

logger = logging.getLogger(__name__)


class AggregationScheduler:
    """Runs aggregation every ``interval_minutes`` with system privilege.

    A failed run is logged and left for the next tick to repair; there is
    no retry in between.
    """

    def __init__(self, aggregation: AggregationRun, interval_minutes: int = 60):
        self._aggregation = aggregation
        self._interval = interval_minutes * 60
        self._running = False
        self._task: asyncio.Task | None = None
        self.last_run_at: datetime | None = None
        self.last_summary: RunSummary | None = None
        self.last_error: str | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the scheduler service."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._schedule_loop())
        logger.info(f"Started aggregation scheduler (every {self._interval // 60} minutes)")

    async def stop(self) -> None:
        """Stop the scheduler service."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Stopped aggregation scheduler")

    async def run_once(self) -> RunSummary | None:
        """Run a single scheduled aggregation and record its outcome."""
        now = utc_now()
        self.last_run_at = now
        try:
            summary = await self._aggregation.run(now=now)
        except Exception as e:
            self.last_error = str(e)
            logger.exception("Scheduled aggregation run failed")
            return None

        self.last_summary = summary
        self.last_error = None
        logger.info(
            f"Scheduled aggregation: {summary.reports_processed} reports, "
            f"{summary.hotspots_updated} hotspots updated"
        )
        return summary

    async def _schedule_loop(self) -> None:
        """Periodic aggregation loop."""
        while self._running:
            await self.run_once()
            await asyncio.sleep(self._interval)
