"""Prometheus metrics endpoint."""

from datetime import timedelta

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotspot_engine.config import get_settings
from hotspot_engine.database import get_db, utc_now
from hotspot_engine.models import HeatLevel, Hotspot, WildlifeReport
from hotspot_engine.services.scheduler import AggregationScheduler

router = APIRouter(tags=["metrics"])


async def collect_metrics(
    db: AsyncSession,
    scheduler: AggregationScheduler | None = None,
) -> bytes:
    """Collect all metrics and return Prometheus format."""
    registry = CollectorRegistry()
    settings = get_settings()

    hotspots = Gauge(
        "hotspot_engine_hotspots",
        "Stored hotspots by heat level",
        ["heat_level"],
        registry=registry,
    )
    reports_in_window = Gauge(
        "hotspot_engine_reports_in_window",
        "Reports inside the current lookback window",
        registry=registry,
    )
    last_refresh = Gauge(
        "hotspot_engine_hotspot_last_updated_timestamp",
        "Most recent hotspot refresh (Unix seconds)",
        registry=registry,
    )
    scheduler_healthy = Gauge(
        "hotspot_engine_scheduler_healthy",
        "Last scheduled aggregation status (1=ok, 0=error)",
        registry=registry,
    )
    scheduler_last_run = Gauge(
        "hotspot_engine_scheduler_last_run_timestamp",
        "Last scheduled aggregation attempt (Unix seconds)",
        registry=registry,
    )

    # Every level is exported so absent levels read as zero
    counts = {level: 0 for level in HeatLevel}
    result = await db.execute(
        select(Hotspot.heat_level, func.count()).group_by(Hotspot.heat_level)
    )
    for heat_level, count in result.all():
        counts[HeatLevel(heat_level)] = count
    for level, count in counts.items():
        hotspots.labels(heat_level=level.value).set(count)

    window_start = utc_now() - timedelta(hours=settings.lookback_hours)
    report_count = await db.execute(
        select(func.count())
        .select_from(WildlifeReport)
        .where(WildlifeReport.timestamp >= window_start)
    )
    reports_in_window.set(report_count.scalar() or 0)

    newest = await db.execute(select(func.max(Hotspot.last_updated)))
    newest_updated = newest.scalar()
    if newest_updated:
        last_refresh.set(newest_updated.timestamp())

    if scheduler is not None and scheduler.last_run_at:
        scheduler_last_run.set(scheduler.last_run_at.timestamp())
        scheduler_healthy.set(0 if scheduler.last_error else 1)

    return generate_latest(registry)


@router.get("/metrics", response_class=PlainTextResponse)
async def prometheus_metrics(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> PlainTextResponse:
    """Prometheus metrics endpoint."""
    scheduler = getattr(request.app.state, "scheduler", None)
    metrics_data = await collect_metrics(db, scheduler)
    return PlainTextResponse(content=metrics_data, media_type=CONTENT_TYPE_LATEST)
