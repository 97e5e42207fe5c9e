"""Shared fixtures: in-memory stores and an API client."""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from hotspot_engine.models import Hotspot, WildlifeReport
from hotspot_engine.services.grid import haversine_km
from hotspot_engine.services.repository import CommitResult, HotspotRecord

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


def make_report(
    latitude: float,
    longitude: float,
    minutes_ago: float = 0,
    now: datetime = NOW,
    animal_type: str = "deer",
) -> WildlifeReport:
    """Build a report timestamped ``minutes_ago`` before ``now``."""
    return WildlifeReport(
        user_id="user-1",
        timestamp=now - timedelta(minutes=minutes_ago),
        latitude=latitude,
        longitude=longitude,
        animal_count=1,
        animal_type=animal_type,
    )


class InMemoryReportSource:
    """Report store backed by a list."""

    def __init__(self, reports=None):
        self.reports = list(reports or [])
        self.error: Exception | None = None
        self.calls: list[datetime] = []

    async def fetch_since(self, window_start: datetime) -> list[WildlifeReport]:
        self.calls.append(window_start)
        if self.error:
            raise self.error
        return [r for r in self.reports if r.timestamp >= window_start]


class InMemoryHotspotRepository:
    """Hotspot store backed by a dict, with all-or-nothing commits."""

    def __init__(self):
        self.rows: dict[str, dict] = {}
        self.error: Exception | None = None
        self.commits: list[tuple[dict, datetime]] = []

    def seed(self, **row) -> None:
        self.rows[row["grid_id"]] = row

    async def commit(
        self,
        computed: dict[str, HotspotRecord],
        window_start: datetime,
    ) -> CommitResult:
        self.commits.append((computed, window_start))
        if self.error:
            raise self.error

        staged = {grid_id: dict(row) for grid_id, row in self.rows.items()}
        upserted = 0
        for grid_id, record in computed.items():
            existing = staged.get(grid_id)
            if existing and existing["last_updated"] > record.last_updated:
                continue
            staged[grid_id] = {**(existing or {}), **record.as_row()}
            upserted += 1

        stale = [g for g, row in staged.items() if row["last_updated"] < window_start]
        for grid_id in stale:
            del staged[grid_id]

        self.rows = staged
        return CommitResult(upserted=upserted, pruned=len(stale))

    async def list_all(self) -> list[Hotspot]:
        return [Hotspot(**self.rows[grid_id]) for grid_id in sorted(self.rows)]

    async def list_near(self, latitude: float, longitude: float, radius_km: float):
        nearby = []
        for hotspot in await self.list_all():
            distance = haversine_km(latitude, longitude, hotspot.latitude, hotspot.longitude)
            if distance <= radius_km:
                nearby.append((hotspot, distance))
        nearby.sort(key=lambda item: item[1])
        return nearby


@pytest.fixture
def report_source():
    return InMemoryReportSource()


@pytest.fixture
def hotspot_store():
    return InMemoryHotspotRepository()


@pytest.fixture
async def client():
    """HTTP client for the application; lifespan (database, scheduler) is not run."""
    from hotspot_engine.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
