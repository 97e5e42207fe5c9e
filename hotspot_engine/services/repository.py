"""Persistence boundary for reports and hotspots."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hotspot_engine.exceptions import HotspotCommitError, ReportFetchError
from hotspot_engine.models import HeatLevel, Hotspot, WildlifeReport
from hotspot_engine.services.grid import EARTH_RADIUS_KM, haversine_km

logger = logging.getLogger(__name__)

# Rows per INSERT statement; keeps bind parameters well under the PostgreSQL limit
UPSERT_BATCH_SIZE = 1000

# Columns overwritten when a hotspot already exists
UPSERT_COLUMNS = ("latitude", "longitude", "heat_level", "report_count", "radius", "last_updated")


@dataclass(frozen=True)
class HotspotRecord:
    """A freshly computed hotspot, ready to be written."""

    grid_id: str
    latitude: float
    longitude: float
    heat_level: HeatLevel
    report_count: int
    last_updated: datetime
    radius: float

    def as_row(self) -> dict:
        return {
            "grid_id": self.grid_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "heat_level": str(self.heat_level),
            "report_count": self.report_count,
            "radius": self.radius,
            "last_updated": self.last_updated,
        }


@dataclass(frozen=True)
class CommitResult:
    """Row counts from one hotspot commit."""

    upserted: int
    pruned: int


class ReportSource:
    """Read access to the wildlife report store."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def fetch_since(self, window_start: datetime) -> list[WildlifeReport]:
        """Return every report with ``timestamp >= window_start``."""
        try:
            async with self._session_maker() as db:
                result = await db.execute(
                    select(WildlifeReport).where(WildlifeReport.timestamp >= window_start)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise ReportFetchError(
                f"Failed to fetch reports since {window_start.isoformat()}: {e}"
            ) from e


class HotspotRepository:
    """Writes and reads the hotspot collection."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def commit(
        self,
        computed: dict[str, HotspotRecord],
        window_start: datetime,
    ) -> CommitResult:
        """Upsert computed hotspots and prune stale ones in one transaction.

        Rows are keyed by ``grid_id`` so repeating a commit never duplicates
        a cell. An existing row is only overwritten when its ``last_updated``
        is not newer than the incoming record's, which keeps the newest
        run's view when runs overlap. Hotspots last refreshed before
        ``window_start`` are deleted. Nothing is visible to other sessions
        until the whole batch commits.
        """
        # Sorted so overlapping runs lock rows in the same order
        rows = [computed[grid_id].as_row() for grid_id in sorted(computed)]

        async with self._session_maker() as db:
            try:
                upserted = 0
                for start in range(0, len(rows), UPSERT_BATCH_SIZE):
                    stmt = pg_insert(Hotspot).values(rows[start : start + UPSERT_BATCH_SIZE])
                    stmt = stmt.on_conflict_do_update(
                        index_elements=[Hotspot.grid_id],
                        set_={column: stmt.excluded[column] for column in UPSERT_COLUMNS},
                        where=Hotspot.last_updated <= stmt.excluded.last_updated,
                    )
                    result = await db.execute(stmt)
                    upserted += result.rowcount

                result = await db.execute(
                    delete(Hotspot).where(Hotspot.last_updated < window_start)
                )
                pruned = result.rowcount

                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise HotspotCommitError(f"Failed to commit {len(rows)} hotspots: {e}") from e

        logger.debug(f"Committed hotspots: {upserted} upserted, {pruned} pruned")
        return CommitResult(upserted=upserted, pruned=pruned)

    async def list_all(self) -> list[Hotspot]:
        """Return every stored hotspot."""
        async with self._session_maker() as db:
            result = await db.execute(select(Hotspot).order_by(Hotspot.grid_id))
            return list(result.scalars().all())

    async def list_near(
        self,
        latitude: float,
        longitude: float,
        radius_km: float,
    ) -> list[tuple[Hotspot, float]]:
        """Return hotspots within ``radius_km`` of a point, closest first.

        Each entry is ``(hotspot, distance_km)``.
        """
        # Degrees of latitude covered by radius_km on haversine_km's sphere
        lat_span = math.degrees(radius_km / EARTH_RADIUS_KM)
        async with self._session_maker() as db:
            result = await db.execute(
                select(Hotspot).where(
                    Hotspot.latitude >= latitude - lat_span,
                    Hotspot.latitude <= latitude + lat_span,
                )
            )
            candidates = result.scalars().all()

        nearby = []
        for hotspot in candidates:
            distance = haversine_km(latitude, longitude, hotspot.latitude, hotspot.longitude)
            if distance <= radius_km:
                nearby.append((hotspot, distance))
        nearby.sort(key=lambda item: item[1])
        return nearby
