"""Hotspot model for aggregated grid cells."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Double, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from hotspot_engine.database import Base, utc_now


class HeatLevel(enum.StrEnum):
    """Activity intensity of a hotspot."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Hotspot(Base):
    """Aggregated sighting activity for one grid cell."""

    __tablename__ = "hotspots"

    # Grid cell identity, e.g. "37.789182_-122.433195"
    grid_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Cell center
    latitude: Mapped[float] = mapped_column(Double, nullable=False)
    longitude: Mapped[float] = mapped_column(Double, nullable=False)

    heat_level: Mapped[str] = mapped_column(String(10), nullable=False)
    report_count: Mapped[int] = mapped_column(Integer, nullable=False)
    radius: Mapped[float] = mapped_column(Double, nullable=False)  # meters

    # Set to the "now" of the run that last wrote this row
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        index=True,
    )
