"""Wildlife sighting report model."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, Double, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from hotspot_engine.database import Base


class WildlifeReport(Base):
    """A geotagged sighting submitted by a user.

    Reports are written by the ingestion service; the aggregation engine
    only ever reads them.
    """

    __tablename__ = "wildlife_reports"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)

    # When the sighting happened (not when it was stored)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    # Position (WGS84 degrees)
    latitude: Mapped[float] = mapped_column(Double, nullable=False)
    longitude: Mapped[float] = mapped_column(Double, nullable=False)

    animal_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    animal_type: Mapped[str] = mapped_column(String(50), nullable=False)
