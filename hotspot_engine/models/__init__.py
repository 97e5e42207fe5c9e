"""SQLAlchemy ORM models."""

from hotspot_engine.models.hotspot import HeatLevel, Hotspot
from hotspot_engine.models.report import WildlifeReport

__all__ = [
    "HeatLevel",
    "Hotspot",
    "WildlifeReport",
]
