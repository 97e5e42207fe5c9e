"""Heat level classification for grid cells."""

from dataclasses import dataclass

from hotspot_engine.config import Settings
from hotspot_engine.models import HeatLevel


@dataclass(frozen=True)
class HeatThresholds:
    """Count and age limits for the High and Low heat levels."""

    high_min_reports: int = 5
    high_max_age_hours: float = 1.0
    low_max_reports: int = 4
    low_max_age_hours: float = 4.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "HeatThresholds":
        return cls(
            high_min_reports=settings.high_min_reports,
            high_max_age_hours=settings.high_max_age_hours,
            low_max_reports=settings.low_max_reports,
            low_max_age_hours=settings.low_max_age_hours,
        )


DEFAULT_THRESHOLDS = HeatThresholds()


def classify(
    report_count: int,
    hours_since_oldest: float,
    thresholds: HeatThresholds = DEFAULT_THRESHOLDS,
) -> HeatLevel:
    """Classify a cell from its report count and the age of its oldest report.

    Rules are checked in order and the first match wins:

    - a burst of at least ``high_min_reports`` within ``high_max_age_hours`` is High
    - 1 to ``low_max_reports`` reports within ``low_max_age_hours`` is Low
    - anything else is Medium

    Medium covers both "many reports, none recent" and "no recent pattern".
    Those cases are not told apart here.
    """
    if (
        report_count >= thresholds.high_min_reports
        and hours_since_oldest <= thresholds.high_max_age_hours
    ):
        return HeatLevel.HIGH
    if (
        1 <= report_count <= thresholds.low_max_reports
        and hours_since_oldest <= thresholds.low_max_age_hours
    ):
        return HeatLevel.LOW
    return HeatLevel.MEDIUM
