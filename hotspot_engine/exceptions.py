"""Aggregation failure types."""


class AggregationError(Exception):
    """Base class for aggregation run failures."""

    error_code = "AGGREGATION_ERROR"


class ReportFetchError(AggregationError):
    """Raised when the report store cannot be read."""

    error_code = "REPORT_FETCH_ERROR"


class HotspotCommitError(AggregationError):
    """Raised when a hotspot batch could not be committed.

    The batch is rolled back before this is raised, so the hotspot store
    still holds the previous successful run's state.
    """

    error_code = "HOTSPOT_COMMIT_ERROR"
