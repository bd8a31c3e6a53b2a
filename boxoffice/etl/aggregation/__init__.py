"""Aggregation module for dashboard metrics.

Deduplicates stored rows into best records and computes the metrics
payload served to the dashboard.

Example:
    >>> from boxoffice.etl.aggregation import build_metrics
    >>> payload = build_metrics(rows)
    >>> payload.model_dump(by_alias=True, mode="json")
"""

from boxoffice.etl.aggregation.deduplicator import (
    BestRecordIndex,
    DeduplicationStats,
    Deduplicator,
    choose_best,
    identity_key,
    to_valid_year,
)
from boxoffice.etl.aggregation.metrics import build_metrics
from boxoffice.etl.aggregation.schemas import (
    BoxPlot,
    FiveNumberSummary,
    MetricsPayload,
    SourceBoxPlot,
    SourceGross,
    TopMovie,
    Totals,
    YearBoxPlot,
    YearlyGross,
)
from boxoffice.etl.aggregation.statistics import five_number_summary, median

__all__ = [
    # Main entry point
    "build_metrics",
    # Deduplication
    "BestRecordIndex",
    "Deduplicator",
    "DeduplicationStats",
    "choose_best",
    "identity_key",
    "to_valid_year",
    # Statistics
    "five_number_summary",
    "median",
    # Schemas
    "MetricsPayload",
    "Totals",
    "SourceGross",
    "YearlyGross",
    "TopMovie",
    "BoxPlot",
    "SourceBoxPlot",
    "YearBoxPlot",
    "FiveNumberSummary",
]
