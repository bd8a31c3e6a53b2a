"""Dashboard metrics aggregation.

Builds the metrics payload from the stored movie rows: deduplicated
totals, per-source and per-year sums, the top movies and box-plot
distributions. Pure function of its input; no I/O.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from boxoffice.etl.aggregation.deduplicator import (
    BestRecordIndex,
    Deduplicator,
    Record,
)
from boxoffice.etl.aggregation.schemas import (
    BoxPlot,
    MetricsPayload,
    SourceBoxPlot,
    SourceGross,
    TopMovie,
    Totals,
    YearBoxPlot,
    YearlyGross,
)
from boxoffice.etl.aggregation.statistics import five_number_summary
from boxoffice.etl.utils.timestamps import coerce_timestamp

logger = logging.getLogger(__name__)

TOP_MOVIES_LIMIT = 50
"""Default size of the top movies list."""


def build_metrics(
    rows: Iterable[Mapping[str, Any]],
    *,
    top_n: int = TOP_MOVIES_LIMIT,
) -> MetricsPayload:
    """Build the dashboard metrics payload.

    The rows are materialized once, so a concurrently growing source
    yields a consistent snapshot.

    Args:
        rows: Stored movie rows (at least title, year, source,
            total_gross and scraped_at). Entries that are not
            mappings are skipped.
        top_n: Size of the top movies list.

    Returns:
        Metrics payload; zeroed and empty for no usable rows.
    """
    snapshot = list(rows)
    index = Deduplicator().index(snapshot)
    unique_movies = index.unique_records()

    yearly_gross = _yearly_gross(unique_movies)

    payload = MetricsPayload(
        totals=Totals(
            movie_count=len(unique_movies),
            total_gross=sum(movie["total_gross"] for movie in unique_movies),
            latest_scrape=_latest_scrape(snapshot),
        ),
        source_gross=_source_gross(index),
        yearly_gross=yearly_gross,
        peak_year=_peak_year(yearly_gross),
        top_movies=_top_movies(unique_movies, top_n),
        box_plot=_box_plot(index, unique_movies),
    )
    logger.debug(
        "Metrics built: %d movies, %d sources, %d years",
        payload.totals.movie_count,
        len(payload.source_gross),
        len(payload.yearly_gross),
    )
    return payload


# =============================================================================
# TOTALS
# =============================================================================


def _latest_scrape(rows: list[Any]) -> datetime | None:
    """Most recent scrape time over all rows, with or without gross."""
    timestamps = [
        coerce_timestamp(row.get("scraped_at")) for row in rows if isinstance(row, Mapping)
    ]
    return max((ts for ts in timestamps if ts is not None), default=None)


# =============================================================================
# GROUPED SUMS
# =============================================================================


def _source_gross(index: BestRecordIndex) -> list[SourceGross]:
    """Per-source sums over each source's own best records, largest first."""
    entries = [
        SourceGross(
            source=source,
            total_gross=sum(movie["total_gross"] for movie in movies.values()),
            count=len(movies),
        )
        for source, movies in index.by_source.items()
    ]
    return sorted(entries, key=lambda entry: entry.total_gross, reverse=True)


def _yearly_gross(unique_movies: list[Record]) -> list[YearlyGross]:
    """Per-year sums over the overall best records, oldest year first."""
    by_year: dict[int, YearlyGross] = {}
    for movie in unique_movies:
        year = movie["year"]
        if year is None:
            continue
        entry = by_year.setdefault(year, YearlyGross(year=year))
        entry.total_gross += movie["total_gross"]
        entry.count += 1
    return [by_year[year] for year in sorted(by_year)]


def _peak_year(yearly_gross: list[YearlyGross]) -> YearlyGross:
    """Year with the highest gross; earliest year wins ties."""
    if not yearly_gross:
        return YearlyGross()

    peak = yearly_gross[0]
    for entry in yearly_gross[1:]:
        if entry.total_gross > peak.total_gross:
            peak = entry
    return peak.model_copy()


def _top_movies(unique_movies: list[Record], top_n: int) -> list[TopMovie]:
    """Highest-grossing unique movies."""
    ranked = sorted(unique_movies, key=lambda movie: movie["total_gross"], reverse=True)
    return [
        TopMovie(
            title=movie["title"],
            source=movie["source"],
            year=movie["year"],
            total_gross=movie["total_gross"],
        )
        for movie in ranked[:top_n]
    ]


# =============================================================================
# DISTRIBUTIONS
# =============================================================================


def _box_plot(index: BestRecordIndex, unique_movies: list[Record]) -> BoxPlot:
    """Overall, per-source and per-year five-number summaries."""
    by_source = []
    for source, movies in index.by_source.items():
        stats = five_number_summary(movie["total_gross"] for movie in movies.values())
        if stats is not None:
            by_source.append(SourceBoxPlot(source=source, count=len(movies), stats=stats))

    by_year = []
    for year in sorted(index.by_year):
        movies = index.by_year[year]
        stats = five_number_summary(movie["total_gross"] for movie in movies.values())
        if stats is not None:
            by_year.append(YearBoxPlot(year=year, count=len(movies), stats=stats))

    return BoxPlot(
        overall=five_number_summary(movie["total_gross"] for movie in unique_movies),
        by_source=by_source,
        by_year=by_year,
    )
