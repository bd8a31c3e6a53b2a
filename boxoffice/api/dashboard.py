"""Dashboard view builder.

Turns a metrics payload into a render description: formatted cards,
chart series and the short top movies list. Pure function; a fresh
view is built on every refresh.
"""

import math
import re

from boxoffice.api.schemas import (
    Alert,
    ChartSeries,
    DashboardView,
    Overview,
    PeakYearCard,
    TopMovieEntry,
    TopSourceCard,
)
from boxoffice.etl.aggregation.schemas import MetricsPayload, Number, SourceGross, YearlyGross

TOP_MOVIES_SHOWN = 5
NO_DATA_MESSAGE = "No data available to build charts."
UNTITLED = "Untitled"
UNKNOWN_SOURCE = "Unknown"
MISSING_YEAR = "-"

_DETAILED_SUFFIX = re.compile(r"\s*-\s*Detailed\s*$", re.IGNORECASE)


def build_dashboard_view(payload: MetricsPayload) -> DashboardView:
    """Build the dashboard render description.

    Args:
        payload: Metrics payload from `build_metrics`.

    Returns:
        View with an alert and empty charts when there is no data.
    """
    totals = payload.totals
    view = DashboardView(
        overview=Overview(
            total_gross=totals.total_gross,
            total_gross_display=format_currency(totals.total_gross),
            movie_count=totals.movie_count,
            latest_scrape=totals.latest_scrape,
        ),
        top_source=_top_source(payload.source_gross),
        peak_year=_peak_year(payload.peak_year),
        top_movies=_top_movies(payload),
    )

    if not payload.source_gross or not totals.total_gross:
        view.alert = Alert(message=NO_DATA_MESSAGE, variant="warning")
        return view

    view.source_chart = ChartSeries(
        labels=[entry.source for entry in payload.source_gross],
        values=[entry.total_gross for entry in payload.source_gross],
        shares=[
            round_half_up(entry.total_gross / totals.total_gross * 100)
            for entry in payload.source_gross
        ],
    )
    view.trend_chart = ChartSeries(
        labels=[str(entry.year) for entry in payload.yearly_gross],
        values=[entry.total_gross for entry in payload.yearly_gross],
    )
    return view


# =============================================================================
# FORMATTING
# =============================================================================


def format_currency(value: Number | None) -> str:
    """Format an amount as US dollars with thousands separators."""
    amount = value or 0
    if isinstance(amount, float) and not amount.is_integer():
        return f"${amount:,.2f}"
    return f"${int(amount):,}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def clean_source(source: str | None) -> str:
    """Drop the " - Detailed" suffix of detail-page sources."""
    return _DETAILED_SUFFIX.sub("", source or UNKNOWN_SOURCE) or UNKNOWN_SOURCE


# =============================================================================
# CARDS AND LISTS
# =============================================================================


def _top_source(source_gross: list[SourceGross]) -> TopSourceCard:
    if not source_gross:
        return TopSourceCard()

    top = source_gross[0]
    mean = sum(entry.total_gross for entry in source_gross) / len(source_gross)
    delta = round_half_up((top.total_gross - mean) / mean * 100) if mean else 0
    return TopSourceCard(
        source=top.source,
        total_gross=top.total_gross,
        total_gross_display=format_currency(top.total_gross),
        delta_percent=delta,
    )


def _peak_year(peak: YearlyGross) -> PeakYearCard:
    if peak.year is None:
        return PeakYearCard()
    return PeakYearCard(
        year=peak.year,
        total_gross=peak.total_gross,
        total_gross_display=format_currency(peak.total_gross),
    )


def _top_movies(payload: MetricsPayload) -> list[TopMovieEntry]:
    """First movies of the top list, one line per title and year."""
    seen: set[tuple[str, str]] = set()
    entries: list[TopMovieEntry] = []

    for movie in payload.top_movies:
        title = movie.title or UNTITLED
        year = str(movie.year) if movie.year else MISSING_YEAR
        if (title, year) in seen:
            continue
        seen.add((title, year))

        entries.append(
            TopMovieEntry(
                title=title,
                year=year,
                source=clean_source(movie.source),
                total_gross=movie.total_gross,
                total_gross_display=format_currency(movie.total_gross),
            )
        )
        if len(entries) == TOP_MOVIES_SHOWN:
            break

    return entries
