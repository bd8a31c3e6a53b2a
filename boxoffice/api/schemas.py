"""Pydantic schemas for API responses.

The metrics payload itself lives in `boxoffice.etl.aggregation.schemas`;
this module holds the dashboard view description and health status.
"""

from datetime import UTC, datetime

from pydantic import Field

from boxoffice.etl.aggregation.schemas import Number, PayloadModel

# =============================================================================
# HEALTH
# =============================================================================


class HealthResponse(PayloadModel):
    """Health check response schema."""

    status: str = Field(examples=["healthy"])
    version: str = Field(examples=["1.0.0"])
    database: bool = False
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


# =============================================================================
# DASHBOARD VIEW
# =============================================================================


class Alert(PayloadModel):
    """Banner shown above the dashboard."""

    message: str
    variant: str = Field(examples=["warning", "danger", "info"])


class Overview(PayloadModel):
    """Headline cards."""

    total_gross: Number = 0
    total_gross_display: str = "$0"
    movie_count: int = 0
    latest_scrape: datetime | None = None


class TopSourceCard(PayloadModel):
    """Best-grossing source and its deviation from the source mean.

    `source` is None when there is no data.
    """

    source: str | None = None
    total_gross: Number = 0
    total_gross_display: str = "-"
    delta_percent: int = 0


class PeakYearCard(PayloadModel):
    """Year with the highest gross, None when there is no data."""

    year: int | None = None
    total_gross: Number = 0
    total_gross_display: str = "-"


class ChartSeries(PayloadModel):
    """Labels and values of one chart.

    `shares` holds each value's rounded percentage of the total, for
    charts that show proportions.
    """

    labels: list[str] = Field(default_factory=list)
    values: list[Number] = Field(default_factory=list)
    shares: list[int] = Field(default_factory=list)


class TopMovieEntry(PayloadModel):
    """Line of the top movies list."""

    title: str
    year: str
    source: str
    total_gross: Number
    total_gross_display: str


class DashboardView(PayloadModel):
    """Everything the dashboard renders, derived from one metrics payload."""

    overview: Overview = Field(default_factory=Overview)
    top_source: TopSourceCard = Field(default_factory=TopSourceCard)
    peak_year: PeakYearCard = Field(default_factory=PeakYearCard)
    source_chart: ChartSeries = Field(default_factory=ChartSeries)
    trend_chart: ChartSeries = Field(default_factory=ChartSeries)
    top_movies: list[TopMovieEntry] = Field(default_factory=list)
    alert: Alert | None = None
