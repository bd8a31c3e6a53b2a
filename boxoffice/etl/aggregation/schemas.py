"""Pydantic schemas for the dashboard metrics payload.

Attributes are snake_case; the payload serializes with the camelCase
names the dashboard reads (`model_dump(by_alias=True)`).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = int | float
"""Gross amounts are integers; medians of even samples may be floats."""


class PayloadModel(BaseModel):
    """Base for payload models: camelCase aliases, snake_case access."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# DISTRIBUTIONS
# =============================================================================


class FiveNumberSummary(PayloadModel):
    """Box-plot statistics of a sample.

    Attributes:
        min: Smallest value.
        q1: Median of the lower half.
        median: Median of the sample.
        q3: Median of the upper half.
        max: Largest value.
    """

    min: Number
    q1: Number
    median: Number
    q3: Number
    max: Number


class SourceBoxPlot(PayloadModel):
    """Distribution of one source's deduplicated gross values."""

    source: str
    count: int = Field(ge=0)
    stats: FiveNumberSummary


class YearBoxPlot(PayloadModel):
    """Distribution of one year's deduplicated gross values."""

    year: int
    count: int = Field(ge=0)
    stats: FiveNumberSummary


class BoxPlot(PayloadModel):
    """Overall and grouped distributions."""

    overall: FiveNumberSummary | None = None
    by_source: list[SourceBoxPlot] = Field(default_factory=list)
    by_year: list[YearBoxPlot] = Field(default_factory=list)


# =============================================================================
# TOTALS AND GROUPS
# =============================================================================


class Totals(PayloadModel):
    """Headline figures."""

    movie_count: int = Field(default=0, ge=0)
    total_gross: Number = 0
    latest_scrape: datetime | None = None


class SourceGross(PayloadModel):
    """Gross sum and movie count for one source."""

    source: str
    total_gross: Number = 0
    count: int = Field(default=0, ge=0)


class YearlyGross(PayloadModel):
    """Gross sum and movie count for one year.

    `year` is None only for the empty peak-year placeholder.
    """

    year: int | None = None
    total_gross: Number = 0
    count: int = Field(default=0, ge=0)


class TopMovie(PayloadModel):
    """Entry of the top movies list."""

    title: str
    source: str
    year: int | None = None
    total_gross: Number


# =============================================================================
# PAYLOAD
# =============================================================================


class MetricsPayload(PayloadModel):
    """Complete dashboard metrics payload."""

    totals: Totals = Field(default_factory=Totals)
    source_gross: list[SourceGross] = Field(default_factory=list)
    yearly_gross: list[YearlyGross] = Field(default_factory=list)
    peak_year: YearlyGross = Field(default_factory=YearlyGross)
    top_movies: list[TopMovie] = Field(default_factory=list)
    box_plot: BoxPlot = Field(default_factory=BoxPlot)
