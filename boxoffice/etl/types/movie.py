"""Movie record types.

TypedDict definitions for collected source batches and the
canonical movie record produced by normalization.
"""

from datetime import datetime
from typing import Any, TypedDict


class MovieRecord(TypedDict):
    """Canonical movie record, ready for insertion into `movies`.

    Gross amounts are whole currency units. `release_date` is kept as
    free text; only its year is used.
    """

    # Chart position in the source (no cross-source meaning)
    rank: int | None

    # Identity
    title: str
    year: int | None

    # Gross figures
    weekend_gross: int | None
    total_gross: int | None
    domestic_gross: int | None
    international_gross: int | None

    # Metadata
    rating: float | None
    release_date: str | None
    source: str
    url: str | None
    scraped_at: datetime


class SourceBatch(TypedDict):
    """One collected YAML document: a source and its scraped movies."""

    source: str
    fetched_at: Any
    movies: list[Any]
    file_name: str
