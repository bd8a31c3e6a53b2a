"""Movie record normalizer.

Maps heterogeneous per-source field names onto the canonical
`MovieRecord`, parses revenue figures, infers missing years and
resolves the scrape timestamp.
"""

import math
import re
from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

from boxoffice.etl.normalizers.policies import (
    DEFAULT_BACKFILL_POLICIES,
    BackfillRule,
    apply_backfill_policies,
    build_backfill_policies,
)
from boxoffice.etl.normalizers.revenue import parse_revenue
from boxoffice.etl.types import MovieRecord
from boxoffice.etl.utils import coerce_timestamp, setup_logger
from boxoffice.settings import settings

# =============================================================================
# CONSTANTS
# =============================================================================

UNKNOWN = "Unknown"
"""Fallback for a missing title or source."""

FIELD_ALIASES: dict[str, str] = {
    # Canonical names
    "rank": "rank",
    "title": "title",
    "year": "year",
    "weekend_gross": "weekend_gross",
    "total_gross": "total_gross",
    "domestic_gross": "domestic_gross",
    "international_gross": "international_gross",
    "rating": "rating",
    "release_date": "release_date",
    "source": "source",
    "url": "url",
    "scraped_at": "scraped_at",
    # Collector (camelCase) names
    "weekendGross": "weekend_gross",
    "totalGross": "total_gross",
    "domesticGross": "domestic_gross",
    "internationalGross": "international_gross",
    "releaseDate": "release_date",
    "scrapedAt": "scraped_at",
    # Alternative revenue labels
    "worldwideGross": "total_gross",
    "worldwideRevenue": "total_gross",
    "worldwide_gross": "total_gross",
    "worldwide_revenue": "total_gross",
    "domesticRevenue": "domestic_gross",
    "domestic_revenue": "domestic_gross",
}
"""Raw key -> canonical field. Keys not listed here are dropped."""

INTEGER_FIELDS = frozenset({"rank", "year"})
GROSS_FIELDS = frozenset({"weekend_gross", "total_gross", "domestic_gross", "international_gross"})
TEXT_FIELDS = frozenset({"title", "release_date", "url"})

TEXT_LIMITS: dict[str, int] = {"title": 500, "release_date": 100, "source": 100}
"""Longest stored text per column; longer values are truncated."""

RATING_LIMIT = 1000
"""Ratings whose magnitude reaches this (one decimal kept) are dropped."""

RECORD_TIMESTAMP_KEYS = ("fetchedAt", "fetched_at", "lastUpdated", "last_updated")
"""Record-level timestamps used when no scrape timestamp is given."""

_LEADING_INT_PATTERN = re.compile(r"^\s*([-+]?\d+)")
_RATING_PATTERN = re.compile(r"(\d+(\.\d+)?)")
_YEAR_PATTERN = re.compile(r"(\d{4})")
_TITLE_YEAR_PATTERN = re.compile(r"\s*\((\d{4})\)\s*$")


class RecordNormalizationError(ValueError):
    """Raised when a raw record cannot be normalized at all."""


# =============================================================================
# NORMALIZATION
# =============================================================================


def normalize_movie(
    raw: Mapping[str, Any],
    source: str,
    *,
    fetched_at: object = None,
    backfill_policies: Mapping[str, tuple[BackfillRule, ...]] = DEFAULT_BACKFILL_POLICIES,
    strict_units: bool = False,
    now: datetime | None = None,
) -> MovieRecord:
    """Normalize one raw scraped record.

    Malformed fields become None; the rest of the record is kept. Text
    longer than its column is truncated and out-of-range ratings dropped.

    Args:
        raw: Raw record from a collector.
        source: Source name of the batch the record belongs to.
        fetched_at: Batch-level fetch timestamp.
        backfill_policies: Per-source backfill rules.
        strict_units: Passed to the revenue parser.
        now: Timestamp used when no other one is available.

    Returns:
        Canonical movie record.

    Raises:
        RecordNormalizationError: If `raw` is not a mapping.
    """
    if not isinstance(raw, Mapping):
        raise RecordNormalizationError(f"expected a mapping, got {type(raw).__name__}")

    record = _empty_record(_clean_text(source) or UNKNOWN)

    for key, value in raw.items():
        field = FIELD_ALIASES.get(key) if isinstance(key, str) else None
        if field is not None:
            _assign_field(record, field, value, strict_units)

    apply_backfill_policies(record, backfill_policies)
    _infer_year(record)

    if not record["title"]:
        record["title"] = UNKNOWN
    _fit_columns(record)

    record["scraped_at"] = _resolve_scraped_at(record, raw, fetched_at, now)
    return record


def _empty_record(source: str) -> MovieRecord:
    """Build a record with every field empty except the source."""
    return MovieRecord(
        rank=None,
        title=None,  # type: ignore[typeddict-item]
        year=None,
        weekend_gross=None,
        total_gross=None,
        domestic_gross=None,
        international_gross=None,
        rating=None,
        release_date=None,
        source=source,
        url=None,
        scraped_at=None,  # type: ignore[typeddict-item]
    )


def _assign_field(record: MovieRecord, field: str, value: Any, strict_units: bool) -> None:
    """Parse a raw value according to its canonical field."""
    if field in INTEGER_FIELDS:
        record[field] = _parse_int(value)  # type: ignore[literal-required]
    elif field in GROSS_FIELDS:
        record[field] = parse_revenue(value, strict_units=strict_units)  # type: ignore[literal-required]
    elif field == "rating":
        record["rating"] = _parse_rating(value)
    elif field in TEXT_FIELDS:
        record[field] = _clean_text(value)  # type: ignore[literal-required]
    elif field == "source":
        # A blank per-record source never replaces the batch source.
        record["source"] = _clean_text(value) or record["source"]
    elif field == "scraped_at":
        record["scraped_at"] = coerce_timestamp(value)  # type: ignore[typeddict-item]


def _infer_year(record: MovieRecord) -> None:
    """Fill a missing year from the release date, then from the title."""
    if record["year"] is None and record["release_date"]:
        match = _YEAR_PATTERN.search(record["release_date"])
        if match:
            record["year"] = int(match.group(1))

    if record["year"] is None and record["title"]:
        match = _TITLE_YEAR_PATTERN.search(record["title"])
        if match:
            record["year"] = int(match.group(1))
            record["title"] = record["title"][: match.start()].strip()


def _fit_columns(record: MovieRecord) -> None:
    """Truncate long text and drop out-of-range ratings so rows fit the table."""
    for field, limit in TEXT_LIMITS.items():
        value = record[field]  # type: ignore[literal-required]
        if value is not None and len(value) > limit:
            record[field] = value[:limit].rstrip()  # type: ignore[literal-required]

    rating = record["rating"]
    if rating is not None and abs(round(rating, 1)) >= RATING_LIMIT:
        record["rating"] = None


def _resolve_scraped_at(
    record: MovieRecord,
    raw: Mapping[str, Any],
    fetched_at: object,
    now: datetime | None,
) -> datetime:
    """Pick the first usable timestamp: record, raw record, batch, now."""
    candidates = [record["scraped_at"]]
    candidates.extend(raw.get(key) for key in RECORD_TIMESTAMP_KEYS)
    candidates.append(fetched_at)

    for candidate in candidates:
        timestamp = coerce_timestamp(candidate)
        if timestamp is not None:
            return timestamp
    return now or datetime.now(UTC)


# =============================================================================
# FIELD PARSERS
# =============================================================================


def _parse_int(value: Any) -> int | None:
    """Parse a leading integer ("12", "2019 (re-release)", 12.7)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float | Decimal):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT_PATTERN.match(value)
        return int(match.group(1)) if match else None
    return None


def _parse_rating(value: Any) -> float | None:
    """Extract the leading numeric token of a rating ("7.8/10" -> 7.8)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = _RATING_PATTERN.search(value)
        return float(match.group(1)) if match else None
    if isinstance(value, int | float | Decimal):
        rating = float(value)
        return rating if math.isfinite(rating) else None
    return None


def _clean_text(value: Any) -> str | None:
    """Coerce to stripped text; dates become ISO strings."""
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    cleaned = str(value).strip()
    return cleaned or None


# =============================================================================
# NORMALIZER
# =============================================================================


class MovieNormalizer:
    """Normalizes collected movie records batch by batch.

    Records that cannot be normalized are skipped and logged with
    their index and source; the batch continues.
    """

    def __init__(
        self,
        backfill_policies: Mapping[str, tuple[BackfillRule, ...]] | None = None,
        strict_units: bool | None = None,
    ) -> None:
        """Initialize normalizer.

        Args:
            backfill_policies: Per-source rules. Defaults to the built-in
                table extended with DOMESTIC_ONLY_SOURCES.
            strict_units: Revenue unit matching mode. Defaults to
                STRICT_REVENUE_UNITS.
        """
        self._logger = setup_logger("etl.normalizer")
        if backfill_policies is None:
            backfill_policies = build_backfill_policies(settings.etl.domestic_only_sources)
        if strict_units is None:
            strict_units = settings.etl.strict_revenue_units
        self._policies = backfill_policies
        self._strict_units = strict_units
        self._normalized_count: int = 0
        self._skipped_count: int = 0

    # -------------------------------------------------------------------------
    # Main Normalization
    # -------------------------------------------------------------------------

    def normalize(
        self,
        raw: Any,
        source: str,
        fetched_at: object = None,
        index: int | None = None,
    ) -> MovieRecord | None:
        """Normalize a single raw record.

        Args:
            raw: Raw record from a collector.
            source: Batch source name.
            fetched_at: Batch-level fetch timestamp.
            index: Position in the batch, for log messages.

        Returns:
            Normalized record or None if skipped.
        """
        try:
            record = normalize_movie(
                raw,
                source,
                fetched_at=fetched_at,
                backfill_policies=self._policies,
                strict_units=self._strict_units,
            )
        except RecordNormalizationError as e:
            self._skipped_count += 1
            position = f"#{index}" if index is not None else "record"
            self._logger.warning(f"Skipped {position} from {source}: {e}")
            return None

        self._normalized_count += 1
        return record

    def normalize_batch(
        self,
        raw_records: Iterable[Any],
        source: str,
        fetched_at: object = None,
    ) -> list[MovieRecord]:
        """Normalize multiple records from the same source.

        Args:
            raw_records: Raw records.
            source: Batch source name.
            fetched_at: Batch-level fetch timestamp.

        Returns:
            Normalized records (invalid records skipped).
        """
        normalized = []
        for index, raw in enumerate(raw_records):
            record = self.normalize(raw, source, fetched_at, index=index)
            if record is not None:
                normalized.append(record)
        return normalized

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_stats(self) -> dict[str, int]:
        """Get normalization statistics.

        Returns:
            Dict with normalized and skipped counts.
        """
        return {
            "normalized": self._normalized_count,
            "skipped": self._skipped_count,
        }

    def reset_stats(self) -> None:
        """Reset statistics counters."""
        self._normalized_count = 0
        self._skipped_count = 0
