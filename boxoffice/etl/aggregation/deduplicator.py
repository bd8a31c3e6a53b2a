"""Best-record deduplication for metrics.

The same movie is usually scraped many times (several sources, one
row per scrape). Rows sharing an identity key (normalized title and
year) are reduced to a single best record: highest total gross first,
then most recent scrape.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from boxoffice.etl.utils.timestamps import coerce_timestamp

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

MIN_VALID_YEAR = 1800
"""Earliest year accepted for grouping."""

MAX_VALID_YEAR = 3000
"""Latest year accepted for grouping."""

MISSING_YEAR_KEY = "none"
"""Identity key part used when the year is missing or implausible."""

UNKNOWN_SOURCE = "Unknown"
"""Source used for rows stored without one."""

UNKNOWN_TITLE = "Unknown"
"""Title used for rows stored without one."""

_OLDEST_TIMESTAMP = datetime.min.replace(tzinfo=UTC)

Record = dict[str, Any]


# =============================================================================
# KEYS AND COMPARATOR
# =============================================================================


def to_valid_year(value: object) -> int | None:
    """Truncate a year-like value and check it is plausible.

    Args:
        value: Year as int, float, Decimal or numeric string.

    Returns:
        Integer year in [MIN_VALID_YEAR, MAX_VALID_YEAR], else None.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None

    year = math.trunc(number)
    return year if MIN_VALID_YEAR <= year <= MAX_VALID_YEAR else None


def identity_key(record: Mapping[str, Any]) -> str:
    """Build the key identifying the same logical movie.

    Args:
        record: Movie record with `title` and `year`.

    Returns:
        "<lowercase trimmed title>::<year or 'none'>".
    """
    title = str(record.get("title") or "").strip().lower()
    year = to_valid_year(record.get("year"))
    return f"{title}::{MISSING_YEAR_KEY if year is None else year}"


def choose_best(current: Mapping[str, Any] | None, candidate: Mapping[str, Any]) -> Any:
    """Pick the record representing an identity key.

    A strictly greater total gross wins; on equal gross the strictly
    later scrape wins. A missing scrape time loses ties. When both
    compare equal, `current` is kept.

    Args:
        current: Best record so far, or None.
        candidate: Newly seen record.

    Returns:
        The winning record (one of the arguments, unchanged).
    """
    if current is None:
        return candidate

    candidate_gross = _gross_or_lowest(candidate)
    current_gross = _gross_or_lowest(current)
    if candidate_gross > current_gross:
        return candidate

    if candidate_gross == current_gross and _scraped_at(candidate) > _scraped_at(current):
        return candidate

    return current


def coerce_gross(value: object) -> int | float | None:
    """Convert a stored gross value to a finite number.

    Args:
        value: Gross as int, float, Decimal or numeric string.

    Returns:
        The number (integers kept as int), or None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float | Decimal | str):
        try:
            number = float(value)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def clean_label(value: object, default: str) -> str:
    """Coerce a title or source to stripped text.

    Args:
        value: Stored value (numeric titles such as 1917 included).
        default: Returned for a missing or blank value.

    Returns:
        Non-empty label.
    """
    if value is None:
        return default
    return str(value).strip() or default


def _gross_or_lowest(record: Mapping[str, Any]) -> float:
    gross = coerce_gross(record.get("total_gross"))
    return -math.inf if gross is None else gross


def _scraped_at(record: Mapping[str, Any]) -> datetime:
    return coerce_timestamp(record.get("scraped_at")) or _OLDEST_TIMESTAMP


# =============================================================================
# GROUPED INDEX
# =============================================================================


@dataclass
class BestRecordIndex:
    """Best records per identity key, in three groupings.

    Attributes:
        overall: Best record per key across all sources.
        by_source: Best record per key within each source.
        by_year: Best record per key within each valid year.
    """

    overall: dict[str, Record] = field(default_factory=dict)
    by_source: dict[str, dict[str, Record]] = field(default_factory=dict)
    by_year: dict[int, dict[str, Record]] = field(default_factory=dict)

    def add(self, record: Record) -> None:
        """Offer a prepared record to every grouping it belongs to.

        Args:
            record: Record with numeric `total_gross`, non-empty
                `source` and a valid or None `year`.
        """
        key = identity_key(record)
        _offer(self.overall, key, record)
        _offer(self.by_source.setdefault(record["source"], {}), key, record)
        if record["year"] is not None:
            _offer(self.by_year.setdefault(record["year"], {}), key, record)

    def unique_records(self) -> list[Record]:
        """Overall best records, in first-seen key order."""
        return list(self.overall.values())


def _offer(group: dict[str, Record], key: str, record: Record) -> None:
    group[key] = choose_best(group.get(key), record)


# =============================================================================
# DEDUPLICATION STATISTICS
# =============================================================================


@dataclass
class DeduplicationStats:
    """Statistics for a deduplication pass.

    Attributes:
        total_input: Rows offered.
        skipped_invalid: Entries that are not row mappings.
        skipped_no_gross: Rows without a usable total gross.
        total_output: Unique movies in the overall grouping.
    """

    total_input: int = 0
    skipped_invalid: int = 0
    skipped_no_gross: int = 0
    total_output: int = 0

    @property
    def total_duplicates(self) -> int:
        """Rows merged into another row's identity key."""
        return self.total_input - self.skipped_invalid - self.skipped_no_gross - self.total_output

    def log_summary(self) -> None:
        """Log deduplication statistics summary."""
        logger.info(
            "Deduplication: %d rows -> %d movies (-%d duplicates, %d without gross, %d invalid)",
            self.total_input,
            self.total_output,
            self.total_duplicates,
            self.skipped_no_gross,
            self.skipped_invalid,
        )


# =============================================================================
# DEDUPLICATOR
# =============================================================================


class Deduplicator:
    """Reduces stored rows to best records per identity key.

    Attributes:
        stats: Statistics of the last `index` call.
    """

    def __init__(self) -> None:
        """Initialize deduplicator with empty statistics."""
        self.stats = DeduplicationStats()

    def index(self, rows: Iterable[Mapping[str, Any]]) -> BestRecordIndex:
        """Build the grouped best-record index.

        Entries that are not mappings and rows without a finite total
        gross are ignored.

        Args:
            rows: Stored movie rows.

        Returns:
            Index over the usable rows.
        """
        self.stats = DeduplicationStats()
        best = BestRecordIndex()

        for row in rows:
            self.stats.total_input += 1
            if not isinstance(row, Mapping):
                self.stats.skipped_invalid += 1
                continue
            record = self._prepare(row)
            if record is None:
                self.stats.skipped_no_gross += 1
                continue
            best.add(record)

        self.stats.total_output = len(best.overall)
        self.stats.log_summary()
        return best

    @staticmethod
    def _prepare(row: Mapping[str, Any]) -> Record | None:
        """Copy a row with numeric gross, text labels and valid year.

        Returns:
            Prepared record, or None when the gross is unusable.
        """
        gross = coerce_gross(row.get("total_gross"))
        if gross is None:
            return None

        record = dict(row)
        record["total_gross"] = gross
        record["title"] = clean_label(row.get("title"), UNKNOWN_TITLE)
        record["source"] = clean_label(row.get("source"), UNKNOWN_SOURCE)
        record["year"] = to_valid_year(row.get("year"))
        return record
