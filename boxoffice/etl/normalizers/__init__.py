"""Normalizers turning collected records into canonical movie records."""

from boxoffice.etl.normalizers.movie import (
    FIELD_ALIASES,
    MovieNormalizer,
    RecordNormalizationError,
    normalize_movie,
)
from boxoffice.etl.normalizers.policies import (
    DEFAULT_BACKFILL_POLICIES,
    BackfillRule,
    build_backfill_policies,
)
from boxoffice.etl.normalizers.revenue import parse_revenue

__all__ = [
    "FIELD_ALIASES",
    "MovieNormalizer",
    "RecordNormalizationError",
    "normalize_movie",
    "BackfillRule",
    "DEFAULT_BACKFILL_POLICIES",
    "build_backfill_policies",
    "parse_revenue",
]
