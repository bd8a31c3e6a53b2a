"""Per-source backfill policies.

Some outlets only publish domestic figures. For those, the domestic
gross stands in for the total gross so that the source still
contributes to metrics.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from boxoffice.etl.types import MovieRecord


@dataclass(frozen=True)
class BackfillRule:
    """Copy `fallback` into `target` when `target` is missing.

    Attributes:
        target: Canonical field to fill.
        fallback: Canonical field to copy from.
    """

    target: str
    fallback: str

    def apply(self, record: MovieRecord) -> None:
        """Fill the target field in place if it is empty."""
        if record.get(self.target) is None and record.get(self.fallback) is not None:
            record[self.target] = record[self.fallback]  # type: ignore[literal-required]


DOMESTIC_AS_TOTAL = BackfillRule(target="total_gross", fallback="domestic_gross")
"""Domestic-only outlets report their domestic gross as the total."""

DEFAULT_BACKFILL_POLICIES: Mapping[str, tuple[BackfillRule, ...]] = {
    "Rotten Tomatoes": (DOMESTIC_AS_TOTAL,),
}
"""Built-in policy table, keyed by exact source name."""


def build_backfill_policies(
    domestic_only_sources: Iterable[str],
) -> dict[str, tuple[BackfillRule, ...]]:
    """Extend the built-in table with configured domestic-only sources.

    Args:
        domestic_only_sources: Source names reporting domestic figures only.

    Returns:
        Policy table mapping source name to its rules.
    """
    policies = dict(DEFAULT_BACKFILL_POLICIES)
    for source in domestic_only_sources:
        rules = policies.get(source, ())
        if DOMESTIC_AS_TOTAL not in rules:
            policies[source] = (*rules, DOMESTIC_AS_TOTAL)
    return policies


def apply_backfill_policies(
    record: MovieRecord,
    policies: Mapping[str, tuple[BackfillRule, ...]],
) -> None:
    """Apply every rule registered for the record's source."""
    for rule in policies.get(record["source"], ()):
        rule.apply(record)
