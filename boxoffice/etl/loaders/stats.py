"""Write statistics for movie loads."""

from dataclasses import dataclass, field


@dataclass
class LoaderStats:
    """Outcome of writing movie rows.

    Attributes:
        inserted: New rows stored.
        skipped: Rows already present (same title, source and scrape time).
        errors: Rows lost with a failed batch.
        error_messages: One message per failed batch.
    """

    inserted: int = 0
    skipped: int = 0
    errors: int = 0
    error_messages: list[str] = field(default_factory=list)

    @property
    def total_processed(self) -> int:
        """Rows handed to the database."""
        return self.inserted + self.skipped + self.errors

    @property
    def success_rate(self) -> float:
        """Percentage of rows outside failed batches, 100.0 when nothing was written."""
        if self.total_processed == 0:
            return 100.0
        return round((1 - self.errors / self.total_processed) * 100, 2)

    def merge(self, other: "LoaderStats") -> "LoaderStats":
        """Combine the stats of two loads (for example two YAML batches).

        Returns:
            New LoaderStats; neither operand is modified.
        """
        return LoaderStats(
            inserted=self.inserted + other.inserted,
            skipped=self.skipped + other.skipped,
            errors=self.errors + other.errors,
            error_messages=self.error_messages + other.error_messages,
        )
