"""Movie repository for the metrics read projection."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from boxoffice.database.models import Movie

METRIC_COLUMNS = (
    Movie.title,
    Movie.year,
    Movie.source,
    Movie.total_gross,
    Movie.scraped_at,
)
"""Columns the metrics aggregation reads."""


class MovieRepository:
    """Read access to stored movie rows."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session instance.
        """
        self._session = session

    @property
    def session(self) -> Session:
        """Get the database session."""
        return self._session

    def fetch_metric_rows(self) -> list[dict[str, Any]]:
        """Read the metrics projection of every row in one query.

        A single SELECT gives a consistent snapshot even while an
        ingestion run appends rows.

        Returns:
            Rows as dicts with title, year, source, total_gross
            and scraped_at.
        """
        result = self._session.execute(select(*METRIC_COLUMNS))
        return [dict(row) for row in result.mappings()]

    def count(self) -> int:
        """Count stored rows."""
        stmt = select(func.count()).select_from(Movie)
        return self._session.scalar(stmt) or 0

    def count_by_source(self) -> dict[str, int]:
        """Count stored rows per source."""
        stmt = select(Movie.source, func.count()).group_by(Movie.source)
        return {source: count for source, count in self._session.execute(stmt)}
