"""Movie loader.

Writes normalized movie records in batches with insert-or-ignore
semantics on (title, source, scraped_at). Existing rows are never
updated.
"""

from collections.abc import Iterable, Iterator
from itertools import islice

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boxoffice.database.models import MOVIE_UNIQUE_COLUMNS, Movie
from boxoffice.database.upsert import insert_ignore
from boxoffice.etl.loaders.stats import LoaderStats
from boxoffice.etl.types import MovieRecord
from boxoffice.etl.utils import setup_logger
from boxoffice.settings import settings


class MovieLoader:
    """Loads normalized movie records into `movies`.

    Each batch is one statement committed on its own; a failed batch
    is rolled back and counted as errors without stopping the load.
    """

    def __init__(self, session: Session, batch_size: int | None = None) -> None:
        """Initialize movie loader.

        Args:
            session: SQLAlchemy session instance.
            batch_size: Rows per statement (default INSERT_BATCH_SIZE).
        """
        self._session = session
        self._logger = setup_logger("etl.loader.movies")
        self._stats = LoaderStats()
        self._batch_size = batch_size or settings.etl.insert_batch_size

    @property
    def stats(self) -> LoaderStats:
        """Statistics of the current or last load."""
        return self._stats

    @property
    def batch_size(self) -> int:
        """Rows per insert statement."""
        return self._batch_size

    def load(self, data: Iterable[MovieRecord]) -> LoaderStats:
        """Insert records, ignoring duplicates.

        Args:
            data: Normalized movie records.

        Returns:
            LoaderStats with operation results.
        """
        self._stats = LoaderStats()
        for batch in self._batches(data):
            self.insert_batch(batch)
        self._logger.info(
            f"Movies loaded: inserted={self._stats.inserted}, skipped={self._stats.skipped}, "
            f"errors={self._stats.errors} ({self._stats.success_rate}% written)"
        )
        return self._stats

    def insert_batch(self, batch: list[MovieRecord]) -> int:
        """Insert one batch and commit it.

        Args:
            batch: Records to insert.

        Returns:
            Number of rows inserted.
        """
        if not batch:
            return 0
        try:
            inserted = insert_ignore(self._session, Movie, batch, MOVIE_UNIQUE_COLUMNS)
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            message = f"Batch of {len(batch)} movies failed: {e}"
            self._stats.errors += len(batch)
            self._stats.error_messages.append(message)
            self._logger.warning(message)
            return 0

        self._stats.inserted += inserted
        self._stats.skipped += len(batch) - inserted
        self._logger.debug(f"Saved {inserted}/{len(batch)} movies")
        return inserted

    def _batches(self, records: Iterable[MovieRecord]) -> Iterator[list[MovieRecord]]:
        iterator = iter(records)
        while batch := list(islice(iterator, self._batch_size)):
            yield batch
