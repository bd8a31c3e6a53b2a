"""Ingestion pipeline: YAML batches -> normalized records -> database.

A run is guarded by a scheduler lock so that overlapping schedules
never ingest concurrently. When the lock is held elsewhere the run is
skipped.
"""

import os
import time
from collections import Counter
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

from sqlalchemy.orm import Session, sessionmaker

from boxoffice.database.connection import get_session_factory, session_scope
from boxoffice.database.repositories import SchedulerLockRepository
from boxoffice.etl.extractors import YAMLBatchReader
from boxoffice.etl.loaders import LoaderStats, MovieLoader
from boxoffice.etl.normalizers import MovieNormalizer
from boxoffice.etl.utils import setup_logger
from boxoffice.settings import settings


@dataclass
class IngestionStats:
    """Summary of one ingestion run.

    Attributes:
        files: YAML files read.
        records: Raw records found in those files.
        normalized: Records normalized.
        skipped: Records that could not be normalized.
        per_source: Normalized records per source.
        loader: Database write statistics.
        duration_seconds: Wall time of the run.
    """

    files: int = 0
    records: int = 0
    normalized: int = 0
    skipped: int = 0
    per_source: dict[str, int] = field(default_factory=dict)
    loader: LoaderStats = field(default_factory=LoaderStats)
    duration_seconds: float = 0.0


def make_process_id() -> str:
    """Identifier of this process for lock ownership."""
    return f"{os.getpid()}_{int(time.time() * 1000)}"


class IngestionPipeline:
    """Reads collected batches and stores normalized movies."""

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        normalizer: MovieNormalizer | None = None,
        batch_size: int | None = None,
        lock_name: str | None = None,
        lock_timeout: timedelta | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            session_factory: Session factory (default: cached factory).
            normalizer: Record normalizer (default: from settings).
            batch_size: Rows per insert (default INSERT_BATCH_SIZE).
            lock_name: Scheduler lock name (default LOCK_NAME).
            lock_timeout: Stale lock age (default LOCK_TIMEOUT_SECONDS).
        """
        self.logger = setup_logger("etl.pipeline")
        self._session_factory = session_factory or get_session_factory()
        self._normalizer = normalizer or MovieNormalizer()
        self._batch_size = batch_size
        self._lock_name = lock_name or settings.etl.lock_name
        self._lock_timeout = lock_timeout or timedelta(seconds=settings.etl.lock_timeout_seconds)
        self.process_id = make_process_id()

    def run(self, directory: Path | None = None) -> IngestionStats | None:
        """Run one ingestion pass under the scheduler lock.

        Args:
            directory: Directory of YAML batches (default: DATA_DIR).

        Returns:
            Run statistics, or None if another process holds the lock.
        """
        if not self._acquire_lock():
            self.logger.warning(f"Lock '{self._lock_name}' is held by another process, skipping run")
            return None

        try:
            return self._ingest(directory)
        finally:
            self._release_lock()

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _ingest(self, directory: Path | None) -> IngestionStats:
        start = time.perf_counter()
        stats = IngestionStats()
        reader = YAMLBatchReader(directory)
        per_source: Counter[str] = Counter()

        self._normalizer.reset_stats()
        with session_scope(self._session_factory) as session:
            loader = MovieLoader(session, batch_size=self._batch_size)

            for batch in reader.iter_batches():
                records = self._normalizer.normalize_batch(
                    batch["movies"], batch["source"], batch["fetched_at"]
                )
                stats.files += 1
                stats.records += len(batch["movies"])
                for record in records:
                    per_source[record["source"]] += 1

                stats.loader = stats.loader.merge(loader.load(records))

        normalizer_stats = self._normalizer.get_stats()
        stats.normalized = normalizer_stats["normalized"]
        stats.skipped = normalizer_stats["skipped"]
        stats.per_source = dict(per_source)
        stats.duration_seconds = time.perf_counter() - start

        self.logger.info(
            f"Ingestion complete: {stats.files} files, {stats.normalized}/{stats.records} "
            f"records normalized, {stats.loader.inserted} inserted, "
            f"{stats.loader.skipped} duplicates, {stats.loader.errors} errors, "
            f"{stats.loader.success_rate}% written ({stats.duration_seconds:.1f}s)"
        )
        return stats

    def _acquire_lock(self) -> bool:
        with session_scope(self._session_factory) as session:
            acquired = SchedulerLockRepository(session).acquire(
                self._lock_name, self.process_id, self._lock_timeout
            )
        if acquired:
            self.logger.info(f"Lock '{self._lock_name}' acquired by {self.process_id}")
        return acquired

    def _release_lock(self) -> None:
        with session_scope(self._session_factory) as session:
            released = SchedulerLockRepository(session).release(self._lock_name, self.process_id)
        if released:
            self.logger.info(f"Lock '{self._lock_name}' released")
        else:
            self.logger.warning(f"Lock '{self._lock_name}' was not held by {self.process_id}")
