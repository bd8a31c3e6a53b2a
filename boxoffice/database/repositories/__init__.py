"""Repositories for stored movies and scheduler locks."""

from boxoffice.database.repositories.movie import METRIC_COLUMNS, MovieRepository
from boxoffice.database.repositories.scheduler_lock import SchedulerLockRepository

__all__ = ["METRIC_COLUMNS", "MovieRepository", "SchedulerLockRepository"]
