"""SQLAlchemy ORM models.

Usage:
    from boxoffice.database.models import Base, Movie, SchedulerLock

Tables:
    - movies: Collected box-office rows, unique on (title, source, scraped_at)
    - scheduler_locks: Advisory locks for collection runs
"""

from boxoffice.database.models.base import Base
from boxoffice.database.models.movie import MOVIE_UNIQUE_COLUMNS, Movie
from boxoffice.database.models.scheduler_lock import SchedulerLock

__all__ = [
    "Base",
    "Movie",
    "MOVIE_UNIQUE_COLUMNS",
    "SchedulerLock",
]
