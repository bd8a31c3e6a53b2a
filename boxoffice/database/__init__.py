"""Database package.

Provides engine and session management, ORM models, and repositories.

Usage:
    from boxoffice.database import MovieRepository, session_scope

    with session_scope() as session:
        rows = MovieRepository(session).fetch_metric_rows()
"""

from boxoffice.database.connection import (
    check_connection,
    get_engine,
    get_session_factory,
    init_database,
    session_scope,
)
from boxoffice.database.models import MOVIE_UNIQUE_COLUMNS, Base, Movie, SchedulerLock
from boxoffice.database.repositories import MovieRepository, SchedulerLockRepository
from boxoffice.database.upsert import insert_ignore

__all__ = [
    # Connection
    "check_connection",
    "get_engine",
    "get_session_factory",
    "init_database",
    "session_scope",
    # Models
    "Base",
    "Movie",
    "MOVIE_UNIQUE_COLUMNS",
    "SchedulerLock",
    # Repositories
    "MovieRepository",
    "SchedulerLockRepository",
    # Writes
    "insert_ignore",
]
