"""Database engine and session management with SQLAlchemy 2.0.

Provides a cached engine and session factory, a transactional
session scope, and schema creation.
"""

from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from boxoffice.database.models import Base
from boxoffice.settings import settings


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Get cached SQLAlchemy engine.

    Returns:
        Engine for DATABASE_URL, pooled unless it targets SQLite.
    """
    db = settings.database
    if db.is_sqlite:
        return create_engine(db.sync_url, echo=settings.debug)
    return create_engine(
        db.sync_url,
        pool_size=db.pool_size,
        max_overflow=db.pool_overflow,
        pool_timeout=db.pool_timeout,
        pool_pre_ping=True,
        echo=settings.debug,
    )


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker[Session]:
    """Get cached session factory.

    Returns:
        Configured sessionmaker instance.
    """
    return sessionmaker(
        bind=get_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@contextmanager
def session_scope(
    session_factory: sessionmaker[Session] | None = None,
) -> Generator[Session, None, None]:
    """Provide a transactional session scope.

    Commits on success, rolls back on exception, and always closes.

    Args:
        session_factory: Factory to use instead of the cached one.

    Yields:
        SQLAlchemy Session instance.
    """
    factory = session_factory or get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_database(engine: Engine | None = None) -> None:
    """Create all tables if they don't exist.

    Args:
        engine: Engine to use instead of the cached one.
    """
    Base.metadata.create_all(engine or get_engine())


def check_connection(engine: Engine | None = None) -> None:
    """Run a trivial query; raises if the database is unreachable."""
    with (engine or get_engine()).connect() as conn:
        conn.execute(text("SELECT 1"))
