"""Database session dependency for FastAPI."""

from collections.abc import Generator

from sqlalchemy.orm import Session

from boxoffice.database.connection import get_session_factory


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions.

    Yields:
        Database session, automatically closed after request.
    """
    session_factory = get_session_factory()
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
