"""Shared pytest fixtures."""

from collections.abc import Generator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from boxoffice.database import init_database
from boxoffice.settings import settings


@pytest.fixture(autouse=True, scope="function")
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock env variables for reproducible tests."""
    # Database settings
    monkeypatch.setenv("POSTGRES_HOST", "localhost")
    monkeypatch.setenv("POSTGRES_PORT", "5432")
    monkeypatch.setenv("POSTGRES_DB", "test_box_office")
    monkeypatch.setenv("POSTGRES_USER", "test_user")
    monkeypatch.setenv("POSTGRES_PASSWORD", "test_password")
    monkeypatch.delenv("DATABASE_URL", raising=False)

    # ETL settings
    monkeypatch.setenv("INSERT_BATCH_SIZE", "500")
    monkeypatch.setenv("DOMESTIC_ONLY_SOURCES", "Rotten Tomatoes")
    monkeypatch.setenv("STRICT_REVENUE_UNITS", "false")

    # CORS settings
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000")

    # Environment
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("LOG_LEVEL", "INFO")


@pytest.fixture
def tmp_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary directory for YAML batches."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    monkeypatch.setattr(settings.paths, "data_dir_override", str(data_dir))
    return data_dir


# =============================================================================
# DATABASE
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with the schema created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to the in-memory engine."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Database session, closed after the test."""
    session = session_factory()
    yield session
    session.close()


# =============================================================================
# SAMPLE DATA
# =============================================================================


@pytest.fixture
def scraped_at() -> datetime:
    """Fixed scrape timestamp."""
    return datetime(2024, 5, 1, 10, 0, tzinfo=UTC)


@pytest.fixture
def sample_raw_movie() -> dict[str, Any]:
    """Raw record as written by a collector."""
    return {
        "rank": "1",
        "title": "Dune: Part Two (2024)",
        "worldwideGross": "$711,844,358",
        "domesticGross": "$282,144,358",
        "rating": "8.6/10",
        "url": "https://example.com/dune-part-two",
    }
