"""Base configuration settings.

Contains foundational settings for paths, logging, and ETL.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# PROJECT ROOT DETECTION
# =============================================================================

_PROJECT_ROOT = Path(__file__).parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


def get_project_root() -> Path:
    """Get project root directory."""
    return _PROJECT_ROOT


def get_env_file() -> Path:
    """Get .env file path."""
    return _ENV_FILE


# =============================================================================
# PATH SETTINGS
# =============================================================================


class PathsSettings(BaseSettings):
    """Data and logs paths configuration.

    Attributes:
        data_dir_override: Directory holding collected YAML batches.
    """

    data_dir_override: str | None = Field(default=None, alias="DATA_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def project_root(self) -> Path:
        """Project root directory."""
        return _PROJECT_ROOT

    @property
    def data_dir(self) -> Path:
        """Collected YAML batches, one file per source run."""
        if self.data_dir_override:
            return Path(self.data_dir_override)
        return _PROJECT_ROOT / "data"

    @property
    def logs_dir(self) -> Path:
        """Application logs."""
        return _PROJECT_ROOT / "logs"

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        for directory in (self.data_dir, self.logs_dir):
            directory.mkdir(parents=True, exist_ok=True)


# =============================================================================
# LOGGING SETTINGS
# =============================================================================


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Log files directory.
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid LOG_LEVEL. Valid: {valid_levels}")
        return v_upper


# =============================================================================
# ETL SETTINGS
# =============================================================================


class ETLSettings(BaseSettings):
    """ETL pipeline configuration.

    Attributes:
        insert_batch_size: Rows per insert-or-ignore statement.
        domestic_only_sources_raw: Comma-separated sources reporting
            domestic figures only.
        top_movies_limit: Size of the top movies list in metrics.
        lock_name: Name of the ingestion lock row.
        lock_timeout_seconds: Age after which a held lock is stale.
        strict_revenue_units: Only accept revenue units attached to a number.
    """

    insert_batch_size: int = Field(default=500, ge=1, alias="INSERT_BATCH_SIZE")
    domestic_only_sources_raw: str = Field(
        default="Rotten Tomatoes",
        alias="DOMESTIC_ONLY_SOURCES",
    )
    top_movies_limit: int = Field(default=50, ge=1, alias="TOP_MOVIES_LIMIT")
    lock_name: str = Field(default="data_collection_lock", alias="LOCK_NAME")
    lock_timeout_seconds: int = Field(default=3600, ge=1, alias="LOCK_TIMEOUT_SECONDS")
    strict_revenue_units: bool = Field(default=False, alias="STRICT_REVENUE_UNITS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def domestic_only_sources(self) -> list[str]:
        """Parse domestic-only sources into a list."""
        return [s.strip() for s in self.domestic_only_sources_raw.split(",") if s.strip()]
