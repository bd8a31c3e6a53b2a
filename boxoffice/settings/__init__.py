"""Configuration for ingestion, the metrics API and the CLI.

Every value comes from the environment or `.env`. Defaults suit a local
run against PostgreSQL on localhost; tests point DATABASE_URL at SQLite.

Usage:
    from boxoffice.settings import settings

    settings.etl.insert_batch_size
    settings.database.sync_url
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from boxoffice.settings.api import APISettings, CORSSettings
from boxoffice.settings.base import ETLSettings, LoggingSettings, PathsSettings
from boxoffice.settings.database import DatabaseSettings

__all__ = [
    # Main
    "Settings",
    "settings",
    # Base
    "PathsSettings",
    "LoggingSettings",
    "ETLSettings",
    # Database
    "DatabaseSettings",
    # API
    "APISettings",
    "CORSSettings",
    # Utilities
    "get_masked_settings",
]


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Every configuration section of the box-office service.

    Attributes:
        environment: development, production or test.
        debug: Echo SQL statements.
    """

    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    paths: PathsSettings = Field(default_factory=PathsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    etl: ETLSettings = Field(default_factory=ETLSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Accept the three known environments, case-insensitively."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid ENVIRONMENT. Valid: {valid_envs}")
        return v_lower


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_masked_settings() -> dict[str, Any]:
    """Dump the settings with database credentials hidden.

    The password and DATABASE_URL (which may embed it) are replaced
    when set; empty values are left as they are.

    Returns:
        Configuration dictionary for the API startup log.
    """
    config = settings.model_dump()
    database = config["database"]
    for key in ("password", "url"):
        if database.get(key):
            database[key] = "***MASKED***"
    return config
