"""Where collected movie rows are stored.

PostgreSQL in deployment; DATABASE_URL may point at any SQLAlchemy URL,
which is how local runs and the test suite use SQLite instead.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Connection to the `movies` and `scheduler_locks` tables.

    Attributes:
        host: PostgreSQL server.
        port: PostgreSQL port.
        database: Database holding the box-office tables.
        user: Role used by the ingestion and the API.
        password: Password of that role.
        url: Complete URL; when set, the five fields above are ignored.
        pool_size: Connections kept open by the API process.
        pool_overflow: Extra connections allowed under load.
        pool_timeout: Seconds to wait for a free connection.
    """

    host: str = Field(default="localhost", alias="POSTGRES_HOST")
    port: int = Field(default=5432, alias="POSTGRES_PORT")
    database: str = Field(default="box_office", alias="POSTGRES_DB")
    user: str = Field(default="box_office_user", alias="POSTGRES_USER")
    password: str = Field(default="", alias="POSTGRES_PASSWORD")
    url: str | None = Field(default=None, alias="DATABASE_URL")

    pool_size: int = Field(default=5, alias="DB_POOL_SIZE")
    pool_overflow: int = Field(default=10, alias="DB_POOL_OVERFLOW")
    pool_timeout: int = Field(default=30, alias="DB_POOL_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """True once a password or a full URL has been provided."""
        return bool(self.password or self.url)

    @property
    def is_sqlite(self) -> bool:
        """True for SQLite targets, which take no pool arguments."""
        return self.sync_url.startswith("sqlite")

    @property
    def sync_url(self) -> str:
        """URL handed to `create_engine` (psycopg2 driver by default)."""
        if self.url:
            return self.url
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
