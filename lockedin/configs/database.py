"""
Database configuration settings.

Manages PostgreSQL connection parameters for SQLAlchemy. Holds two sets of
credentials: the ordinary application role used for request traffic, and
an optional privileged service role used for schema management and
operator jobs.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from lockedin.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="lockedin", description="PostgreSQL database name")

    service_user: str | None = Field(
        default=None,
        description="Privileged role used for schema management (falls back to user)",
    )
    service_password: str | None = Field(
        default=None,
        description="Password for the privileged role",
    )

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    sslmode: str = Field(default="prefer", description="SSL mode for the connection")

    url_override: str | None = Field(
        default=None,
        description="Full SQLAlchemy async URL; bypasses host/port/user settings",
    )

    def _build_url(self, user: str, password: str) -> str:
        ssl_param = "ssl=require" if self.sslmode == "require" else ""
        return (
            f"postgresql+asyncpg://{user}:{password}"
            f"@{self.host}:{self.port}/{self.db}?{ssl_param}"
        )

    @property
    def async_database_url(self) -> str:
        """
        Construct async PostgreSQL connection URL for the application role.

        Returns:
            str: SQLAlchemy async-compatible database URL (asyncpg uses 'ssl' param)
        """
        if self.url_override:
            return self.url_override
        return self._build_url(self.user, self.password)

    @property
    def privileged_database_url(self) -> str:
        """
        Construct async PostgreSQL connection URL for the privileged role.

        Returns:
            str: SQLAlchemy async URL; same as the application URL when no
            service role is configured
        """
        if self.url_override:
            return self.url_override
        if not self.service_user:
            return self.async_database_url
        return self._build_url(self.service_user, self.service_password or "")
