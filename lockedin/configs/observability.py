"""
Observability configuration settings.

Settings for log level and third-party logger noise.

Dependencies: pydantic_settings
System role: Logging configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from lockedin.configs.base import BaseSettings


class ObservabilitySettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LOG_",
        case_sensitive=False,
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    sql_level: str = Field(
        default="WARNING",
        description="Level for the sqlalchemy.engine logger",
    )
