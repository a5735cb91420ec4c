"""
Authentication configuration settings.

Parameters for verifying bearer tokens issued by the external identity
provider. The service never issues or refreshes tokens itself.

Dependencies: pydantic, pydantic_settings
System role: Token verification configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from lockedin.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """Bearer token verification configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str = Field(
        default="change-me",
        description="Shared secret used by the identity provider to sign tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="Token signing algorithm")
    jwt_audience: str | None = Field(
        default="authenticated",
        description="Expected 'aud' claim; None disables the audience check",
    )
