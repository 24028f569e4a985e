"""
Authentication configuration settings.

Dependencies: pydantic_settings
System role: Bearer token verification parameters
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from fairform.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """JWT verification settings for user-facing endpoints."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str | None = Field(default=None, description="Key used to verify ID tokens")
    jwt_algorithm: str = Field(default="HS256", description="Expected signing algorithm")
    jwt_audience: str | None = Field(default=None, description="Expected 'aud' claim")
