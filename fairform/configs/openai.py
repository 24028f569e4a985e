"""
OpenAI configuration settings.

Credentials and model selection for the moderation and intake
classification calls.

Dependencies: pydantic_settings
System role: Upstream AI provider configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from fairform.configs.base import BaseSettings


class OpenAISettings(BaseSettings):
    """OpenAI endpoint, credential and model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPENAI_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_key: str | None = Field(default=None, description="OpenAI API key")
    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI API base URL",
    )
    moderation_model: str = Field(
        default="omni-moderation-latest",
        validation_alias=AliasChoices("AI_MODERATION_MODEL", "OPENAI_MODERATION_MODEL"),
        description="Model used by the moderation endpoint",
    )
    intake_model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("AI_INTAKE_MODEL", "OPENAI_INTAKE_MODEL"),
        description="Chat model used for intake classification",
    )
    intake_temperature: float = Field(
        default=0.2,
        validation_alias=AliasChoices("AI_INTAKE_TEMP", "OPENAI_INTAKE_TEMPERATURE"),
        description="Sampling temperature for intake classification",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="HTTP timeout for upstream calls",
    )

    @property
    def moderation_endpoint(self) -> str:
        """Full URL of the moderation endpoint."""
        return f"{self.base_url.rstrip('/')}/moderations"
