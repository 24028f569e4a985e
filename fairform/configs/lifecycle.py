"""
Session lifecycle configuration settings.

Retention periods for production and demo sessions, batch sizing,
retry policy and the cron trigger secret.

Dependencies: pydantic_settings, fairform.core.lifecycle
System role: Configuration for the scheduled cleanup job
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from fairform.configs.base import BaseSettings
from fairform.core.lifecycle.config import (
    EnvironmentRetention,
    GlobalLifecycleConfig,
    LifecycleConfig,
)


class LifecycleSettings(BaseSettings):
    """Environment-driven lifecycle configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LIFECYCLE_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    cron_secret: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CRON_SECRET", "LIFECYCLE_CRON_SECRET"),
        description="Bearer secret expected on the cron trigger",
    )

    prod_archive_after_days: int = Field(default=7, ge=0)
    prod_delete_after_days: int = Field(default=90, ge=0)
    demo_archive_after_days: int = Field(default=1, ge=0)
    demo_delete_after_days: int = Field(default=14, ge=0)

    cleanup_schedule: str = Field(default="0 2 * * *", description="Cron expression (UTC)")
    batch_size: int = Field(default=100, ge=1)
    retry_attempts: int = Field(default=3, ge=1)
    retry_delay_ms: int = Field(default=5000, ge=0)

    def to_config(self) -> LifecycleConfig:
        """
        Build the domain lifecycle configuration.

        Returns:
            LifecycleConfig: Config consumed by SessionLifecycleManager
        """
        return LifecycleConfig(
            prod=EnvironmentRetention(
                archive_after_days=self.prod_archive_after_days,
                delete_after_days=self.prod_delete_after_days,
            ),
            demo=EnvironmentRetention(
                archive_after_days=self.demo_archive_after_days,
                delete_after_days=self.demo_delete_after_days,
            ),
            global_=GlobalLifecycleConfig(
                cleanup_schedule=self.cleanup_schedule,
                batch_size=self.batch_size,
                retry_attempts=self.retry_attempts,
                retry_delay_ms=self.retry_delay_ms,
            ),
        )
