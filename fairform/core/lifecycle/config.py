"""
Lifecycle configuration dataclasses.

Retention periods per environment (production vs demo sandbox) and the
global batch/retry policy for the cleanup cycle.

Dependencies: dataclasses (stdlib)
System role: Domain configuration for SessionLifecycleManager
"""

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class EnvironmentRetention:
    """Inactivity thresholds for one environment."""

    archive_after_days: int
    delete_after_days: int


@dataclass(frozen=True)
class GlobalLifecycleConfig:
    """Settings shared by both environments."""

    cleanup_schedule: str = "0 2 * * *"  # daily, 02:00 UTC
    batch_size: int = 100
    retry_attempts: int = 3
    retry_delay_ms: int = 5000


@dataclass(frozen=True)
class LifecycleConfig:
    """Complete lifecycle configuration."""

    prod: EnvironmentRetention = field(
        default_factory=lambda: EnvironmentRetention(archive_after_days=7, delete_after_days=90)
    )
    demo: EnvironmentRetention = field(
        default_factory=lambda: EnvironmentRetention(archive_after_days=1, delete_after_days=14)
    )
    global_: GlobalLifecycleConfig = field(default_factory=GlobalLifecycleConfig)

    def merged(
        self,
        prod: dict[str, Any] | None = None,
        demo: dict[str, Any] | None = None,
        global_: dict[str, Any] | None = None,
    ) -> "LifecycleConfig":
        """
        Return a copy with per-section partial overrides applied.

        Args:
            prod: Overrides for production retention fields
            demo: Overrides for demo retention fields
            global_: Overrides for global fields

        Returns:
            LifecycleConfig: New config; untouched fields keep their values
        """
        return LifecycleConfig(
            prod=replace(self.prod, **(prod or {})),
            demo=replace(self.demo, **(demo or {})),
            global_=replace(self.global_, **(global_ or {})),
        )
