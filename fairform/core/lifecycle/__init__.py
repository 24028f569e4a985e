"""
Session lifecycle management.

Exports:
  - SessionLifecycleManager: archive/delete cleanup cycle
  - LifecycleMonitor: metrics aggregation
  - LifecycleConfig, EnvironmentRetention, GlobalLifecycleConfig: configuration
  - SessionStatus: forward-only session states
"""

from fairform.core.lifecycle.config import (
    EnvironmentRetention,
    GlobalLifecycleConfig,
    LifecycleConfig,
)
from fairform.core.lifecycle.lifecycle_monitor import LifecycleMonitor
from fairform.core.lifecycle.repository import LifecycleRepository
from fairform.core.lifecycle.results import (
    ArchiveResult,
    CleanupCycleResult,
    DeleteResult,
    LifecycleItemError,
    LifecycleMetrics,
    StorageUsage,
)
from fairform.core.lifecycle.session_lifecycle import SessionLifecycleManager
from fairform.core.lifecycle.status import SessionStatus, can_transition

__all__ = [
    "ArchiveResult",
    "CleanupCycleResult",
    "DeleteResult",
    "EnvironmentRetention",
    "GlobalLifecycleConfig",
    "LifecycleConfig",
    "LifecycleItemError",
    "LifecycleMetrics",
    "LifecycleMonitor",
    "LifecycleRepository",
    "SessionLifecycleManager",
    "SessionStatus",
    "StorageUsage",
    "can_transition",
]
