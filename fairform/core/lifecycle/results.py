"""
Lifecycle phase results and metrics snapshots.

Dependencies: dataclasses (stdlib)
System role: Value objects passed from the lifecycle manager to the monitor
"""

from dataclasses import asdict, dataclass, field
from uuid import UUID


@dataclass
class LifecycleItemError:
    """A session whose transition failed after all retries."""

    session_id: UUID
    message: str


@dataclass
class PhaseResult:
    """Common fields of one lifecycle phase."""

    skipped: int = 0
    error_details: list[LifecycleItemError] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def errors(self) -> int:
        return len(self.error_details)


@dataclass
class ArchiveResult(PhaseResult):
    """Outcome of the archive phase."""

    archived: int = 0


@dataclass
class DeleteResult(PhaseResult):
    """Outcome of the deletion phase."""

    deleted: int = 0


@dataclass
class CleanupCycleResult:
    """Both phases of one cleanup cycle."""

    archive: ArchiveResult
    deletion: DeleteResult

    @property
    def total_duration_ms(self) -> int:
        return self.archive.duration_ms + self.deletion.duration_ms


@dataclass
class StorageUsage:
    """Session counts sampled from the datastore."""

    total_sessions: int = 0
    active_sessions: int = 0
    archived_sessions: int = 0
    estimated_size: int = 0

    def to_dict(self) -> dict:
        return {
            "totalSessions": self.total_sessions,
            "activeSessions": self.active_sessions,
            "archivedSessions": self.archived_sessions,
            "estimatedSize": self.estimated_size,
        }


@dataclass
class LifecycleMetrics:
    """Aggregated counters across lifecycle operations."""

    sessions_archived: int = 0
    sessions_deleted: int = 0
    total_errors: int = 0
    average_processing_time_ms: float = 0.0
    last_cleanup_time: float = 0.0
    storage_usage: StorageUsage = field(default_factory=StorageUsage)

    def to_dict(self) -> dict:
        return {
            "sessionsArchived": self.sessions_archived,
            "sessionsDeleted": self.sessions_deleted,
            "totalErrors": self.total_errors,
            "averageProcessingTime": self.average_processing_time_ms,
            "lastCleanupTime": self.last_cleanup_time,
            "storageUsage": self.storage_usage.to_dict(),
        }

    def copy(self) -> "LifecycleMetrics":
        data = asdict(self)
        data["storage_usage"] = StorageUsage(**data["storage_usage"])
        return LifecycleMetrics(**data)
