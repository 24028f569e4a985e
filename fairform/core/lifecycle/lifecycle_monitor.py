"""
Session lifecycle monitor.

Accumulates archive/delete phase results into counters, samples storage
usage and emits a loggable metrics snapshot. Pure aggregation: no retry or
branching of its own.

Dependencies: fairform.core.lifecycle
System role: Metrics collection for the cleanup job
"""

import logging
import time

from fairform.core.lifecycle.repository import LifecycleRepository
from fairform.core.lifecycle.results import (
    ArchiveResult,
    DeleteResult,
    LifecycleMetrics,
    StorageUsage,
)
from fairform.core.lifecycle.status import SessionStatus

logger = logging.getLogger(__name__)

# Rough average footprint of one stored session
BYTES_PER_SESSION = 1024


class LifecycleMonitor:
    """Collects and tracks lifecycle metrics."""

    def __init__(self, repository: LifecycleRepository | None = None) -> None:
        """
        Initialize monitor.

        Args:
            repository: Source for storage counts; storage sampling is skipped if None
        """
        self._repository = repository
        self._metrics = LifecycleMetrics()
        self._operation_count = 0

    def update_archive_metrics(self, result: ArchiveResult) -> None:
        """Fold an archive phase result into the counters."""
        self._metrics.sessions_archived += result.archived
        self._metrics.total_errors += result.errors
        self._update_average_processing_time(result.duration_ms)
        self._metrics.last_cleanup_time = time.time()

    def update_delete_metrics(self, result: DeleteResult) -> None:
        """Fold a deletion phase result into the counters."""
        self._metrics.sessions_deleted += result.deleted
        self._metrics.total_errors += result.errors
        self._update_average_processing_time(result.duration_ms)
        self._metrics.last_cleanup_time = time.time()

    def _update_average_processing_time(self, duration_ms: int) -> None:
        count = self._operation_count
        self._metrics.average_processing_time_ms = (
            self._metrics.average_processing_time_ms * count + duration_ms
        ) / (count + 1)
        self._operation_count += 1

    async def collect_storage_metrics(self) -> StorageUsage:
        """
        Sample session counts from the repository.

        Failures are logged and reported as zero usage; sampling is optional.

        Returns:
            StorageUsage: Current counts and size estimate
        """
        usage = StorageUsage()
        if self._repository is not None:
            try:
                total = await self._repository.count_sessions()
                usage = StorageUsage(
                    total_sessions=total,
                    active_sessions=await self._repository.count_sessions(SessionStatus.ACTIVE),
                    archived_sessions=await self._repository.count_sessions(SessionStatus.ARCHIVED),
                    estimated_size=total * BYTES_PER_SESSION,
                )
            except Exception as e:
                logger.error(
                    f"Failed to collect storage metrics: {e}",
                    extra={"error_type": type(e).__name__},
                )
                usage = StorageUsage()

        self._metrics.storage_usage = usage
        return usage

    def get_metrics(self) -> LifecycleMetrics:
        """Return a snapshot copy of the metrics."""
        return self._metrics.copy()

    def log_metrics(self) -> None:
        """Log the current metrics as a structured record."""
        logger.info(
            "Session lifecycle metrics",
            extra={"metrics": self._metrics.to_dict()},
        )

    def reset(self) -> None:
        """Reset all counters."""
        self._metrics = LifecycleMetrics()
        self._operation_count = 0
