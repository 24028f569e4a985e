"""
Lifecycle job service.

Runs one cleanup cycle, feeds the results to the monitor, samples storage
and assembles the summary returned by the cron trigger.

Dependencies: fairform.core.lifecycle
System role: Cron use case orchestration
"""

import logging
from datetime import datetime, timezone

from fairform.core.lifecycle.lifecycle_monitor import LifecycleMonitor
from fairform.core.lifecycle.session_lifecycle import SessionLifecycleManager
from fairform.models.lifecycle import ArchiveSummary, CleanupSummary, DeletionSummary
from fairform.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class LifecycleJobService:
    """Cleanup cycle plus metrics."""

    def __init__(self, manager: SessionLifecycleManager, monitor: LifecycleMonitor) -> None:
        self._manager = manager
        self._monitor = monitor

    async def run(self) -> CleanupSummary:
        """
        Execute the cleanup cycle.

        Returns:
            CleanupSummary: Phase summaries, storage usage and metrics

        Raises:
            Exception: If a phase cannot start (e.g. candidate query fails)
        """
        logger.info("Starting session lifecycle cleanup")

        cycle = await self._manager.run_cleanup_cycle()

        self._monitor.update_archive_metrics(cycle.archive)
        self._monitor.update_delete_metrics(cycle.deletion)
        storage_usage = await self._monitor.collect_storage_metrics()
        self._monitor.log_metrics()

        for item in cycle.archive.error_details + cycle.deletion.error_details:
            log_with_context(
                logger,
                logging.WARNING,
                f"Lifecycle transition failed for session {item.session_id}",
                session_id=str(item.session_id),
                error_msg=item.message,
            )

        summary = CleanupSummary(
            success=True,
            timestamp=datetime.now(timezone.utc),
            archive=ArchiveSummary(
                sessions_archived=cycle.archive.archived,
                errors=cycle.archive.errors,
                duration_ms=cycle.archive.duration_ms,
            ),
            deletion=DeletionSummary(
                sessions_deleted=cycle.deletion.deleted,
                errors=cycle.deletion.errors,
                duration_ms=cycle.deletion.duration_ms,
            ),
            total_duration=cycle.total_duration_ms,
            storage_usage=storage_usage.to_dict(),
            metrics=self._monitor.get_metrics().to_dict(),
        )
        log_with_context(
            logger,
            logging.INFO,
            "Session lifecycle cleanup completed",
            archived=cycle.archive.archived,
            deleted=cycle.deletion.deleted,
            total_duration_ms=cycle.total_duration_ms,
        )
        return summary
