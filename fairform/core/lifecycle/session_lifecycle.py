"""
Session lifecycle manager.

Runs one cleanup cycle over AI chat sessions: archive sessions inactive past
the archive threshold, then permanently delete archived sessions inactive past
the deletion threshold. Production and demo sessions use separate retention
periods.

Each candidate is transitioned individually through a RetryableOperation, so a
transient write failure on one session never aborts the batch. Transitions are
conditional writes guarded by the expected prior status, which keeps repeated
or overlapping cron runs from double-processing a session.

Dependencies: fairform.core.retry, fairform.core.lifecycle
System role: Batch state transitions for session retention
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable
from uuid import UUID

from fairform.core.lifecycle.config import EnvironmentRetention, LifecycleConfig
from fairform.core.lifecycle.repository import LifecycleRepository
from fairform.core.lifecycle.results import (
    ArchiveResult,
    CleanupCycleResult,
    DeleteResult,
    LifecycleItemError,
)
from fairform.core.retry import RetryableOperation
from fairform.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _PhaseTally:
    changed: int = 0
    skipped: int = 0
    errors: list[LifecycleItemError] = field(default_factory=list)


class SessionLifecycleManager:
    """
    Archive and delete sessions according to retention policy.

    Attributes:
        config: Merged lifecycle configuration
    """

    def __init__(
        self,
        repository: LifecycleRepository,
        config: LifecycleConfig | None = None,
        retry: RetryableOperation | None = None,
        clock: Clock = _utcnow,
    ) -> None:
        """
        Initialize manager with injected persistence and retry policy.

        Args:
            repository: Session queries and guarded transitions
            config: Lifecycle config (defaults to LifecycleConfig())
            retry: Retry policy; built from config.global_ when omitted
            clock: Returns the current UTC time
        """
        self.config = config or LifecycleConfig()
        self._repository = repository
        self._retry = retry or RetryableOperation(
            max_attempts=self.config.global_.retry_attempts,
            base_delay_ms=self.config.global_.retry_delay_ms,
        )
        self._clock = clock

    def _environments(self) -> list[tuple[str, bool, EnvironmentRetention]]:
        return [
            ("production", False, self.config.prod),
            ("demo", True, self.config.demo),
        ]

    async def archive_old_sessions(self) -> ArchiveResult:
        """
        Archive active sessions past their environment's inactivity threshold.

        Returns:
            ArchiveResult: Counts, per-item errors and duration

        Raises:
            Exception: If candidate sessions cannot be queried
        """
        start = time.monotonic()
        result = ArchiveResult()
        logger.info("Starting session archiving")

        for env_name, demo, retention in self._environments():
            now = self._clock()
            cutoff = now - timedelta(days=retention.archive_after_days)

            async def list_candidates(after_id: UUID | None) -> list[UUID]:
                return await self._repository.list_archive_candidates(
                    cutoff=cutoff,
                    demo=demo,
                    limit=self.config.global_.batch_size,
                    after_id=after_id,
                )

            async def archive(session_id: UUID) -> bool:
                return await self._repository.archive_session(session_id, archived_at=now)

            tally = await self._process_phase(
                f"Archive {env_name} session", list_candidates, archive
            )
            result.archived += tally.changed
            result.skipped += tally.skipped
            result.error_details.extend(tally.errors)

            log_with_context(
                logger,
                logging.INFO,
                f"Archived {tally.changed} {env_name} sessions",
                environment=env_name,
                archived=tally.changed,
                skipped=tally.skipped,
                errors=len(tally.errors),
                cutoff=cutoff.isoformat(),
            )

        result.duration_ms = int((time.monotonic() - start) * 1000)
        log_with_context(
            logger,
            logging.INFO,
            f"Archive completed: {result.archived} sessions archived in {result.duration_ms}ms",
            archived=result.archived,
            errors=result.errors,
        )
        return result

    async def delete_expired_sessions(self) -> DeleteResult:
        """
        Permanently delete archived sessions past the deletion threshold.

        Returns:
            DeleteResult: Counts, per-item errors and duration

        Raises:
            Exception: If candidate sessions cannot be queried
        """
        start = time.monotonic()
        result = DeleteResult()
        logger.info("Starting expired session deletion")

        for env_name, demo, retention in self._environments():
            cutoff = self._clock() - timedelta(days=retention.delete_after_days)

            async def list_candidates(after_id: UUID | None) -> list[UUID]:
                return await self._repository.list_deletion_candidates(
                    cutoff=cutoff,
                    demo=demo,
                    limit=self.config.global_.batch_size,
                    after_id=after_id,
                )

            tally = await self._process_phase(
                f"Delete {env_name} session",
                list_candidates,
                self._repository.delete_archived_session,
            )
            result.deleted += tally.changed
            result.skipped += tally.skipped
            result.error_details.extend(tally.errors)

            log_with_context(
                logger,
                logging.INFO,
                f"Deleted {tally.changed} {env_name} sessions",
                environment=env_name,
                deleted=tally.changed,
                skipped=tally.skipped,
                errors=len(tally.errors),
                cutoff=cutoff.isoformat(),
            )

        result.duration_ms = int((time.monotonic() - start) * 1000)
        log_with_context(
            logger,
            logging.INFO,
            f"Deletion completed: {result.deleted} sessions deleted in {result.duration_ms}ms",
            deleted=result.deleted,
            errors=result.errors,
        )
        return result

    async def run_cleanup_cycle(self) -> CleanupCycleResult:
        """
        Run archive then delete.

        Returns:
            CleanupCycleResult: Results of both phases
        """
        logger.info("Starting session lifecycle cleanup cycle")
        archive = await self.archive_old_sessions()
        deletion = await self.delete_expired_sessions()
        logger.info("Session lifecycle cleanup cycle completed")
        return CleanupCycleResult(archive=archive, deletion=deletion)

    def get_config(self) -> LifecycleConfig:
        """Return a copy of the current configuration."""
        return self.config.merged()

    async def _process_phase(
        self,
        label: str,
        list_candidates: Callable[[UUID | None], Awaitable[list[UUID]]],
        transition: Callable[[UUID], Awaitable[Any]],
    ) -> _PhaseTally:
        """
        Walk candidates in keyset-paged batches and transition each one.

        Candidate query failures propagate. Per-item failures are recorded
        once retries are exhausted.
        """
        tally = _PhaseTally()
        batch_size = self.config.global_.batch_size
        after_id: UUID | None = None

        while True:
            batch = await list_candidates(after_id)
            if not batch:
                break

            for session_id in batch:
                try:
                    changed = await self._retry.execute(
                        lambda: transition(session_id),
                        f"{label} {session_id}",
                    )
                except Exception as e:
                    tally.errors.append(LifecycleItemError(session_id=session_id, message=str(e)))
                    continue

                if changed:
                    tally.changed += 1
                else:
                    # Guard matched nothing: another run already moved it
                    tally.skipped += 1

            if len(batch) < batch_size:
                break
            after_id = batch[-1]

        return tally
