"""
Test suite for LifecycleJobService.

System role: Verification of cleanup summary assembly
"""

import pytest

from fairform.application.services.lifecycle_service import LifecycleJobService
from fairform.core.lifecycle import LifecycleMonitor, SessionLifecycleManager, SessionStatus
from fairform.core.retry import RetryableOperation
from tests.core.fakes import NOW, FakeLifecycleRepository


@pytest.fixture
def repository() -> FakeLifecycleRepository:
    """Repository seeded with one archive and one delete candidate."""
    repo = FakeLifecycleRepository()
    repo.add(idle_days=10)
    repo.add(idle_days=1)
    repo.add(status=SessionStatus.ARCHIVED, idle_days=120)
    return repo


@pytest.fixture
def job_service(repository, recording_sleep) -> LifecycleJobService:
    """Provide job service with a fixed clock."""
    manager = SessionLifecycleManager(
        repository,
        retry=RetryableOperation(base_delay_ms=0, sleep=recording_sleep),
        clock=lambda: NOW,
    )
    return LifecycleJobService(manager=manager, monitor=LifecycleMonitor(repository))


class TestLifecycleJobServiceRun:
    """Test suite for LifecycleJobService.run()."""

    @pytest.mark.asyncio
    async def test_run_should_summarize_both_phases(self, job_service: LifecycleJobService) -> None:
        """Test the summary carries counts, storage usage and metrics."""
        # Act
        summary = await job_service.run()

        # Assert
        assert summary.success is True
        assert summary.archive.sessions_archived == 1
        assert summary.deletion.sessions_deleted == 1
        assert summary.total_duration == summary.archive.duration_ms + summary.deletion.duration_ms
        assert summary.storage_usage["totalSessions"] == 2
        assert summary.storage_usage["archivedSessions"] == 1
        assert summary.metrics["sessionsArchived"] == 1
        assert summary.metrics["sessionsDeleted"] == 1

    @pytest.mark.asyncio
    async def test_run_should_serialize_camel_case(self, job_service: LifecycleJobService) -> None:
        """Test the JSON body uses the public field names."""
        body = (await job_service.run()).model_dump(mode="json", by_alias=True)

        assert set(body) >= {"success", "timestamp", "archive", "deletion", "totalDuration", "storageUsage", "metrics"}
        assert set(body["archive"]) == {"sessionsArchived", "errors", "durationMs"}
        assert set(body["deletion"]) == {"sessionsDeleted", "errors", "durationMs"}

    @pytest.mark.asyncio
    async def test_run_should_propagate_candidate_query_failure(
        self,
        job_service: LifecycleJobService,
        repository: FakeLifecycleRepository,
    ) -> None:
        """Test a phase that cannot start fails the run."""
        repository.fail_queries = True

        with pytest.raises(ConnectionError):
            await job_service.run()
