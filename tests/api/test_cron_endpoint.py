"""
Test suite for the session lifecycle cron trigger.

System role: Verification of cron authorization and cleanup summary body
"""

import pytest

from fairform.api.deps import get_lifecycle_job_service
from fairform.application.services.lifecycle_service import LifecycleJobService
from fairform.core.lifecycle import LifecycleMonitor, SessionLifecycleManager, SessionStatus
from fairform.core.retry import RetryableOperation
from tests.conftest import TEST_CRON_SECRET
from tests.core.fakes import NOW, FakeLifecycleRepository

CRON_URL = "/api/v1/cron/session-lifecycle"


@pytest.fixture
def repository() -> FakeLifecycleRepository:
    """Repository with one archive candidate and one expired archive."""
    repo = FakeLifecycleRepository()
    repo.add(idle_days=8)
    repo.add(status=SessionStatus.ARCHIVED, idle_days=95)
    return repo


@pytest.fixture
def cron_client(app, client, repository, recording_sleep):
    """Client whose job service runs on the in-memory repository."""

    def _job_service() -> LifecycleJobService:
        manager = SessionLifecycleManager(
            repository,
            retry=RetryableOperation(base_delay_ms=0, sleep=recording_sleep),
            clock=lambda: NOW,
        )
        return LifecycleJobService(manager=manager, monitor=LifecycleMonitor(repository))

    app.dependency_overrides[get_lifecycle_job_service] = _job_service
    return client


class TestSessionLifecycleCron:
    """Test suite for GET /cron/session-lifecycle."""

    def test_valid_secret_should_run_cleanup_and_return_summary(self, cron_client) -> None:
        """Test an authorized run returns the camelCase summary."""
        # Act
        response = cron_client.get(CRON_URL, headers={"Authorization": f"Bearer {TEST_CRON_SECRET}"})

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["archive"]["sessionsArchived"] == 1
        assert body["archive"]["errors"] == 0
        assert body["deletion"]["sessionsDeleted"] == 1
        assert body["totalDuration"] == body["archive"]["durationMs"] + body["deletion"]["durationMs"]
        assert body["storageUsage"]["totalSessions"] == 1
        assert body["metrics"]["sessionsArchived"] == 1
        assert "timestamp" in body

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"Authorization": "Bearer wrong-secret"},
            {"Authorization": TEST_CRON_SECRET},
        ],
    )
    def test_missing_or_wrong_secret_should_return_401(self, cron_client, repository, headers) -> None:
        """Test the trigger rejects callers without the exact bearer secret."""
        response = cron_client.get(CRON_URL, headers=headers)

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"
        assert repository.list_calls == 0

    def test_non_ascii_authorization_should_return_401(self, cron_client, repository) -> None:
        """Test a latin-1 header value is compared safely and rejected."""
        response = cron_client.get(
            CRON_URL,
            headers={"Authorization": "Bearer sécret".encode("latin-1")},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"
        assert repository.list_calls == 0

    def test_unset_secret_should_allow_request(self, cron_client, settings) -> None:
        """Test an unconfigured secret leaves the trigger open."""
        settings.lifecycle.cron_secret = None

        response = cron_client.get(CRON_URL)

        assert response.status_code == 200

    def test_cleanup_failure_should_return_500_body(self, cron_client, repository) -> None:
        """Test a failing candidate query is reported as CleanupFailed."""
        # Arrange
        repository.fail_queries = True

        # Act
        response = cron_client.get(CRON_URL, headers={"Authorization": f"Bearer {TEST_CRON_SECRET}"})

        # Assert
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "CleanupFailed"
        assert body["message"] == "database unavailable"
        assert "timestamp" in body
