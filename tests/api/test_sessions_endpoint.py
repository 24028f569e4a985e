"""
Test suite for the AI session endpoints.

SessionService is an AsyncMock; responses are built from attribute objects
the way ORM rows are.

System role: Verification of session HTTP contracts
"""

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from fairform.api.deps import get_session_service
from fairform.boundary.db.models import MessageAuthor
from fairform.core.exceptions import ForbiddenError, SessionArchivedError, SessionNotFoundError
from fairform.core.lifecycle import SessionStatus

SESSIONS_URL = "/api/v1/ai/sessions"
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def session_row(session_id: uuid.UUID | None = None, **overrides) -> SimpleNamespace:
    values = {
        "id": session_id or uuid.uuid4(),
        "user_id": "user-1",
        "case_id": None,
        "title": "New Conversation",
        "status": SessionStatus.ACTIVE,
        "demo": False,
        "summary": None,
        "created_at": NOW,
        "updated_at": NOW,
        "last_message_at": NOW,
        "archived_at": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def message_row(session_id: uuid.UUID, content: str = "hello") -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(),
        session_id=session_id,
        author=MessageAuthor.USER,
        content=content,
        meta={},
        created_at=NOW,
    )


@pytest.fixture
def session_service() -> AsyncMock:
    """Mocked SessionService."""
    return AsyncMock()


@pytest.fixture
def sessions_client(app, client, session_service):
    """Client with the session service overridden."""
    app.dependency_overrides[get_session_service] = lambda: session_service
    return client


class TestCreateSession:
    """Test suite for POST /ai/sessions."""

    def test_create_should_return_session_id_and_session(
        self,
        sessions_client,
        session_service,
        auth_headers,
    ) -> None:
        """Test creation passes caller and options through."""
        # Arrange
        row = session_row(case_id="case-9", demo=True)
        session_service.create_session.return_value = row

        # Act
        response = sessions_client.post(
            SESSIONS_URL,
            json={"caseId": "case-9", "demo": True},
            headers=auth_headers,
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["sessionId"] == str(row.id)
        assert body["session"]["caseId"] == "case-9"
        assert body["session"]["status"] == "active"
        session_service.create_session.assert_awaited_once_with(
            user_id="user-1",
            case_id="case-9",
            title="New Conversation",
            demo=True,
        )

    def test_create_without_token_should_return_401(self, sessions_client, session_service) -> None:
        """Test authentication is required."""
        response = sessions_client.post(SESSIONS_URL, json={})

        assert response.status_code == 401
        session_service.create_session.assert_not_awaited()


class TestListAndGetSessions:
    """Test suite for GET /ai/sessions and GET /ai/sessions/{id}."""

    def test_list_should_return_callers_sessions(self, sessions_client, session_service, auth_headers) -> None:
        """Test sessions are listed for the token subject."""
        session_service.list_user_sessions.return_value = [session_row(), session_row()]

        response = sessions_client.get(SESSIONS_URL, headers=auth_headers)

        assert response.status_code == 200
        assert len(response.json()) == 2
        session_service.list_user_sessions.assert_awaited_once_with("user-1")

    def test_get_missing_should_return_404(self, sessions_client, session_service, auth_headers) -> None:
        """Test unknown session ids map to SessionNotFound."""
        session_id = uuid.uuid4()
        session_service.get_owned_session.side_effect = SessionNotFoundError(session_id)

        response = sessions_client.get(f"{SESSIONS_URL}/{session_id}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "SessionNotFound"

    def test_get_foreign_should_return_403(self, sessions_client, session_service, auth_headers) -> None:
        """Test another user's session maps to Forbidden."""
        session_service.get_owned_session.side_effect = ForbiddenError("Forbidden")

        response = sessions_client.get(f"{SESSIONS_URL}/{uuid.uuid4()}", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"


class TestSessionMessages:
    """Test suite for the messages sub-resource."""

    def test_list_messages_should_return_page(self, sessions_client, session_service, auth_headers) -> None:
        """Test items, hasMore and total are returned."""
        # Arrange
        session_id = uuid.uuid4()
        session_service.list_messages.return_value = (
            [message_row(session_id, "one"), message_row(session_id, "two")],
            True,
        )

        # Act
        response = sessions_client.get(
            f"{SESSIONS_URL}/{session_id}/messages",
            params={"limit": 2},
            headers=auth_headers,
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert [m["content"] for m in body["items"]] == ["one", "two"]
        assert body["hasMore"] is True
        assert body["total"] == 2
        assert session_service.list_messages.await_args.kwargs["limit"] == 2

    def test_append_should_return_201(self, sessions_client, session_service, auth_headers) -> None:
        """Test a message is appended for the caller."""
        session_id = uuid.uuid4()
        session_service.append_message.return_value = message_row(session_id, "new message")

        response = sessions_client.post(
            f"{SESSIONS_URL}/{session_id}/messages",
            json={"content": "new message"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["content"] == "new message"
        assert session_service.append_message.await_args.kwargs["author"] == MessageAuthor.USER

    def test_append_to_archived_should_return_409(self, sessions_client, session_service, auth_headers) -> None:
        """Test archived sessions reject new messages."""
        session_id = uuid.uuid4()
        session_service.append_message.side_effect = SessionArchivedError(session_id, "archived")

        response = sessions_client.post(
            f"{SESSIONS_URL}/{session_id}/messages",
            json={"content": "still there?"},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"] == "SessionArchived"

    def test_append_empty_content_should_return_400(self, sessions_client, session_service, auth_headers) -> None:
        """Test request validation failures use the ValidationError tag."""
        response = sessions_client.post(
            f"{SESSIONS_URL}/{uuid.uuid4()}/messages",
            json={"content": ""},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"
        assert "content" in response.json()["details"]["fieldErrors"]
        session_service.append_message.assert_not_awaited()
