"""
Test suite for SessionService against in-memory SQLite.

System role: Verification of session ownership and message history rules
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from fairform.application.services.session_service import SessionService
from fairform.boundary.db.CRUD.session_crud import session_crud
from fairform.boundary.db.models import MessageAuthor
from fairform.core.exceptions import ForbiddenError, SessionArchivedError, SessionNotFoundError
from fairform.core.lifecycle.status import SessionStatus


@pytest.fixture
def session_service(test_async_db: AsyncSession) -> SessionService:
    """Provide SessionService bound to the test database."""
    return SessionService(db=test_async_db)


class TestSessionServiceCreate:
    """Test suite for SessionService.create_session()."""

    @pytest.mark.asyncio
    async def test_create_should_store_owner_and_options(self, session_service: SessionService) -> None:
        """Test the created session belongs to the caller and keeps options."""
        session = await session_service.create_session(
            "user-1",
            case_id="case-42",
            title="Eviction help",
            demo=True,
        )

        assert session.user_id == "user-1"
        assert session.case_id == "case-42"
        assert session.title == "Eviction help"
        assert session.demo is True
        assert session.status == SessionStatus.ACTIVE
        assert session.last_message_at is not None


class TestSessionServiceOwnership:
    """Test suite for SessionService.get_owned_session()."""

    @pytest.mark.asyncio
    async def test_missing_session_should_raise_not_found(self, session_service: SessionService) -> None:
        """Test unknown ids raise SessionNotFoundError."""
        with pytest.raises(SessionNotFoundError):
            await session_service.get_owned_session(uuid.uuid4(), "user-1")

    @pytest.mark.asyncio
    async def test_other_users_session_should_raise_forbidden(self, session_service: SessionService) -> None:
        """Test sessions are visible to their owner only."""
        session = await session_service.create_session("owner")

        with pytest.raises(ForbiddenError):
            await session_service.get_owned_session(session.id, "intruder")


class TestSessionServiceMessages:
    """Test suite for message append and listing."""

    @pytest.mark.asyncio
    async def test_append_should_store_message_and_list_it(self, session_service: SessionService) -> None:
        """Test appended messages come back oldest first."""
        # Arrange
        session = await session_service.create_session("user-1")

        # Act
        await session_service.append_message(session.id, "user-1", MessageAuthor.USER, "first")
        await session_service.append_message(
            session.id,
            "user-1",
            MessageAuthor.ASSISTANT,
            "second",
            meta={"model": "gpt-4o-mini"},
        )
        messages, has_more = await session_service.list_messages(session.id, "user-1")

        # Assert
        assert [m.content for m in messages] == ["first", "second"]
        assert messages[1].meta == {"model": "gpt-4o-mini"}
        assert has_more is False

    @pytest.mark.asyncio
    async def test_append_to_archived_session_should_raise(
        self,
        session_service: SessionService,
        test_async_db: AsyncSession,
    ) -> None:
        """Test archived sessions are read-only."""
        # Arrange
        session = await session_service.create_session("user-1")
        await session_crud.transition_status(
            test_async_db,
            session.id,
            expected=SessionStatus.ACTIVE,
            target=SessionStatus.ARCHIVED,
        )
        test_async_db.expunge_all()

        # Act / Assert
        with pytest.raises(SessionArchivedError):
            await session_service.append_message(session.id, "user-1", MessageAuthor.USER, "hello?")

    @pytest.mark.asyncio
    async def test_list_messages_for_other_user_should_raise_forbidden(
        self,
        session_service: SessionService,
    ) -> None:
        """Test message history is owner-only."""
        session = await session_service.create_session("owner")

        with pytest.raises(ForbiddenError):
            await session_service.list_messages(session.id, "intruder")
