"""
AI session service orchestrator.

Coordinates session creation, ownership checks and message history.
Archived sessions are read-only; appending a message bumps the session's
last activity, which is what the lifecycle job measures.

Dependencies: fairform.boundary.db.CRUD
System role: Session use case orchestration
"""

import logging
from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fairform.boundary.db.base import utcnow
from fairform.boundary.db.CRUD.message_crud import message_crud
from fairform.boundary.db.CRUD.session_crud import session_crud
from fairform.boundary.db.models.message_model import AIMessageModel, MessageAuthor
from fairform.boundary.db.models.session_model import AISessionModel
from fairform.core.exceptions import ForbiddenError, SessionArchivedError, SessionNotFoundError
from fairform.core.lifecycle.status import SessionStatus

logger = logging.getLogger(__name__)


class SessionService:
    """AI session service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create_session(
        self,
        user_id: str,
        case_id: str | None = None,
        title: str = "New Conversation",
        demo: bool = False,
    ) -> AISessionModel:
        """
        Create an active session owned by user_id.

        Returns:
            AISessionModel: Created session
        """
        now = utcnow()
        session = await session_crud.create(
            self.db,
            user_id=user_id,
            case_id=case_id,
            title=title,
            demo=demo,
            status=SessionStatus.ACTIVE,
            last_message_at=now,
        )
        logger.info(
            "AI session created",
            extra={"session_id": str(session.id), "user_id": user_id, "demo": demo},
        )
        return session

    async def list_user_sessions(self, user_id: str) -> Sequence[AISessionModel]:
        """List sessions owned by user_id, most recently active first."""
        return await session_crud.list_for_user(self.db, user_id)

    async def get_owned_session(self, session_id: UUID, user_id: str) -> AISessionModel:
        """
        Fetch a session and verify ownership.

        Raises:
            SessionNotFoundError: No such session
            ForbiddenError: Session belongs to another user
        """
        session = await session_crud.get_by_id(self.db, session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if session.user_id != user_id:
            raise ForbiddenError("Forbidden", {"session_id": str(session_id)})
        return session

    async def list_messages(
        self,
        session_id: UUID,
        user_id: str,
        limit: int = 20,
        after: datetime | None = None,
    ) -> tuple[list[AIMessageModel], bool]:
        """
        Page through a session's messages, oldest first.

        Returns:
            tuple: (messages, has_more)
        """
        await self.get_owned_session(session_id, user_id)
        return await message_crud.list_page(self.db, session_id, limit=limit, after=after)

    async def append_message(
        self,
        session_id: UUID,
        user_id: str,
        author: MessageAuthor,
        content: str,
        meta: dict[str, Any] | None = None,
    ) -> AIMessageModel:
        """
        Append a message and bump last activity.

        Raises:
            SessionNotFoundError: No such session
            ForbiddenError: Session belongs to another user
            SessionArchivedError: Session is no longer active
        """
        session = await self.get_owned_session(session_id, user_id)
        if session.status != SessionStatus.ACTIVE:
            raise SessionArchivedError(session_id, session.status.value)

        now = utcnow()
        # Guarded bump: fails if the lifecycle job archived it meanwhile
        if not await session_crud.touch_activity(self.db, session_id, now):
            raise SessionArchivedError(session_id, SessionStatus.ARCHIVED.value)

        return await message_crud.create(
            self.db,
            session_id=session_id,
            author=author,
            content=content,
            meta=meta or {},
            created_at=now,
        )
