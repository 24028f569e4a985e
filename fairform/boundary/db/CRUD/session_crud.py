"""
AI session CRUD operations.

Session queries for the API plus the guarded status transitions used by
the lifecycle job. Transitions are single conditional statements keyed on
the expected prior status, so concurrent cleanup runs cannot move a
session twice.

Dependencies: sqlalchemy, fairform.boundary.db.models
System role: Session persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fairform.boundary.db.base import utcnow
from fairform.boundary.db.CRUD.base_crud import BaseCRUD
from fairform.boundary.db.models.message_model import AIMessageModel
from fairform.boundary.db.models.session_model import AISessionModel
from fairform.core.lifecycle.status import SessionStatus, can_transition


class SessionCRUD(BaseCRUD[AISessionModel]):
    """CRUD operations for AISessionModel."""

    def __init__(self) -> None:
        """Initialize SessionCRUD with AISessionModel."""
        super().__init__(AISessionModel)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: str,
    ) -> Sequence[AISessionModel]:
        """
        List a user's sessions, most recently active first.

        Args:
            session: Async database session
            user_id: Owner's auth subject

        Returns:
            Sequence of AISessionModel
        """
        stmt = (
            select(AISessionModel)
            .where(AISessionModel.user_id == user_id)
            .order_by(AISessionModel.last_message_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def touch_activity(
        self,
        session: AsyncSession,
        id: UUID,
        at: datetime,
    ) -> bool:
        """
        Bump last_message_at on an active session.

        Returns:
            bool: False if the session is missing or no longer active
        """
        stmt = (
            update(AISessionModel)
            .where(AISessionModel.id == id, AISessionModel.status == SessionStatus.ACTIVE)
            .values(last_message_at=at, updated_at=at)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def list_lifecycle_candidates(
        self,
        session: AsyncSession,
        *,
        status: SessionStatus,
        cutoff: datetime,
        demo: bool,
        limit: int,
        after_id: UUID | None = None,
    ) -> list[UUID]:
        """
        Keyset-paged ids of sessions in a status, inactive since before cutoff.

        Args:
            session: Async database session
            status: Required current status
            cutoff: Exclusive upper bound on last_message_at
            demo: Environment flag
            limit: Page size
            after_id: Return ids strictly greater than this one

        Returns:
            list[UUID]: Ids in ascending order
        """
        stmt = (
            select(AISessionModel.id)
            .where(
                AISessionModel.status == status,
                AISessionModel.demo == demo,
                AISessionModel.last_message_at < cutoff,
            )
            .order_by(AISessionModel.id)
            .limit(limit)
        )
        if after_id is not None:
            stmt = stmt.where(AISessionModel.id > after_id)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def transition_status(
        self,
        session: AsyncSession,
        id: UUID,
        expected: SessionStatus,
        target: SessionStatus,
        **values,
    ) -> bool:
        """
        Move a session forward only if it still has the expected status.

        Args:
            session: Async database session
            id: Session UUID
            expected: Status the row must currently hold
            target: New status (must be later than expected)
            **values: Extra columns to set alongside the status

        Returns:
            bool: True if a row was updated

        Raises:
            ValueError: If target does not move forward from expected
        """
        if not can_transition(expected, target):
            raise ValueError(f"Illegal session transition {expected.value} -> {target.value}")

        stmt = (
            update(AISessionModel)
            .where(AISessionModel.id == id, AISessionModel.status == expected)
            .values(status=target, updated_at=utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def delete_if_status(
        self,
        session: AsyncSession,
        id: UUID,
        expected: SessionStatus,
    ) -> bool:
        """
        Hard-delete a session and its messages if it holds the expected status.

        Returns:
            bool: True if the session row was deleted
        """
        guard = select(AISessionModel.id).where(
            AISessionModel.id == id,
            AISessionModel.status == expected,
        )
        await session.execute(
            delete(AIMessageModel)
            .where(AIMessageModel.session_id.in_(guard))
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(
            delete(AISessionModel).where(
                AISessionModel.id == id,
                AISessionModel.status == expected,
            ).execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def count_by_status(
        self,
        session: AsyncSession,
        status: SessionStatus | None = None,
    ) -> int:
        """Count sessions, optionally restricted to one status."""
        stmt = select(func.count()).select_from(AISessionModel)
        if status is not None:
            stmt = stmt.where(AISessionModel.status == status)
        result = await session.execute(stmt)
        return int(result.scalar_one())


session_crud = SessionCRUD()
