"""
AI message CRUD operations.

Dependencies: sqlalchemy, fairform.boundary.db.models
System role: Message persistence and cursor pagination
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fairform.boundary.db.CRUD.base_crud import BaseCRUD
from fairform.boundary.db.models.message_model import AIMessageModel


class MessageCRUD(BaseCRUD[AIMessageModel]):
    """CRUD operations for AIMessageModel."""

    def __init__(self) -> None:
        """Initialize MessageCRUD with AIMessageModel."""
        super().__init__(AIMessageModel)

    async def list_page(
        self,
        session: AsyncSession,
        session_id: UUID,
        limit: int = 20,
        after: datetime | None = None,
    ) -> tuple[list[AIMessageModel], bool]:
        """
        List messages oldest first, strictly after a creation-time cursor.

        Args:
            session: Async database session
            session_id: Parent session UUID
            limit: Page size
            after: Only messages created after this instant

        Returns:
            tuple: (messages, has_more)
        """
        stmt = (
            select(AIMessageModel)
            .where(AIMessageModel.session_id == session_id)
            .order_by(AIMessageModel.created_at, AIMessageModel.id)
            .limit(limit + 1)
        )
        if after is not None:
            stmt = stmt.where(AIMessageModel.created_at > after)
        result = await session.execute(stmt)
        rows = list(result.scalars().all())
        return rows[:limit], len(rows) > limit


message_crud = MessageCRUD()
