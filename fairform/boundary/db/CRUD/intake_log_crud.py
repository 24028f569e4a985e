"""
Intake audit log CRUD operations.

Dependencies: sqlalchemy, fairform.boundary.db.models
System role: Append-only audit persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fairform.boundary.db.CRUD.base_crud import BaseCRUD
from fairform.boundary.db.models.intake_log_model import IntakeLogModel


class IntakeLogCRUD(BaseCRUD[IntakeLogModel]):
    """Create and read intake audit entries. No update or delete."""

    def __init__(self) -> None:
        """Initialize IntakeLogCRUD with IntakeLogModel."""
        super().__init__(IntakeLogModel)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: str,
    ) -> Sequence[IntakeLogModel]:
        """List a user's audit entries, newest first."""
        stmt = (
            select(IntakeLogModel)
            .where(IntakeLogModel.user_id == user_id)
            .order_by(IntakeLogModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


intake_log_crud = IntakeLogCRUD()
