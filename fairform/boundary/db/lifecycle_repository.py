"""
SQLAlchemy implementation of the lifecycle repository.

Each call runs in its own short transaction so a failed write for one
session never rolls back progress on the others.

Dependencies: sqlalchemy, fairform.boundary.db.CRUD
System role: Persistence adapter for SessionLifecycleManager and LifecycleMonitor
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fairform.boundary.db.CRUD.session_crud import session_crud
from fairform.core.exceptions import SessionRepositoryError
from fairform.core.lifecycle.status import SessionStatus

logger = logging.getLogger(__name__)


class SQLAlchemyLifecycleRepository:
    """Lifecycle queries and guarded transitions over ai_sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize repository.

        Args:
            session_factory: Factory producing independent async sessions
        """
        self._session_factory = session_factory

    async def list_archive_candidates(
        self,
        *,
        cutoff: datetime,
        demo: bool,
        limit: int,
        after_id: UUID | None = None,
    ) -> list[UUID]:
        return await self._list(SessionStatus.ACTIVE, cutoff, demo, limit, after_id)

    async def list_deletion_candidates(
        self,
        *,
        cutoff: datetime,
        demo: bool,
        limit: int,
        after_id: UUID | None = None,
    ) -> list[UUID]:
        return await self._list(SessionStatus.ARCHIVED, cutoff, demo, limit, after_id)

    async def _list(
        self,
        status: SessionStatus,
        cutoff: datetime,
        demo: bool,
        limit: int,
        after_id: UUID | None,
    ) -> list[UUID]:
        try:
            async with self._session_factory() as db:
                return await session_crud.list_lifecycle_candidates(
                    db,
                    status=status,
                    cutoff=cutoff,
                    demo=demo,
                    limit=limit,
                    after_id=after_id,
                )
        except SQLAlchemyError as e:
            raise SessionRepositoryError(
                f"Unable to list {status.value} lifecycle candidates",
                operation="list_candidates",
                details={"demo": demo, "cutoff": cutoff.isoformat()},
            ) from e

    async def archive_session(self, session_id: UUID, archived_at: datetime) -> bool:
        async with self._session_factory() as db:
            async with db.begin():
                return await session_crud.transition_status(
                    db,
                    session_id,
                    expected=SessionStatus.ACTIVE,
                    target=SessionStatus.ARCHIVED,
                    archived_at=archived_at,
                )

    async def delete_archived_session(self, session_id: UUID) -> bool:
        async with self._session_factory() as db:
            async with db.begin():
                return await session_crud.delete_if_status(
                    db,
                    session_id,
                    expected=SessionStatus.ARCHIVED,
                )

    async def count_sessions(self, status: SessionStatus | None = None) -> int:
        async with self._session_factory() as db:
            return await session_crud.count_by_status(db, status)
