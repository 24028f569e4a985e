"""
Persistence contract required by the lifecycle manager and monitor.

Dependencies: typing (stdlib)
System role: Port implemented by the database boundary layer
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from fairform.core.lifecycle.status import SessionStatus


class LifecycleRepository(Protocol):
    """Session queries and guarded status transitions."""

    async def list_archive_candidates(
        self,
        *,
        cutoff: datetime,
        demo: bool,
        limit: int,
        after_id: UUID | None = None,
    ) -> list[UUID]:
        """Active sessions of one environment inactive since before cutoff, ordered by id."""
        ...

    async def list_deletion_candidates(
        self,
        *,
        cutoff: datetime,
        demo: bool,
        limit: int,
        after_id: UUID | None = None,
    ) -> list[UUID]:
        """Archived sessions of one environment inactive since before cutoff, ordered by id."""
        ...

    async def archive_session(self, session_id: UUID, archived_at: datetime) -> bool:
        """Archive if still active. Returns False when the guard matched nothing."""
        ...

    async def delete_archived_session(self, session_id: UUID) -> bool:
        """Hard-delete if still archived. Returns False when the guard matched nothing."""
        ...

    async def count_sessions(self, status: SessionStatus | None = None) -> int:
        """Count sessions, optionally filtered by status."""
        ...
