"""
Lifecycle cron API schemas.

Dependencies: pydantic
System role: Cleanup summary contract
"""

from datetime import datetime
from typing import Any

from fairform.core.intake.schemas import CamelModel


class ArchiveSummary(CamelModel):
    sessions_archived: int
    errors: int
    duration_ms: int


class DeletionSummary(CamelModel):
    sessions_deleted: int
    errors: int
    duration_ms: int


class CleanupSummary(CamelModel):
    """Body returned by the cleanup trigger."""

    success: bool = True
    timestamp: datetime
    archive: ArchiveSummary
    deletion: DeletionSummary
    total_duration: int
    storage_usage: dict[str, Any]
    metrics: dict[str, Any]
