"""
Intake audit writer.

Persists a redacted IntakeLogEntry in its own transaction. A failed audit
write is logged and swallowed so it never fails the user's request.

Dependencies: sqlalchemy, fairform.boundary.db, fairform.observability
System role: Redacted audit trail for intake classification
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fairform.boundary.db.CRUD.intake_log_crud import intake_log_crud
from fairform.core.intake.schemas import IntakeClassification, ModerationResult
from fairform.observability.log_utils import hash_text, log_exception_with_context, preview_text

logger = logging.getLogger(__name__)

MAX_PREVIEW_LENGTH = 160


class IntakeAuditWriter:
    """Append-only writer for intake audit entries."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record(
        self,
        user_id: str,
        original_input: str,
        classification: IntakeClassification,
        moderation: ModerationResult,
    ) -> None:
        """
        Write one audit entry.

        Args:
            user_id: Requesting user
            original_input: Raw intake text (only preview and hash are stored)
            classification: Validated classification
            moderation: Moderation result (only verdict and categories are stored)
        """
        try:
            async with self._session_factory() as db:
                async with db.begin():
                    await intake_log_crud.create(
                        db,
                        user_id=user_id,
                        input_preview=preview_text(original_input, MAX_PREVIEW_LENGTH),
                        input_hash=hash_text(original_input),
                        classification=classification.model_dump(by_alias=True, exclude_none=True),
                        moderation=moderation.summary(),
                    )
        except SQLAlchemyError as e:
            log_exception_with_context(
                logger,
                "Failed to log AI intake classification",
                e,
                user_id=user_id,
            )
