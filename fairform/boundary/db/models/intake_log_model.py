"""
Intake audit log ORM model.

Append-only record of each classified intake request. Stores only a
truncated preview and a one-way hash of the user's text.

Dependencies: sqlalchemy, fairform.boundary.db.base
System role: Redacted audit trail for AI intake classification
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from fairform.boundary.db.base import Base, UUIDMixin, utcnow


class IntakeLogModel(Base, UUIDMixin):
    """
    Intake audit entry.

    Attributes:
        user_id: Requesting user's auth subject
        input_preview: First 160 characters of the trimmed input
        input_hash: sha256 hex digest of the trimmed input
        classification: Validated classification payload
        moderation: Verdict and flagged categories only
        created_at: Creation timestamp
    """

    __tablename__ = "ai_intake_logs"

    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    input_preview: Mapped[str] = mapped_column(String(160), nullable=False)
    input_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    classification: Mapped[dict] = mapped_column(JSON, nullable=False)
    moderation: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
