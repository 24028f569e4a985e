"""
AI session ORM model.

Represents one AI copilot conversation owned by a user. Status moves
forward only (active -> archived -> deleted); the lifecycle job archives
inactive sessions and later hard-deletes them.

Dependencies: sqlalchemy, fairform.boundary.db.base
System role: Session persistence for chat context and lifecycle management
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fairform.boundary.db.base import Base, TimestampMixin, UUIDMixin, utcnow
from fairform.core.lifecycle.status import SessionStatus


class AISessionModel(Base, UUIDMixin, TimestampMixin):
    """
    AI session ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owning user's auth subject
        case_id: Optional linked case identifier
        title: Display title
        status: Lifecycle status enum (ACTIVE/ARCHIVED)
        demo: True for demo sandbox sessions (shorter retention)
        summary: Optional rolling conversation summary
        last_message_at: Last activity timestamp, drives archival
        archived_at: When the lifecycle job archived the session
        messages: Message rows (cascade delete)
    """

    __tablename__ = "ai_sessions"
    __table_args__ = (
        Index("ix_ai_sessions_lifecycle", "status", "demo", "last_message_at"),
    )

    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    case_id: Mapped[str | None] = mapped_column(String(128), nullable=True, default=None)
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="New Conversation",
    )
    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus, native_enum=False),
        nullable=False,
        default=SessionStatus.ACTIVE,
    )
    demo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    last_message_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    archived_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    messages = relationship(
        "AIMessageModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
