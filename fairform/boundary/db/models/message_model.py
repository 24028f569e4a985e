"""
AI message ORM model.

Dependencies: sqlalchemy, fairform.boundary.db.base
System role: Message persistence scoped to an AI session
"""

import enum
from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fairform.boundary.db.base import Base, UUIDMixin, utcnow


class MessageAuthor(str, enum.Enum):
    """Who wrote a message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class AIMessageModel(Base, UUIDMixin):
    """
    Message within an AI session.

    Attributes:
        session_id: Parent session (cascade delete)
        author: MessageAuthor enum
        content: Message text
        meta: Processing metadata (tokens, latency, model)
        created_at: Creation timestamp, used as pagination cursor
    """

    __tablename__ = "ai_messages"

    session_id: Mapped[UUID] = mapped_column(
        ForeignKey("ai_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author: Mapped[MessageAuthor] = mapped_column(
        Enum(MessageAuthor, native_enum=False),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    meta: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    session = relationship("AISessionModel", back_populates="messages")
