"""
AI session API schemas.

Dependencies: pydantic
System role: Session and message API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from fairform.boundary.db.models.message_model import MessageAuthor
from fairform.core.intake.schemas import CamelModel
from fairform.core.lifecycle.status import SessionStatus


class CreateSessionRequest(CamelModel):
    """Request schema for creating a new AI session."""

    case_id: str | None = Field(default=None, description="Optional linked case")
    title: str = Field(default="New Conversation", min_length=1, max_length=255)
    demo: bool = Field(default=False, description="Demo sandbox session")


class SessionResponse(CamelModel):
    """AI session as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: str
    case_id: str | None
    title: str
    status: SessionStatus
    demo: bool
    summary: str | None = None
    created_at: datetime
    updated_at: datetime
    last_message_at: datetime
    archived_at: datetime | None = None


class CreateSessionResponse(CamelModel):
    """Created session plus its id."""

    session_id: uuid.UUID
    session: SessionResponse


class AppendMessageRequest(CamelModel):
    """Request schema for appending a message."""

    author: MessageAuthor = MessageAuthor.USER
    content: str = Field(min_length=1, max_length=20000)
    meta: dict[str, Any] = Field(default_factory=dict)


class MessageResponse(CamelModel):
    """Message as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    session_id: uuid.UUID
    author: MessageAuthor
    content: str
    meta: dict[str, Any]
    created_at: datetime


class MessagePageResponse(CamelModel):
    """One page of messages."""

    items: list[MessageResponse]
    has_more: bool
    total: int
