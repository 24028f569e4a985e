"""
AI session API endpoints.

Routes:
- POST /ai/sessions - Create session
- GET /ai/sessions - List caller's sessions
- GET /ai/sessions/{id} - Get session
- GET /ai/sessions/{id}/messages - Page through messages
- POST /ai/sessions/{id}/messages - Append message

All routes require a bearer token; sessions are visible to their owner only.

Dependencies: fairform.application.services.session_service, fairform.models
System role: Session management HTTP API
"""

import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from fairform.api.deps import AuthenticatedUser, get_current_user, get_session_service
from fairform.application.services.session_service import SessionService
from fairform.models.session import (
    AppendMessageRequest,
    CreateSessionRequest,
    CreateSessionResponse,
    MessagePageResponse,
    MessageResponse,
    SessionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai/sessions", tags=["sessions"])


@router.post("", response_model=CreateSessionResponse)
async def create_session(
    request: CreateSessionRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    session_service: SessionService = Depends(get_session_service),
) -> CreateSessionResponse:
    """
    Create new session for the caller.

    Args:
        request: CreateSessionRequest
        user: Authenticated caller
        session_service: Injected SessionService

    Returns:
        CreateSessionResponse: Session id plus the created session
    """
    session = await session_service.create_session(
        user_id=user.uid,
        case_id=request.case_id,
        title=request.title,
        demo=request.demo,
    )
    return CreateSessionResponse(
        session_id=session.id,
        session=SessionResponse.model_validate(session),
    )


@router.get("", response_model=list[SessionResponse])
async def list_sessions(
    user: AuthenticatedUser = Depends(get_current_user),
    session_service: SessionService = Depends(get_session_service),
) -> list[SessionResponse]:
    """List the caller's sessions, most recently active first."""
    sessions = await session_service.list_user_sessions(user.uid)
    return [SessionResponse.model_validate(s) for s in sessions]


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Get one session.

    Raises:
        SessionNotFoundError: 404
        ForbiddenError: 403, owned by another user
    """
    session = await session_service.get_owned_session(session_id, user.uid)
    return SessionResponse.model_validate(session)


@router.get("/{session_id}/messages", response_model=MessagePageResponse)
async def list_messages(
    session_id: UUID,
    limit: int = Query(default=20, ge=1, le=100),
    after: datetime | None = Query(default=None, description="Cursor: createdAt of last seen message"),
    user: AuthenticatedUser = Depends(get_current_user),
    session_service: SessionService = Depends(get_session_service),
) -> MessagePageResponse:
    """Page through a session's messages, oldest first."""
    messages, has_more = await session_service.list_messages(
        session_id,
        user.uid,
        limit=limit,
        after=after,
    )
    items = [MessageResponse.model_validate(m) for m in messages]
    return MessagePageResponse(items=items, has_more=has_more, total=len(items))


@router.post("/{session_id}/messages", response_model=MessageResponse, status_code=201)
async def append_message(
    session_id: UUID,
    request: AppendMessageRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    session_service: SessionService = Depends(get_session_service),
) -> MessageResponse:
    """
    Append a message to an active session.

    Raises:
        SessionArchivedError: 409, session is read-only
    """
    message = await session_service.append_message(
        session_id,
        user.uid,
        author=request.author,
        content=request.content,
        meta=request.meta,
    )
    return MessageResponse.model_validate(message)
