"""
AI intake API endpoints.

Routes:
- POST /ai/intake - Moderate and classify a free-text problem description
- GET /ai/intake - 405, intake is POST only

Dependencies: fairform.application.services.intake_service, fairform.models
System role: Intake HTTP API
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from fairform.api.deps import AuthenticatedUser, get_current_user, get_intake_service
from fairform.application.services.intake_service import IntakeService
from fairform.models.common import ErrorResponse
from fairform.models.intake import IntakeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai/intake", tags=["intake"])


async def _safe_read_json(request: Request) -> Any:
    """Decode the body; anything unreadable becomes None and fails validation."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


@router.post(
    "",
    response_model=IntakeResponse,
    responses={
        202: {"model": IntakeResponse, "description": "Accepted, flagged for review"},
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def submit_intake(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    intake_service: IntakeService = Depends(get_intake_service),
) -> JSONResponse:
    """
    Classify a user's problem description.

    Args:
        request: Raw request; body is {"text": ..., "userTimezone"?: ...}
        user: Authenticated caller
        intake_service: Injected IntakeService

    Returns:
        JSONResponse: 200 with the classification, or 202 when moderation
            asks for human review
    """
    payload = await _safe_read_json(request)
    outcome = await intake_service.process(user.uid, payload)

    body = IntakeResponse(
        data=outcome.data,
        moderation=outcome.moderation,
        requires_review=outcome.requires_review,
    )
    return JSONResponse(
        status_code=202 if outcome.requires_review else 200,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


@router.get("", status_code=405, response_model=ErrorResponse)
async def intake_method_not_allowed() -> JSONResponse:
    """Reject GET."""
    return JSONResponse(
        status_code=405,
        content={
            "error": "MethodNotAllowed",
            "message": "Use POST to invoke the AI intake pipeline.",
        },
    )
