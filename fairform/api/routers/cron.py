"""
Cron trigger endpoints.

Routes:
- GET /cron/session-lifecycle - Run one archive/delete cleanup cycle

Called by the scheduler (daily at 02:00 UTC) with
"Authorization: Bearer <CRON_SECRET>".

Dependencies: fairform.application.services.lifecycle_service
System role: Scheduled job HTTP trigger
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from fairform.api.deps import get_lifecycle_job_service, verify_cron_secret
from fairform.application.services.lifecycle_service import LifecycleJobService
from fairform.models.lifecycle import CleanupSummary
from fairform.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["cron"])


@router.get(
    "/session-lifecycle",
    response_model=CleanupSummary,
    dependencies=[Depends(verify_cron_secret)],
)
async def run_session_lifecycle(
    job_service: LifecycleJobService = Depends(get_lifecycle_job_service),
) -> JSONResponse:
    """
    Archive inactive sessions and delete expired archived ones.

    Returns:
        JSONResponse: 200 with the cleanup summary, or 500 with
            {"success": false, "error": "CleanupFailed", ...} if a phase
            could not run
    """
    try:
        summary = await job_service.run()
    except Exception as e:
        log_exception_with_context(logger, "Session lifecycle cleanup failed", e)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "CleanupFailed",
                "message": str(e),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    return JSONResponse(
        status_code=200,
        content=summary.model_dump(mode="json", by_alias=True),
    )
