"""Application services."""

from fairform.application.services.intake_audit import IntakeAuditWriter
from fairform.application.services.intake_service import IntakeOutcome, IntakeService
from fairform.application.services.lifecycle_service import LifecycleJobService
from fairform.application.services.session_service import SessionService

__all__ = [
    "IntakeAuditWriter",
    "IntakeOutcome",
    "IntakeService",
    "LifecycleJobService",
    "SessionService",
]
