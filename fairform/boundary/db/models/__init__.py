"""ORM models."""

from fairform.boundary.db.models.intake_log_model import IntakeLogModel
from fairform.boundary.db.models.message_model import AIMessageModel, MessageAuthor
from fairform.boundary.db.models.session_model import AISessionModel

__all__ = ["AIMessageModel", "AISessionModel", "IntakeLogModel", "MessageAuthor"]
