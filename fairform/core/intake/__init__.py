"""AI intake schemas, moderation result types and prompts."""

from fairform.core.intake.schemas import (
    IntakeClassification,
    IntakeRequest,
    Jurisdiction,
    ModerationResult,
    ModerationVerdict,
    flatten_validation_error,
)

__all__ = [
    "IntakeClassification",
    "IntakeRequest",
    "Jurisdiction",
    "ModerationResult",
    "ModerationVerdict",
    "flatten_validation_error",
]
