"""
Intake API schemas.

Dependencies: pydantic, fairform.core.intake
System role: Intake endpoint response contract
"""

from pydantic import Field

from fairform.core.intake.schemas import CamelModel, IntakeClassification, ModerationResult


class IntakeResponse(CamelModel):
    """Successful intake classification."""

    data: IntakeClassification
    moderation: ModerationResult
    requires_review: bool = Field(description="True when moderation verdict was review")
