"""
Intake pipeline schemas.

Request shape, the strict classification contract the chat model must
satisfy, and the moderation result. Field names serialize as camelCase to
match the public JSON contract.

Dependencies: pydantic
System role: Validation layer for caller input and model output
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

MIN_INTAKE_TEXT_LENGTH = 20


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IntakeRequest(CamelModel):
    """Caller input for the intake endpoint."""

    text: str = Field(description="Free-text description of the legal issue")
    user_timezone: str | None = Field(default=None, description="IANA timezone of the user")

    @field_validator("text")
    @classmethod
    def text_must_be_descriptive(cls, value: str) -> str:
        if len(value) < MIN_INTAKE_TEXT_LENGTH:
            raise ValueError("Tell us a bit more about your issue so we can help")
        return value


class Jurisdiction(CamelModel):
    """Where the matter would be heard, when known."""

    state: str | None = Field(default=None, min_length=2, max_length=50)
    county: str | None = Field(default=None, min_length=2, max_length=70)
    court_level: str | None = Field(default=None, min_length=2, max_length=70)


class IntakeClassification(CamelModel):
    """Structured classification returned by the intake model."""

    summary: str = Field(min_length=10, max_length=500)
    primary_issue: str = Field(min_length=3, max_length=120)
    case_type: str = Field(min_length=3, max_length=120)
    jurisdiction: Jurisdiction
    confidence: float = Field(ge=0.0, le=1.0, strict=True)
    risk_level: Literal["low", "medium", "high"]
    recommended_next_steps: list[str] = Field(min_length=1, max_length=5)
    disclaimers: list[str] = Field(min_length=1, max_length=3)

    @field_validator("recommended_next_steps")
    @classmethod
    def steps_are_meaningful(cls, value: list[str]) -> list[str]:
        if any(len(step) < 3 for step in value):
            raise ValueError("each next step must be at least 3 characters")
        return value

    @field_validator("disclaimers")
    @classmethod
    def disclaimers_are_meaningful(cls, value: list[str]) -> list[str]:
        if any(len(item) < 5 for item in value):
            raise ValueError("each disclaimer must be at least 5 characters")
        return value


class ModerationVerdict(str, Enum):
    """Moderation outcome classification."""

    PASS = "pass"
    REVIEW = "review"
    BLOCK = "block"


class ModerationResult(CamelModel):
    """Verdict plus the category evidence behind it."""

    verdict: ModerationVerdict
    flagged_categories: list[str] = Field(default_factory=list)
    category_scores: dict[str, float] = Field(default_factory=dict)

    def summary(self) -> dict:
        """Redacted form stored in audit logs."""
        return {
            "verdict": self.verdict.value,
            "flaggedCategories": list(self.flagged_categories),
        }


def flatten_validation_error(exc: ValidationError) -> dict:
    """
    Flatten a pydantic error into form-level and per-field messages.

    Args:
        exc: Pydantic validation error

    Returns:
        dict: {"formErrors": [...], "fieldErrors": {field: [...]}}
    """
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        message = error.get("msg", "Invalid value")
        if not loc:
            form_errors.append(message)
            continue
        field_errors.setdefault(str(loc[0]), []).append(message)
    return {"formErrors": form_errors, "fieldErrors": field_errors}
