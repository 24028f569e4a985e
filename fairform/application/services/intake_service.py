"""
Intake classification service.

Pipeline per request: validate -> moderate -> classify -> schema-check ->
audit -> respond. A block verdict stops before the model is called; a reply
that fails the schema is treated as an upstream contract violation and is
never audited.

Dependencies: pydantic, fairform.boundary.openai, fairform.core.intake
System role: AI intake use case orchestration
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from fairform.core.exceptions import ContentBlockedError, SchemaMismatchError, ValidationError
from fairform.core.intake.schemas import (
    IntakeClassification,
    IntakeRequest,
    ModerationResult,
    ModerationVerdict,
    flatten_validation_error,
)
from fairform.observability.log_utils import hash_text

logger = logging.getLogger(__name__)


class Moderator(Protocol):
    async def moderate(self, text: str) -> ModerationResult: ...


class Classifier(Protocol):
    async def classify(self, request: IntakeRequest) -> Any: ...


class AuditWriter(Protocol):
    async def record(
        self,
        user_id: str,
        original_input: str,
        classification: IntakeClassification,
        moderation: ModerationResult,
    ) -> None: ...


@dataclass
class IntakeOutcome:
    """Result of a successful intake run."""

    data: IntakeClassification
    moderation: ModerationResult

    @property
    def requires_review(self) -> bool:
        return self.moderation.verdict == ModerationVerdict.REVIEW


class IntakeService:
    """Orchestrates the AI intake pipeline."""

    def __init__(
        self,
        moderator: Moderator,
        classifier: Classifier,
        audit_writer: AuditWriter,
    ) -> None:
        """
        Initialize intake service.

        Args:
            moderator: Moderation client
            classifier: Intake classifier
            audit_writer: Redacted audit log writer
        """
        self._moderator = moderator
        self._classifier = classifier
        self._audit_writer = audit_writer

    @staticmethod
    def validate_request(payload: Any) -> IntakeRequest:
        """
        Validate raw request JSON.

        Raises:
            ValidationError: Malformed body or text under 20 characters
        """
        try:
            return IntakeRequest.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid intake request.",
                details=flatten_validation_error(e),
            ) from e

    async def process(self, user_id: str, payload: Any) -> IntakeOutcome:
        """
        Run the full intake pipeline.

        Args:
            user_id: Authenticated user id
            payload: Raw decoded request body

        Returns:
            IntakeOutcome: Validated classification and moderation result

        Raises:
            ValidationError: Request failed validation (no network call made)
            ModerationError: Moderation infrastructure failure
            ContentBlockedError: Moderation verdict was block
            UpstreamError, UnexpectedResponseError: Classification call failed
            SchemaMismatchError: Model reply failed the classification schema
        """
        request = self.validate_request(payload)
        input_hash = hash_text(request.text)

        moderation = await self._moderator.moderate(request.text)
        if moderation.verdict == ModerationVerdict.BLOCK:
            logger.warning(
                "Intake content blocked by moderation",
                extra={
                    "user_id": user_id,
                    "input_hash": input_hash,
                    "flagged_categories": moderation.flagged_categories,
                },
            )
            raise ContentBlockedError(moderation)

        raw = await self._classifier.classify(request)

        try:
            classification = IntakeClassification.model_validate(raw)
        except PydanticValidationError as e:
            logger.error(
                "Intake classification failed schema validation",
                extra={"user_id": user_id, "input_hash": input_hash, "error_count": e.error_count()},
            )
            raise SchemaMismatchError(
                "AI response did not match the expected schema.",
                details=flatten_validation_error(e),
            ) from e

        await self._audit_writer.record(
            user_id=user_id,
            original_input=request.text,
            classification=classification,
            moderation=moderation,
        )

        logger.info(
            "Intake classified",
            extra={
                "user_id": user_id,
                "input_hash": input_hash,
                "verdict": moderation.verdict.value,
                "risk_level": classification.risk_level,
            },
        )
        return IntakeOutcome(data=classification, moderation=moderation)
