"""
Intake classification client.

Calls the chat model in JSON mode with the intake prompt and returns the
parsed (not yet schema-validated) JSON object.

Dependencies: langchain_openai, langchain_core, openai
System role: Upstream LLM call for intake classification
"""

import json
import logging
from typing import Any

import openai
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI

from fairform.configs.openai import OpenAISettings
from fairform.core.exceptions import UnexpectedResponseError, UpstreamError
from fairform.core.intake.prompts import INTAKE_PROMPT, build_intake_user_prompt
from fairform.core.intake.schemas import IntakeRequest

logger = logging.getLogger(__name__)


def build_intake_chat_model(settings: OpenAISettings) -> Runnable:
    """
    Construct the JSON-mode chat model for intake classification.

    Retries are disabled; a failed call surfaces as UpstreamError.

    Args:
        settings: OpenAI settings

    Returns:
        Runnable: ChatOpenAI bound to json_object response format
    """
    model = ChatOpenAI(
        model=settings.intake_model,
        temperature=settings.intake_temperature,
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout_seconds,
        max_retries=0,
    )
    return model.bind(response_format={"type": "json_object"})


class IntakeClassifier:
    """Runs the intake prompt against a chat model."""

    def __init__(self, model: Runnable) -> None:
        """
        Initialize classifier.

        Args:
            model: Chat model runnable (see build_intake_chat_model)
        """
        self._chain = INTAKE_PROMPT | model

    async def classify(self, request: IntakeRequest) -> Any:
        """
        Ask the model to classify an intake request.

        Args:
            request: Validated intake request

        Returns:
            Any: Decoded JSON reply, to be checked against IntakeClassification

        Raises:
            UpstreamError: Transport or HTTP failure from the provider
            UnexpectedResponseError: Empty content or content that is not JSON
        """
        try:
            message = await self._chain.ainvoke(
                {"user_prompt": build_intake_user_prompt(request)}
            )
        except openai.APIStatusError as e:
            raise UpstreamError(
                "Intake classification request failed",
                {"status": e.status_code, "body": e.body},
            ) from e
        except openai.APIError as e:
            raise UpstreamError(
                "Intake classification request failed",
                {"error_type": type(e).__name__},
            ) from e

        content = message.content if isinstance(message.content, str) else ""
        if not content.strip():
            raise UnexpectedResponseError("AI response missing content.")

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning(
                "Intake model returned non-JSON content",
                extra={"content_length": len(content)},
            )
            raise UnexpectedResponseError("Failed to parse AI JSON response.") from e
