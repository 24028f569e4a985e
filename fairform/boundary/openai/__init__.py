"""OpenAI boundary clients: moderation and intake classification."""

from fairform.boundary.openai.classification_client import (
    IntakeClassifier,
    build_intake_chat_model,
)
from fairform.boundary.openai.moderation_client import ModerationClient, classify_moderation

__all__ = [
    "IntakeClassifier",
    "ModerationClient",
    "build_intake_chat_model",
    "classify_moderation",
]
