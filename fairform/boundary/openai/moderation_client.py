"""
OpenAI moderation client.

Single POST to the moderation endpoint, reduced to a pass/review/block
verdict. Infrastructure failures raise ModerationError so callers can tell
"moderation is down" apart from "content judged unsafe".

Dependencies: httpx, fairform.core.intake
System role: Content-safety gate for AI intake
"""

import logging
from typing import Any

import httpx

from fairform.core.exceptions import ModerationError
from fairform.core.intake.schemas import ModerationResult, ModerationVerdict

logger = logging.getLogger(__name__)

DEFAULT_MODERATION_MODEL = "omni-moderation-latest"
DEFAULT_MODERATION_ENDPOINT = "https://api.openai.com/v1/moderations"
REVIEW_SCORE_THRESHOLD = 0.5


def _normalize_scores(scores: dict[str, Any]) -> dict[str, float]:
    return {
        key: float(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool)
        else 0.0
        for key, value in scores.items()
    }


def classify_moderation(payload: dict[str, Any]) -> ModerationResult:
    """
    Turn a raw moderation result entry into a verdict.

    block when flagged; review when any category is flagged or any score
    reaches the review threshold; pass otherwise.

    Args:
        payload: One element of the response's "results" list

    Returns:
        ModerationResult: Verdict, flagged categories and scores

    Raises:
        ModerationError: If categories or category_scores is not an object
    """
    categories = payload.get("categories") or {}
    raw_scores = payload.get("category_scores") or {}
    if not isinstance(categories, dict) or not isinstance(raw_scores, dict):
        raise ModerationError("OpenAI moderation response had malformed categories")

    flagged_categories = [name for name, is_flagged in categories.items() if is_flagged]
    category_scores = _normalize_scores(raw_scores)

    if payload.get("flagged"):
        verdict = ModerationVerdict.BLOCK
    elif flagged_categories or any(
        score >= REVIEW_SCORE_THRESHOLD for score in category_scores.values()
    ):
        verdict = ModerationVerdict.REVIEW
    else:
        verdict = ModerationVerdict.PASS

    return ModerationResult(
        verdict=verdict,
        flagged_categories=flagged_categories,
        category_scores=category_scores,
    )


class ModerationClient:
    """Async client for the moderation endpoint."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str | None,
        model: str = DEFAULT_MODERATION_MODEL,
        endpoint: str = DEFAULT_MODERATION_ENDPOINT,
    ) -> None:
        """
        Initialize moderation client.

        Args:
            http_client: Shared async HTTP client (owned by the caller)
            api_key: OpenAI API key; missing key fails at call time
            model: Moderation model name
            endpoint: Full moderation URL
        """
        self._http = http_client
        self._api_key = api_key
        self._model = model
        self._endpoint = endpoint

    async def moderate(self, text: str) -> ModerationResult:
        """
        Moderate text.

        Args:
            text: User-provided text

        Returns:
            ModerationResult: Verdict for the trimmed text

        Raises:
            ModerationError: Missing key, transport failure, non-2xx status,
                unparsable body or empty results
        """
        trimmed = text.strip()
        if not trimmed:
            return ModerationResult(verdict=ModerationVerdict.PASS)

        if not self._api_key:
            raise ModerationError("Missing OpenAI API key")

        try:
            response = await self._http.post(
                self._endpoint,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={"model": self._model, "input": trimmed},
            )
        except httpx.HTTPError as e:
            raise ModerationError(
                "OpenAI moderation request failed",
                {"error_type": type(e).__name__},
            ) from e

        if response.is_error:
            raise ModerationError(
                "OpenAI moderation request failed",
                {"status": response.status_code, "body": _safe_json(response)},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ModerationError("OpenAI moderation response was not JSON") from e

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            raise ModerationError("OpenAI moderation response missing results")

        result = classify_moderation(results[0])
        logger.info(
            f"Moderation verdict: {result.verdict.value}",
            extra={
                "verdict": result.verdict.value,
                "flagged_categories": result.flagged_categories,
            },
        )
        return result


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
