"""Coerce loosely structured model output into a fixed scoring shape.

Two layers:

- ``extract_json_object`` is the only place that tolerates markdown fences and
  surrounding prose. It returns a ``JsonExtraction`` value instead of raising.
- ``parse_evaluation_response`` turns an extraction into a ``ScoreBreakdown``.
  It is total: any input string yields a valid breakdown, falling back to a
  fixed neutral result.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Any

from loguru import logger

from skillmatch.models.evaluation import ScoreBreakdown

_FENCE_PATTERN = re.compile(r"```(?:json)?\n?")
_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

MAX_LIST_ITEMS = 5
DEFAULT_FEEDBACK = "Evaluation completed"
NEUTRAL_SCORE = 50


@dataclass(frozen=True)
class JsonExtraction:
    """Outcome of a best-effort JSON object extraction.

    Attributes:
        data: Parsed object when extraction succeeded.
        failure: Reason extraction failed, if it did.
    """

    data: dict[str, Any] | None = None
    failure: str | None = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def extract_json_object(text: str | None) -> JsonExtraction:
    """Find and parse the JSON object embedded in a model response.

    Strips code fences, keeps the greedy first-``{`` to last-``}`` span when
    one exists, and requires the parsed value to be an object.

    Args:
        text: Raw model response

    Returns:
        JsonExtraction with either ``data`` or ``failure`` set
    """
    if not text:
        return JsonExtraction(failure="empty response")

    cleaned = _FENCE_PATTERN.sub("", text).strip()
    match = _OBJECT_PATTERN.search(cleaned)
    if match:
        cleaned = match.group(0)

    try:
        parsed = json.loads(cleaned)
    except (json.JSONDecodeError, ValueError, RecursionError) as e:
        return JsonExtraction(failure=f"invalid JSON: {e}")

    if not isinstance(parsed, dict):
        return JsonExtraction(failure=f"expected JSON object, got {type(parsed).__name__}")

    return JsonExtraction(data=parsed)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round and clamp a score into [0, 100]."""
    return max(0, min(100, round_half_up(value)))


def coerce_number(value: Any) -> float | None:
    """Interpret a JSON value as a finite number.

    Returns None for missing values. Raises ValueError for values that are
    present but not numeric (booleans included).
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"boolean is not a score: {value!r}")
    try:
        number = float(value)
    except OverflowError as e:
        raise ValueError(f"score out of range: {e}") from e
    if not math.isfinite(number):
        raise ValueError(f"non-finite score: {value!r}")
    return number


def _coerce_string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None][:MAX_LIST_ITEMS]


def neutral_breakdown() -> ScoreBreakdown:
    """Fixed result used whenever a response cannot be interpreted."""
    return ScoreBreakdown(
        technical_score=NEUTRAL_SCORE,
        clarity_score=NEUTRAL_SCORE,
        communication_score=NEUTRAL_SCORE,
        overall_score=NEUTRAL_SCORE,
        feedback=(
            "The automated evaluation response could not be fully interpreted. "
            "Scores are neutral placeholders; a manual review is recommended."
        ),
        strengths=["Submission received and partially evaluated"],
        improvements=["Detailed feedback unavailable; request a manual review"],
    )


def breakdown_from_payload(data: dict[str, Any]) -> ScoreBreakdown:
    """Build a breakdown from an already-extracted JSON object.

    Raises:
        ValueError: If a score field holds a non-numeric value
    """
    technical = clamp_score(coerce_number(data.get("technicalScore")) or 0)
    clarity = clamp_score(coerce_number(data.get("clarityScore")) or 0)
    communication = clamp_score(coerce_number(data.get("communicationScore")) or 0)

    provided_overall = coerce_number(data.get("overallScore"))
    if provided_overall is not None:
        overall = clamp_score(provided_overall)
    else:
        overall = round_half_up((technical + clarity + communication) / 3)

    feedback = data.get("feedback")
    if not isinstance(feedback, str) or not feedback.strip():
        feedback = DEFAULT_FEEDBACK

    return ScoreBreakdown(
        technical_score=technical,
        clarity_score=clarity,
        communication_score=communication,
        overall_score=overall,
        feedback=feedback,
        strengths=_coerce_string_list(data.get("strengths")),
        improvements=_coerce_string_list(data.get("improvements")),
    )


def parse_evaluation_response(raw: str | None) -> ScoreBreakdown:
    """Normalize any provider response into a ScoreBreakdown. Never raises.

    Args:
        raw: Raw text returned by a provider

    Returns:
        Parsed breakdown, or the neutral breakdown when parsing fails
    """
    extraction = extract_json_object(raw)
    if not extraction.ok:
        logger.warning(f"Falling back to neutral evaluation: {extraction.failure}")
        logger.debug(f"Unparseable response: {(raw or '')[:200]}")
        return neutral_breakdown()

    try:
        return breakdown_from_payload(extraction.data or {})
    except (TypeError, ValueError) as e:
        logger.warning(f"Falling back to neutral evaluation: unexpected shape ({e})")
        return neutral_breakdown()
