"""Model-assisted check that a video transcript explains the challenge."""

from __future__ import annotations

from typing import Any

from skillmatch.evaluation.normalizer import coerce_number
from skillmatch.infrastructure.llm_client import LLMClient
from skillmatch.models.config import ValidationThresholds
from skillmatch.models.validation import ChallengeContext, VideoRelevance
from skillmatch.validation.base import DEFAULT_MAX_PROMPT_CHARS, ModelAssistedCheck, coerce_bool

MIN_TRANSCRIPT_CHARS = ValidationThresholds().min_transcript_chars


class VideoRelevanceCheck(ModelAssistedCheck[VideoRelevance]):
    """Judge whether a transcript plausibly explains a solution to the challenge."""

    system_prompt = "You are a content validation expert. You respond in structured JSON format."

    def __init__(
        self,
        llm_client: LLMClient,
        max_prompt_chars: int = DEFAULT_MAX_PROMPT_CHARS,
        min_transcript_chars: int = MIN_TRANSCRIPT_CHARS,
    ) -> None:
        super().__init__(llm_client, max_prompt_chars)
        self.min_transcript_chars = min_transcript_chars

    @property
    def name(self) -> str:
        return "video_relevance"

    def build_prompt(self, transcript: str, challenge: ChallengeContext) -> str:
        return f"""You are a content validation expert.

**Challenge:**
Title: {challenge.title}
Description: {challenge.description}

**Video Transcript:**
{self.truncate(transcript)}

**Task:**
Determine if this video is genuinely explaining the solution to this challenge, or if it is:
- Unrelated content
- Generic/placeholder content
- AI-generated nonsense
- An explanation of a different challenge

Respond ONLY with this JSON format:
{{
  "isRelevant": true/false,
  "confidence": 0-100,
  "reason": "Brief explanation"
}}"""

    def parse_response(self, data: dict[str, Any]) -> VideoRelevance:
        confidence = coerce_number(data.get("confidence")) or 0
        reason = data.get("reason")
        return VideoRelevance(
            is_relevant=coerce_bool(data.get("isRelevant", False)),
            confidence=max(0.0, min(100.0, confidence)),
            reason=reason if isinstance(reason, str) and reason else "Could not determine relevance",
        )

    def neutral_default(self) -> VideoRelevance:
        return VideoRelevance(
            is_relevant=True,
            confidence=50,
            reason="Could not validate video content",
        )

    async def check(self, transcript: str | None, challenge: ChallengeContext) -> VideoRelevance:
        """Judge a transcript. Too-short transcripts are not sent to the model.

        Args:
            transcript: Video transcript (may be empty)
            challenge: Challenge being answered

        Returns:
            VideoRelevance; never raises
        """
        if not transcript or len(transcript) < self.min_transcript_chars:
            return VideoRelevance(
                is_relevant=False,
                confidence=0,
                reason="Video transcript is too short or empty",
            )
        return await self.assess(transcript, challenge)
