"""Model-assisted plagiarism heuristic."""

from __future__ import annotations

from typing import Any

from skillmatch.evaluation.normalizer import coerce_number
from skillmatch.models.validation import PlagiarismAssessment
from skillmatch.validation.base import ModelAssistedCheck, coerce_bool


class PlagiarismCheck(ModelAssistedCheck[PlagiarismAssessment]):
    """Estimate how likely submission text was copied."""

    system_prompt = (
        "You are a plagiarism detection expert for coding challenges. "
        "You respond in structured JSON format."
    )

    @property
    def name(self) -> str:
        return "plagiarism"

    def build_prompt(self, content: str, category: str) -> str:
        return f"""You are a plagiarism detection expert for coding challenges.

**Challenge Category:** {category}

**Submission Content:**
{self.truncate(content)}

**Task:**
Analyze this submission for signs of plagiarism or copying:
- Is it too generic/boilerplate?
- Does it look like a copy-paste from tutorials?
- Is it suspiciously polished for a quick challenge?
- Does it contain obvious copied comments/variable names?
- Are there signs of AI-generated code (too perfect, unusual patterns)?

Score from 0-100:
- 0-30: Original work
- 31-60: Some borrowed concepts (acceptable)
- 61-80: Likely copied with modifications
- 81-100: Definitely plagiarized

Respond ONLY with JSON:
{{
  "plagiarismScore": 0-100,
  "isSuspicious": true/false,
  "details": "Brief explanation of findings"
}}"""

    def parse_response(self, data: dict[str, Any]) -> PlagiarismAssessment:
        score = coerce_number(data.get("plagiarismScore")) or 0
        details = data.get("details")
        return PlagiarismAssessment(
            plagiarism_score=max(0.0, min(100.0, score)),
            is_suspicious=coerce_bool(data.get("isSuspicious", False)),
            details=details if isinstance(details, str) and details else "Analysis completed",
        )

    def neutral_default(self) -> PlagiarismAssessment:
        return PlagiarismAssessment(
            plagiarism_score=0,
            is_suspicious=False,
            details="Could not perform plagiarism check",
        )

    async def check(self, content: str, category: str) -> PlagiarismAssessment:
        """Assess submission text. Never raises."""
        return await self.assess(content, category)
