"""Evaluation request and result models."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TokenUsage(BaseModel):
    """Token usage statistics."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class EvaluationRequest(BaseModel):
    """Everything a provider needs to score one submission."""

    model_config = ConfigDict(frozen=True)

    challenge_title: str
    challenge_description: str
    difficulty: str
    category: str
    tags: list[str] = Field(default_factory=list)
    submission_content: str
    video_transcript: Optional[str] = None
    selected_model: str

    @field_validator("selected_model", mode="before")
    @classmethod
    def _model_id_value(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value


class ScoreBreakdown(BaseModel):
    """Normalized scoring payload produced from raw model output."""

    technical_score: int = Field(ge=0, le=100)
    clarity_score: int = Field(ge=0, le=100)
    communication_score: int = Field(ge=0, le=100)
    overall_score: int = Field(ge=0, le=100)
    feedback: str
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)


class EvaluationResult(ScoreBreakdown):
    """Scores plus the model that actually produced them and what it cost."""

    model_config = ConfigDict(protected_namespaces=())

    model_used: str
    cost_incurred: float = Field(ge=0.0, default=0.0)
    token_usage: TokenUsage = Field(default_factory=TokenUsage)
