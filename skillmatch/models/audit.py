"""Audit trail records for submission runs."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from skillmatch.models.evaluation import TokenUsage

AuditStage = Literal["transcription", "validation", "evaluation"]


class AuditEntry(BaseModel):
    """One line of a submission's audit trail.

    Only the fields relevant to the stage are set; failures carry
    ``error_type`` and ``error_message`` instead of results.
    """

    timestamp: str
    run_id: str
    sequence: int
    stage: AuditStage

    video_url: Optional[str] = None
    transcript_chars: Optional[int] = None

    is_valid: Optional[bool] = None
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    plagiarism_score: Optional[float] = None
    validation_confidence: Optional[float] = None

    requested_model: Optional[str] = None
    model_used: Optional[str] = None
    overall_score: Optional[int] = None
    cost_usd: Optional[float] = None
    tokens: Optional[TokenUsage] = None

    error_type: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error_type is not None
