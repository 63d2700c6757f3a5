"""Submission validation models."""

from typing import Optional

from pydantic import BaseModel, Field

from skillmatch.models.config import ValidationThresholds


class SubmissionContent(BaseModel):
    """Candidate-provided content to validate."""

    link_url: Optional[str] = None
    text_content: Optional[str] = None
    video_transcript: Optional[str] = None
    video_url: Optional[str] = None
    file_urls: list[str] = Field(default_factory=list)


class ChallengeContext(BaseModel):
    """Challenge fields the validation checks need."""

    title: str
    description: str
    category: str


class RepositoryMetadata(BaseModel):
    """Subset of repository metadata returned by the hosting API."""

    name: str
    description: Optional[str] = None
    stars: int = 0
    forks: int = 0
    size: int = 0
    language: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    has_issues: bool = False
    is_private: bool = False
    is_fork: bool = False


class RepositoryCheck(BaseModel):
    """Outcome of the repository link sanity check."""

    is_valid: bool
    message: str
    warnings: list[str] = Field(default_factory=list)
    repo: Optional[RepositoryMetadata] = None


class VideoRelevance(BaseModel):
    """Model judgment of whether a transcript explains the challenge."""

    is_relevant: bool
    confidence: float = Field(ge=0, le=100)
    reason: str


class PlagiarismAssessment(BaseModel):
    """Model judgment of how likely a submission is copied."""

    plagiarism_score: float = Field(ge=0, le=100)
    is_suspicious: bool
    details: str


class ValidationResult(BaseModel):
    """Aggregated verdict of all validation checks."""

    is_valid: bool
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    plagiarism_score: float = Field(ge=0, le=100, default=0)
    confidence: float = Field(ge=0, le=100)

    @classmethod
    def from_findings(
        cls,
        issues: list[str],
        warnings: list[str],
        plagiarism_score: float = 0,
        thresholds: ValidationThresholds | None = None,
    ) -> "ValidationResult":
        """Build a result whose validity and confidence follow from the findings.

        Validity is exactly "no issues". Confidence starts from the baseline and
        loses a fixed penalty per warning, or drops to the issue floor when any
        issue exists.

        Args:
            issues: Blocking findings
            warnings: Advisory findings
            plagiarism_score: Raw score from the plagiarism check
            thresholds: Confidence constants (defaults when omitted)

        Returns:
            ValidationResult
        """
        thresholds = thresholds or ValidationThresholds()
        if issues:
            confidence = thresholds.issue_confidence
        else:
            confidence = thresholds.confidence_baseline - len(warnings) * thresholds.warning_penalty

        return cls(
            is_valid=not issues,
            issues=list(issues),
            warnings=list(warnings),
            plagiarism_score=plagiarism_score,
            confidence=max(0.0, min(100.0, confidence)),
        )
