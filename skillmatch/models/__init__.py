"""Data models for the evaluation core."""

from skillmatch.models.audit import AuditEntry
from skillmatch.models.catalog import (
    AI_MODELS,
    DEFAULT_MODEL,
    FALLBACK_MODEL,
    PRICING_TIERS,
    AIModel,
    ModelConfig,
    PricingTier,
    Provider,
    TierConfig,
    get_model_config,
    get_tier_config,
)
from skillmatch.models.challenge import Challenge, IdealSolution
from skillmatch.models.config import Settings, ValidationThresholds
from skillmatch.models.evaluation import (
    EvaluationRequest,
    EvaluationResult,
    ScoreBreakdown,
    TokenUsage,
)
from skillmatch.models.validation import (
    ChallengeContext,
    PlagiarismAssessment,
    RepositoryCheck,
    RepositoryMetadata,
    SubmissionContent,
    ValidationResult,
    VideoRelevance,
)

__all__ = [
    "AI_MODELS",
    "AIModel",
    "AuditEntry",
    "Challenge",
    "ChallengeContext",
    "DEFAULT_MODEL",
    "EvaluationRequest",
    "EvaluationResult",
    "FALLBACK_MODEL",
    "IdealSolution",
    "ModelConfig",
    "PRICING_TIERS",
    "PlagiarismAssessment",
    "PricingTier",
    "Provider",
    "RepositoryCheck",
    "RepositoryMetadata",
    "ScoreBreakdown",
    "Settings",
    "SubmissionContent",
    "TierConfig",
    "TokenUsage",
    "ValidationResult",
    "ValidationThresholds",
    "VideoRelevance",
    "get_model_config",
    "get_tier_config",
]
