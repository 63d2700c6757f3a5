"""Infrastructure services for the evaluation core."""

from skillmatch.infrastructure.audit_logger import EvaluationAuditLog
from skillmatch.infrastructure.cost_tracker import CostTracker
from skillmatch.infrastructure.llm_client import LLMClient

__all__ = [
    "CostTracker",
    "EvaluationAuditLog",
    "LLMClient",
]
