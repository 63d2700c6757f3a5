"""Submission pipeline and batch orchestration."""

from skillmatch.orchestration.batch_executor import BatchEvaluator, BatchItem, BatchResult
from skillmatch.orchestration.pipeline import SubmissionEvaluationPipeline, SubmissionOutcome

__all__ = [
    "BatchEvaluator",
    "BatchItem",
    "BatchResult",
    "SubmissionEvaluationPipeline",
    "SubmissionOutcome",
]
