"""Evaluate many submissions for one challenge and rank them."""

import asyncio
import time
from typing import Any, Optional

from loguru import logger
from pydantic import BaseModel, Field

from skillmatch.infrastructure.cost_tracker import CostTracker
from skillmatch.models.challenge import Challenge
from skillmatch.models.validation import SubmissionContent
from skillmatch.orchestration.pipeline import SubmissionEvaluationPipeline, SubmissionOutcome


class BatchItem(BaseModel):
    """One submission queued for batch evaluation."""

    submission_id: str
    submission: SubmissionContent


class BatchResult(BaseModel):
    """Result of batch evaluation."""

    total: int
    succeeded: int
    failed: int
    ranking: list[SubmissionOutcome]
    rejected: list[SubmissionOutcome] = Field(default_factory=list)
    errors: list[dict[str, Any]] = Field(default_factory=list)
    winner_id: Optional[str] = None
    total_cost: float = 0.0
    elapsed_seconds: float


class BatchEvaluator:
    """Runs the submission pipeline over many submissions concurrently."""

    def __init__(self, pipeline: SubmissionEvaluationPipeline, max_concurrent: int = 5) -> None:
        """Initialize batch evaluator.

        Args:
            pipeline: Pipeline used for every submission
            max_concurrent: Maximum number of submissions in flight
        """
        self.pipeline = pipeline
        self.max_concurrent = max_concurrent
        self.semaphore = asyncio.Semaphore(max_concurrent)

    async def run_one(self, challenge: Challenge, item: BatchItem) -> SubmissionOutcome:
        async with self.semaphore:
            logger.info(f"Starting submission {item.submission_id}")
            outcome = await self.pipeline.process(challenge, item.submission, item.submission_id)
            logger.info(f"Completed submission {item.submission_id}: {outcome.status}, score={outcome.score}")
            return outcome

    async def run_batch(self, challenge: Challenge, items: list[BatchItem]) -> BatchResult:
        """Evaluate all submissions, collecting failures instead of aborting.

        Evaluated submissions are ranked by score, highest first; ties keep
        input order. For prize challenges the top-ranked submission is marked
        as the winner.

        Args:
            challenge: Challenge all submissions answer
            items: Submissions to evaluate

        Returns:
            BatchResult with ranking, rejections, errors and total cost
        """
        start_time = time.monotonic()
        total = len(items)
        logger.info(f"Starting batch evaluation: {total} submissions, max_concurrent={self.max_concurrent}")

        raw_results = await asyncio.gather(
            *(self.run_one(challenge, item) for item in items),
            return_exceptions=True,
        )

        evaluated: list[SubmissionOutcome] = []
        rejected: list[SubmissionOutcome] = []
        errors: list[dict[str, Any]] = []
        tracker = CostTracker()

        for item, result in zip(items, raw_results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                errors.append(
                    {
                        "submission_id": item.submission_id,
                        "error_type": type(result).__name__,
                        "error_message": str(result),
                    }
                )
                logger.error(f"Submission {item.submission_id} failed: {result}")
            elif result.status == "rejected":
                rejected.append(result)
            else:
                tracker.add_result(result.evaluation)
                evaluated.append(result)

        ranking = sorted(evaluated, key=lambda outcome: outcome.score, reverse=True)
        winner_id = None
        if challenge.challenge_type == "prize" and ranking:
            ranking[0] = ranking[0].model_copy(update={"is_winner": True})
            winner_id = ranking[0].submission_id
            logger.info(f"Prize winner: {winner_id} with score {ranking[0].score}")

        elapsed = time.monotonic() - start_time
        batch_result = BatchResult(
            total=total,
            succeeded=len(evaluated) + len(rejected),
            failed=len(errors),
            ranking=ranking,
            rejected=rejected,
            errors=errors,
            winner_id=winner_id,
            total_cost=tracker.total_cost(),
            elapsed_seconds=elapsed,
        )
        logger.info(
            f"Batch evaluation complete: {batch_result.succeeded}/{total} processed, "
            f"total_cost=${batch_result.total_cost:.4f}, elapsed={elapsed:.2f}s"
        )
        return batch_result
