"""Submission pipeline: validate, evaluate, adjust for plagiarism."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Literal, Optional
from uuid import uuid4

from loguru import logger
from pydantic import BaseModel

from skillmatch.evaluation.normalizer import clamp_score, round_half_up
from skillmatch.evaluation.pricing import get_model_for_challenge
from skillmatch.evaluation.router import ModelRouter
from skillmatch.infrastructure.audit_logger import EvaluationAuditLog
from skillmatch.models.challenge import Challenge
from skillmatch.models.evaluation import EvaluationRequest, EvaluationResult
from skillmatch.models.validation import SubmissionContent, ValidationResult
from skillmatch.validation.transcription import VideoTranscriber
from skillmatch.validation.validator import SubmissionValidator

PLAGIARISM_PENALTY_THRESHOLD = 60
PLAGIARISM_IMPROVEMENT = "Submission shows signs of plagiarism. Ensure all work is original."
RESUBMIT_IMPROVEMENT = "Address validation issues and resubmit"
REJECTED_MODEL = "validation"


class SubmissionOutcome(BaseModel):
    """Final state of one processed submission."""

    run_id: str
    submission_id: Optional[str] = None
    status: Literal["evaluated", "rejected"]
    score: int
    evaluation: EvaluationResult
    validation: ValidationResult
    is_winner: bool = False


def build_submission_content(
    submission: SubmissionContent,
    challenge: Challenge,
    plagiarism_score: float = 0,
) -> str:
    """Assemble the text the scoring model sees for a submission."""
    content = ""
    if submission.link_url:
        content = f"GitHub/Project Link: {submission.link_url}"
    if submission.text_content:
        content += f"\n\nCandidate's Explanation:\n{submission.text_content}"
    if submission.file_urls:
        content += f"\n\nFile URLs: {', '.join(submission.file_urls)}"
    if plagiarism_score > 0:
        content += f"\n\n**Note:** Plagiarism check score: {plagiarism_score:g}% (for context)"

    if challenge.ideal_solution:
        content += f"""

**Ideal Solution (For Comparison):**
Type: {challenge.ideal_solution.type}
Solution: {challenge.ideal_solution.value}

Please compare the candidate's submission against this ideal solution. Consider:
- How close is their approach to the ideal?
- What aspects did they implement well?
- What could be improved to match the ideal solution?
"""
    return content


def rejection_result(validation: ValidationResult) -> EvaluationResult:
    """Zero-score result recorded when validation blocks a submission."""
    return EvaluationResult(
        technical_score=0,
        clarity_score=0,
        communication_score=0,
        overall_score=0,
        feedback=f"Submission validation failed: {'. '.join(validation.issues)}",
        strengths=[],
        improvements=[RESUBMIT_IMPROVEMENT],
        model_used=REJECTED_MODEL,
    )


def apply_plagiarism_penalty(result: EvaluationResult, plagiarism_score: float) -> EvaluationResult:
    """Lower the technical score by the plagiarism excess over the threshold.

    The overall score is recomputed as the mean of the three sub-scores.
    Results at or below the threshold are returned unchanged.
    """
    if plagiarism_score <= PLAGIARISM_PENALTY_THRESHOLD:
        return result

    technical = clamp_score(result.technical_score - (plagiarism_score - PLAGIARISM_PENALTY_THRESHOLD))
    overall = round_half_up((technical + result.clarity_score + result.communication_score) / 3)
    return result.model_copy(
        update={
            "technical_score": technical,
            "overall_score": overall,
            "improvements": [*result.improvements, PLAGIARISM_IMPROVEMENT],
        }
    )


class SubmissionEvaluationPipeline:
    """Orchestrates validation and scoring for a single submission."""

    def __init__(
        self,
        router: ModelRouter,
        validator: SubmissionValidator,
        audit_dir: Optional[Path] = None,
        transcriber: Optional[VideoTranscriber] = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            router: Router used for scoring
            validator: Validator run before scoring
            audit_dir: Directory for per-run JSONL audit logs (disabled when None)
            transcriber: Speech-to-text for challenges that require a video transcript
        """
        self.router = router
        self.validator = validator
        self.audit_dir = Path(audit_dir) if audit_dir is not None else None
        self.transcriber = transcriber

    async def process(
        self,
        challenge: Challenge,
        submission: SubmissionContent,
        submission_id: Optional[str] = None,
    ) -> SubmissionOutcome:
        """Validate and score one submission.

        Args:
            challenge: Challenge the submission answers
            submission: Candidate content
            submission_id: Optional caller identifier carried into the outcome

        Returns:
            SubmissionOutcome with status "rejected" when validation blocked it

        Raises:
            Exception: Whatever the router raised when even the fallback failed
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        run_id = f"eval_{timestamp}_{uuid4().hex[:8]}"
        logger.info(f"Starting submission run: {run_id}")

        audit = EvaluationAuditLog.for_run(self.audit_dir, run_id) if self.audit_dir else None
        return await self._run(run_id, challenge, submission, submission_id, audit)

    async def _transcribe_if_required(
        self,
        challenge: Challenge,
        submission: SubmissionContent,
        audit: Optional[EvaluationAuditLog],
    ) -> SubmissionContent:
        """Fill in the video transcript from the video link when the challenge asks for one."""
        if not challenge.require_video_transcript or not submission.video_url:
            return submission
        if submission.video_transcript:
            return submission
        if self.transcriber is None:
            logger.warning("Challenge requires a video transcript but no transcriber is configured")
            return submission

        transcript = await self.transcriber.transcribe(submission.video_url)
        if audit:
            audit.log_transcription(submission.video_url, transcript)
        if not transcript:
            return submission
        return submission.model_copy(update={"video_transcript": transcript})

    async def _run(
        self,
        run_id: str,
        challenge: Challenge,
        submission: SubmissionContent,
        submission_id: Optional[str],
        audit: Optional[EvaluationAuditLog],
    ) -> SubmissionOutcome:
        submission = await self._transcribe_if_required(challenge, submission, audit)

        validation = await self.validator.validate_submission(submission, challenge.context())
        if audit:
            audit.log_validation(validation)

        if not validation.is_valid:
            logger.info(f"Submission rejected by validation: {validation.issues}")
            return SubmissionOutcome(
                run_id=run_id,
                submission_id=submission_id,
                status="rejected",
                score=0,
                evaluation=rejection_result(validation),
                validation=validation,
            )

        if validation.warnings:
            logger.warning(f"Validation warnings: {validation.warnings}")

        selected_model = get_model_for_challenge(challenge.pricing_tier, challenge.selected_model)
        request = EvaluationRequest(
            challenge_title=challenge.title,
            challenge_description=challenge.description,
            difficulty=challenge.difficulty,
            category=challenge.category,
            tags=challenge.tags,
            submission_content=build_submission_content(
                submission, challenge, validation.plagiarism_score
            ),
            video_transcript=submission.video_transcript,
            selected_model=selected_model,
        )

        try:
            result = await self.router.evaluate_with_model(request)
        except Exception as e:
            logger.error(f"Evaluation failed for run {run_id}: {e}")
            if audit:
                audit.log_failure("evaluation", e, requested_model=selected_model)
            raise

        result = apply_plagiarism_penalty(result, validation.plagiarism_score)
        if audit:
            audit.log_evaluation(result, requested_model=selected_model)

        logger.info(f"Evaluation complete for run {run_id}: score={result.overall_score}")
        return SubmissionOutcome(
            run_id=run_id,
            submission_id=submission_id,
            status="evaluated",
            score=result.overall_score,
            evaluation=result,
            validation=validation,
        )
