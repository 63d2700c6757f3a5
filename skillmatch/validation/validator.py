"""Aggregate the best-effort submission checks into one verdict."""

from typing import Optional

from loguru import logger

from skillmatch.evaluation.providers import build_check_client
from skillmatch.models.config import Settings, ValidationThresholds
from skillmatch.models.validation import ChallengeContext, SubmissionContent, ValidationResult
from skillmatch.validation.links import PLACEHOLDER_URL_ISSUE, has_placeholder_url
from skillmatch.validation.plagiarism import PlagiarismCheck
from skillmatch.validation.repository import RepositoryChecker
from skillmatch.validation.video import VideoRelevanceCheck


class SubmissionValidator:
    """Runs the applicable checks for a submission and routes their findings.

    Checks run sequentially. Each one degrades to a permissive default on
    internal failure, so ``validate_submission`` itself never raises for a
    check's sake.
    """

    def __init__(
        self,
        repository_checker: RepositoryChecker,
        video_check: VideoRelevanceCheck,
        plagiarism_check: PlagiarismCheck,
        thresholds: Optional[ValidationThresholds] = None,
    ) -> None:
        self.repository_checker = repository_checker
        self.video_check = video_check
        self.plagiarism_check = plagiarism_check
        self.thresholds = thresholds or ValidationThresholds()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SubmissionValidator":
        """Wire checks to the configured validation model and repository API."""
        thresholds = settings.thresholds
        return cls(
            repository_checker=RepositoryChecker(
                api_url=settings.github_api_url,
                timeout=settings.github_timeout,
                user_agent=settings.user_agent,
            ),
            video_check=VideoRelevanceCheck(
                build_check_client(settings, settings.video_check_temperature),
                max_prompt_chars=thresholds.max_prompt_chars,
                min_transcript_chars=thresholds.min_transcript_chars,
            ),
            plagiarism_check=PlagiarismCheck(
                build_check_client(settings, settings.plagiarism_check_temperature),
                max_prompt_chars=thresholds.max_prompt_chars,
            ),
            thresholds=thresholds,
        )

    async def validate_submission(
        self,
        submission: SubmissionContent,
        challenge: ChallengeContext,
    ) -> ValidationResult:
        """Validate a submission's link, video transcript and text.

        Args:
            submission: Candidate content; every field is optional
            challenge: Title, description and category of the challenge

        Returns:
            ValidationResult; valid exactly when no issue was found
        """
        issues: list[str] = []
        warnings: list[str] = []
        plagiarism_score = 0.0
        t = self.thresholds

        if submission.link_url and "github.com" in submission.link_url:
            repo_check = await self.repository_checker.check(submission.link_url)
            if not repo_check.is_valid:
                issues.append(repo_check.message)
            else:
                warnings.extend(repo_check.warnings)

        if submission.video_transcript:
            video = await self.video_check.check(submission.video_transcript, challenge)
            if not video.is_relevant and video.confidence > t.video_issue_confidence:
                issues.append(f"Video content may not be related to this challenge. {video.reason}")
            elif not video.is_relevant and video.confidence > t.video_warning_confidence:
                warnings.append(f"Video relevance uncertain: {video.reason}")

        # Routing depends on the score alone; isSuspicious is recorded but not consulted.
        if submission.text_content:
            plagiarism = await self.plagiarism_check.check(submission.text_content, challenge.category)
            plagiarism_score = plagiarism.plagiarism_score
            score_label = f"{plagiarism_score:g}%"
            if plagiarism_score > t.plagiarism_issue_score:
                issues.append(f"High plagiarism detected ({score_label}). {plagiarism.details}")
            elif plagiarism_score > t.plagiarism_warning_score:
                warnings.append(f"Possible plagiarism detected ({score_label}). {plagiarism.details}")

        if submission.link_url and has_placeholder_url(submission.link_url):
            issues.append(PLACEHOLDER_URL_ISSUE)

        result = ValidationResult.from_findings(issues, warnings, plagiarism_score, t)
        logger.info(
            f"Validation finished: valid={result.is_valid}, issues={len(issues)}, "
            f"warnings={len(warnings)}, confidence={result.confidence}"
        )
        return result


async def validate_submission(
    submission: SubmissionContent,
    challenge: ChallengeContext,
    validator: SubmissionValidator | None = None,
) -> ValidationResult:
    """Module-level entry point; builds a validator from settings when none is given."""
    if validator is None:
        validator = SubmissionValidator.from_settings(Settings())
    return await validator.validate_submission(submission, challenge)
