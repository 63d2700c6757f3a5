"""Best-effort submission validation checks."""

from skillmatch.validation.base import ModelAssistedCheck
from skillmatch.validation.links import has_placeholder_url
from skillmatch.validation.plagiarism import PlagiarismCheck
from skillmatch.validation.policy import soft_fail
from skillmatch.validation.repository import (
    RepositoryChecker,
    is_fake_github_url,
    parse_repository_url,
)
from skillmatch.validation.transcription import VideoTranscriber
from skillmatch.validation.validator import SubmissionValidator, validate_submission
from skillmatch.validation.video import VideoRelevanceCheck
from skillmatch.validation.video_links import (
    extract_youtube_id,
    is_direct_video_url,
    is_vimeo_url,
    is_youtube_url,
    validate_youtube_video,
)

__all__ = [
    "ModelAssistedCheck",
    "PlagiarismCheck",
    "RepositoryChecker",
    "SubmissionValidator",
    "VideoRelevanceCheck",
    "VideoTranscriber",
    "extract_youtube_id",
    "has_placeholder_url",
    "is_direct_video_url",
    "is_fake_github_url",
    "is_vimeo_url",
    "is_youtube_url",
    "parse_repository_url",
    "soft_fail",
    "validate_submission",
    "validate_youtube_video",
]
