"""Speech-to-text for submission videos hosted as direct media files."""

from typing import Any, Optional
from urllib.parse import urlparse

import httpx
from litellm import atranscription
from loguru import logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from skillmatch.infrastructure.llm_client import TRANSIENT_ERRORS
from skillmatch.models.config import Settings
from skillmatch.validation.policy import soft_fail
from skillmatch.validation.video_links import (
    is_direct_video_url,
    is_vimeo_url,
    is_youtube_url,
    validate_youtube_video,
)


class VideoTooLargeError(ValueError):
    """Raised when a downloaded video exceeds the transcription size limit."""


class VideoTranscriber:
    """Downloads a direct video link and transcribes its audio track.

    Hosted players (YouTube, Vimeo) do not expose the media file, so their
    links are skipped. Any failure yields no transcript instead of an error.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "whisper-1",
        download_timeout: float = 30.0,
        request_timeout: Optional[float] = None,
        max_bytes: int = 25 * 1024 * 1024,
        language: str = "en",
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize transcriber.

        Args:
            api_key: Key for the speech-to-text provider
            model: LiteLLM transcription route
            download_timeout: Timeout for fetching the video, in seconds
            request_timeout: Timeout for the transcription call, in seconds
            max_bytes: Largest file accepted by the transcription endpoint
            language: Spoken language hint
            http_client: Shared client for the download (one per call if omitted)
        """
        self.api_key = api_key
        self.model = model
        self.download_timeout = download_timeout
        self.request_timeout = request_timeout
        self.max_bytes = max_bytes
        self.language = language
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "VideoTranscriber":
        return cls(
            api_key=settings.api_key("openai_api_key"),
            model=settings.transcription_model,
            download_timeout=settings.video_download_timeout,
            request_timeout=settings.request_timeout,
            max_bytes=settings.max_video_bytes,
        )

    @staticmethod
    def can_transcribe(video_url: str) -> bool:
        if is_youtube_url(video_url) or is_vimeo_url(video_url):
            return False
        return is_direct_video_url(video_url)

    async def _download(self, video_url: str) -> bytes:
        if self._http_client is not None:
            response = await self._http_client.get(video_url, timeout=self.download_timeout)
        else:
            async with httpx.AsyncClient(timeout=self.download_timeout, follow_redirects=True) as client:
                response = await client.get(video_url)
        response.raise_for_status()
        if len(response.content) > self.max_bytes:
            raise VideoTooLargeError(f"{len(response.content)} bytes exceeds limit of {self.max_bytes}")
        return response.content

    @retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _speech_to_text(self, filename: str, media: bytes) -> str:
        kwargs: dict[str, Any] = {"model": self.model, "file": (filename, media), "language": self.language}
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.request_timeout is not None:
            kwargs["timeout"] = self.request_timeout

        response = await atranscription(**kwargs)
        return (response.text or "").strip()

    async def _transcribe(self, video_url: str) -> Optional[str]:
        media = await self._download(video_url)
        filename = urlparse(video_url).path.rsplit("/", 1)[-1]
        if "." not in filename:
            filename = f"{filename or 'video'}.mp4"
        logger.info(f"Transcribing {filename} ({len(media)} bytes) with {self.model}")
        text = await self._speech_to_text(filename, media)
        return text or None

    async def transcribe(self, video_url: str) -> Optional[str]:
        """Return the spoken text of a video, or None when it cannot be obtained.

        Args:
            video_url: Link to the candidate's explanation video

        Returns:
            Transcript text, or None for hosted players and on any failure
        """
        if is_youtube_url(video_url):
            info = await validate_youtube_video(video_url, timeout=self.download_timeout)
            status = f"found '{info.title}'" if info.valid else "not reachable"
            logger.info(f"YouTube video {status}; hosted videos are not transcribed")
            return None
        if not self.can_transcribe(video_url):
            logger.info(f"Skipping transcription for non-direct video link: {video_url}")
            return None
        return await soft_fail(self._transcribe(video_url), None, label="video transcription")
