"""Helpers for classifying submission video links."""

import re
from typing import Optional

import httpx
from loguru import logger
from pydantic import BaseModel

YOUTUBE_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\s]+)"),
    re.compile(r"youtube\.com/embed/([^&\s]+)"),
)

DIRECT_VIDEO_EXTENSIONS = (".mp4", ".webm", ".mov", ".avi", ".mkv", ".m4a", ".wav")
DIRECT_VIDEO_HOSTS = ("cloudinary.com", "s3.amazonaws.com", "cloudflare")

OEMBED_URL = "https://www.youtube.com/oembed"


class VideoLinkInfo(BaseModel):
    """Result of looking up a hosted video."""

    valid: bool
    title: Optional[str] = None


def is_youtube_url(url: str) -> bool:
    return "youtube.com" in url or "youtu.be" in url


def is_vimeo_url(url: str) -> bool:
    return "vimeo.com" in url


def is_direct_video_url(url: str) -> bool:
    """True for links that point straight at a media file or media CDN."""
    lowered = url.lower()
    return any(ext in lowered for ext in DIRECT_VIDEO_EXTENSIONS) or any(
        host in lowered for host in DIRECT_VIDEO_HOSTS
    )


def extract_youtube_id(url: str) -> Optional[str]:
    for pattern in YOUTUBE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


async def validate_youtube_video(url: str, timeout: float = 5.0) -> VideoLinkInfo:
    """Confirm a YouTube video exists via the public oEmbed endpoint.

    Args:
        url: Any YouTube watch, short or embed URL
        timeout: HTTP timeout in seconds

    Returns:
        VideoLinkInfo; ``valid=False`` on any failure
    """
    video_id = extract_youtube_id(url)
    if not video_id:
        return VideoLinkInfo(valid=False)

    watch_url = f"https://www.youtube.com/watch?v={video_id}"
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(OEMBED_URL, params={"url": watch_url, "format": "json"})
            response.raise_for_status()
            data = response.json()
    except Exception as e:
        logger.warning(f"YouTube lookup failed for {video_id}: {type(e).__name__}: {e}")
        return VideoLinkInfo(valid=False)

    title = data.get("title") if isinstance(data, dict) else None
    return VideoLinkInfo(valid=True, title=title)
