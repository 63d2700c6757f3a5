"""Repository link sanity check against the GitHub REST API."""

import re
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from loguru import logger

from skillmatch.models.validation import RepositoryCheck, RepositoryMetadata

REPOSITORY_URL_PATTERN = re.compile(r"github\.com/([^/]+)/([^/?#]+)")
OWNER_PATTERN = re.compile(r"github\.com/([^/?#]+)")

SUSPICIOUS_REPOSITORY_NAMES = ("test", "example", "demo", "template", "sample", "placeholder")

PLACEHOLDER_GITHUB_OWNERS = frozenset({"example", "test", "placeholder", "fake", "demo", "sample"})

STALE_AFTER_DAYS = 365

INVALID_FORMAT_MESSAGE = "Invalid GitHub URL format"
NOT_FOUND_MESSAGE = "GitHub repository not found. Please check the URL."
UNREACHABLE_MESSAGE = "Could not validate GitHub link. Please ensure it's accessible."
PLACEHOLDER_REPOSITORY_MESSAGE = "Please provide a real GitHub repository, not a placeholder or example URL."


def parse_repository_url(url: str) -> Optional[tuple[str, str]]:
    """Extract ``(owner, repo)`` from a GitHub URL, or None if it does not match."""
    match = REPOSITORY_URL_PATTERN.search(url)
    if not match:
        return None
    owner, repo = match.groups()
    repo = re.sub(r"\.git$", "", repo).rstrip("/")
    return owner, repo


def is_fake_github_url(url: str) -> bool:
    """True when the link's owner is a well-known placeholder account."""
    match = OWNER_PATTERN.search(url.lower())
    return bool(match) and match.group(1) in PLACEHOLDER_GITHUB_OWNERS


def _days_since(timestamp: Optional[str], now: datetime) -> Optional[int]:
    if not timestamp:
        return None
    try:
        updated = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return None
    if updated.tzinfo is None:
        updated = updated.replace(tzinfo=timezone.utc)
    return (now - updated).days


def repository_warnings(repo: RepositoryMetadata, now: Optional[datetime] = None) -> list[str]:
    """Advisory findings for a repository that exists."""
    now = now or datetime.now(timezone.utc)
    warnings: list[str] = []

    if repo.size == 0:
        warnings.append("Repository appears to be empty")

    days = _days_since(repo.updated_at, now)
    if days is not None and days > STALE_AFTER_DAYS:
        warnings.append("Repository hasn't been updated in over a year")

    if repo.is_fork:
        warnings.append("This is a forked repository. Ensure you made significant modifications.")

    if any(name in repo.name.lower() for name in SUSPICIOUS_REPOSITORY_NAMES):
        warnings.append("Repository name suggests this might be a demo/template")

    return warnings


def _metadata_from_payload(payload: dict[str, Any], fallback_name: str) -> RepositoryMetadata:
    return RepositoryMetadata(
        name=payload.get("name") or fallback_name,
        description=payload.get("description"),
        stars=payload.get("stargazers_count") or 0,
        forks=payload.get("forks_count") or 0,
        size=payload.get("size") or 0,
        language=payload.get("language"),
        created_at=payload.get("created_at"),
        updated_at=payload.get("updated_at"),
        has_issues=bool(payload.get("has_issues", False)),
        is_private=bool(payload.get("private", False)),
        is_fork=bool(payload.get("fork", False)),
    )


class RepositoryChecker:
    """Looks up a repository link and reports whether it is usable.

    The check never raises: lookup failures become an invalid result with a
    human-readable message.
    """

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        timeout: float = 5.0,
        user_agent: str = "SkillMatch-AI",
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._http_client = http_client

    async def _fetch(self, owner: str, repo: str) -> httpx.Response:
        url = f"{self.api_url}/repos/{owner}/{repo}"
        headers = {"User-Agent": self.user_agent}
        if self._http_client is not None:
            return await self._http_client.get(url, headers=headers, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, headers=headers)

    async def check(self, url: str) -> RepositoryCheck:
        parsed = parse_repository_url(url)
        if is_fake_github_url(url):
            logger.info(f"Repository link points at a placeholder owner: {url}")
            return RepositoryCheck(is_valid=False, message=PLACEHOLDER_REPOSITORY_MESSAGE)
        if parsed is None:
            logger.info(f"Repository link does not match the expected format: {url}")
            return RepositoryCheck(is_valid=False, message=INVALID_FORMAT_MESSAGE)

        owner, repo_name = parsed
        try:
            response = await self._fetch(owner, repo_name)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.info(f"Repository {owner}/{repo_name} not found")
                return RepositoryCheck(is_valid=False, message=NOT_FOUND_MESSAGE)
            logger.warning(f"Repository lookup for {owner}/{repo_name} failed: {e}")
            return RepositoryCheck(is_valid=False, message=UNREACHABLE_MESSAGE)
        except Exception as e:
            logger.warning(f"Repository lookup for {owner}/{repo_name} failed: {type(e).__name__}: {e}")
            return RepositoryCheck(is_valid=False, message=UNREACHABLE_MESSAGE)

        if not isinstance(payload, dict):
            logger.warning(f"Unexpected repository payload for {owner}/{repo_name}")
            return RepositoryCheck(is_valid=False, message=UNREACHABLE_MESSAGE)

        metadata = _metadata_from_payload(payload, repo_name)
        warnings = repository_warnings(metadata)
        logger.debug(f"Repository {owner}/{repo_name} warnings: {warnings}")
        return RepositoryCheck(
            is_valid=True,
            message=". ".join(warnings) if warnings else "Valid repository",
            warnings=warnings,
            repo=metadata,
        )
