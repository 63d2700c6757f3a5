"""Tests for the model-assisted checks, link helpers and soft-fail policy."""

import json

import httpx
import pytest
from respx import MockRouter

from skillmatch.models.config import ValidationThresholds
from skillmatch.validation.links import has_placeholder_url
from skillmatch.validation.plagiarism import PlagiarismCheck
from skillmatch.validation.policy import soft_fail
from skillmatch.validation.video import VideoRelevanceCheck
from skillmatch.validation.video_links import (
    extract_youtube_id,
    is_direct_video_url,
    is_vimeo_url,
    is_youtube_url,
    validate_youtube_video,
)

TRANSCRIPT = "In this video I walk through my todo API, the CRUD endpoints and how I tested them."


@pytest.mark.asyncio
async def test_soft_fail_returns_result():
    async def succeed():
        return 7

    assert await soft_fail(succeed(), 0, label="demo") == 7


@pytest.mark.asyncio
async def test_soft_fail_absorbs_errors():
    async def explode():
        raise RuntimeError("boom")

    assert await soft_fail(explode(), "neutral", label="demo") == "neutral"


@pytest.mark.parametrize(
    "url,expected",
    [
        ("http://localhost:3000/app", True),
        ("https://EXAMPLE.com/project", True),
        ("https://my-fake-site.io", True),
        ("https://test.com", True),
        ("https://github.com/alice/todo-api", False),
        ("https://todo.vercel.app", False),
    ],
)
def test_has_placeholder_url(url, expected):
    assert has_placeholder_url(url) is expected


@pytest.mark.asyncio
async def test_video_check_relevant(llm_client_factory, challenge_context):
    client = llm_client_factory(
        '```json\n{"isRelevant": true, "confidence": 92, "reason": "Explains the API"}\n```'
    )

    result = await VideoRelevanceCheck(client).check(TRANSCRIPT, challenge_context)

    assert result.is_relevant
    assert result.confidence == 92
    assert result.reason == "Explains the API"
    prompt = client.generate_text.call_args.kwargs["messages"][0]["content"]
    assert "Build a REST API" in prompt
    assert TRANSCRIPT in prompt


@pytest.mark.asyncio
async def test_video_check_short_transcript_skips_model(llm_client_factory, challenge_context):
    client = llm_client_factory()

    result = await VideoRelevanceCheck(client).check("too short", challenge_context)

    assert not result.is_relevant
    assert result.confidence == 0
    client.generate_text.assert_not_called()


@pytest.mark.asyncio
async def test_video_check_string_booleans_and_clamping(llm_client_factory, challenge_context):
    client = llm_client_factory('{"isRelevant": "false", "confidence": 140, "reason": "Off topic"}')

    result = await VideoRelevanceCheck(client).check(TRANSCRIPT, challenge_context)

    assert result.is_relevant is False
    assert result.confidence == 100


@pytest.mark.asyncio
async def test_video_check_failure_is_neutral(llm_client_factory, challenge_context):
    client = llm_client_factory("Sorry, I can't help with that.")

    result = await VideoRelevanceCheck(client).check(TRANSCRIPT, challenge_context)

    assert result.is_relevant is True
    assert result.confidence == 50
    assert result.reason == "Could not validate video content"


@pytest.mark.asyncio
async def test_video_check_truncates_long_transcript(llm_client_factory, challenge_context):
    client = llm_client_factory('{"isRelevant": true, "confidence": 80, "reason": "ok"}')
    long_transcript = "word " * 1000

    await VideoRelevanceCheck(client, max_prompt_chars=100).check(long_transcript, challenge_context)

    prompt = client.generate_text.call_args.kwargs["messages"][0]["content"]
    assert long_transcript[:100] + " ..." in prompt
    assert long_transcript[:101] not in prompt


@pytest.mark.asyncio
async def test_plagiarism_check_parses_response(llm_client_factory):
    client = llm_client_factory(
        json.dumps({"plagiarismScore": 72, "isSuspicious": True, "details": "Tutorial code"})
    )

    result = await PlagiarismCheck(client).check("def add(a, b): return a + b", "backend")

    assert result.plagiarism_score == 72
    assert result.is_suspicious
    assert result.details == "Tutorial code"
    prompt = client.generate_text.call_args.kwargs["messages"][0]["content"]
    assert "**Challenge Category:** backend" in prompt


@pytest.mark.asyncio
async def test_plagiarism_check_client_error_is_neutral(llm_client_factory):
    client = llm_client_factory()
    client.generate_text.side_effect = RuntimeError("rate limited")

    result = await PlagiarismCheck(client).check("some text", "backend")

    assert result.plagiarism_score == 0
    assert result.is_suspicious is False
    assert result.details == "Could not perform plagiarism check"


@pytest.mark.asyncio
async def test_plagiarism_check_non_numeric_score_is_neutral(llm_client_factory):
    client = llm_client_factory('{"plagiarismScore": "high", "isSuspicious": true}')

    result = await PlagiarismCheck(client).check("some text", "backend")

    assert result.plagiarism_score == 0


def test_video_url_helpers():
    assert is_youtube_url("https://youtu.be/abc123")
    assert is_youtube_url("https://www.youtube.com/watch?v=abc123")
    assert not is_youtube_url("https://vimeo.com/123")
    assert is_vimeo_url("https://vimeo.com/123")
    assert is_direct_video_url("https://cdn.site.dev/demo.MP4")
    assert is_direct_video_url("https://res.cloudinary.com/x/video/upload/v1/clip")
    assert not is_direct_video_url("https://www.youtube.com/watch?v=abc123")


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42", "dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://vimeo.com/123", None),
    ],
)
def test_extract_youtube_id(url, expected):
    assert extract_youtube_id(url) == expected


@pytest.mark.asyncio
async def test_validate_youtube_video(respx_mock: MockRouter):
    route = respx_mock.get(host="www.youtube.com", path="/oembed").mock(
        return_value=httpx.Response(200, json={"title": "My todo API walkthrough"})
    )

    info = await validate_youtube_video("https://youtu.be/dQw4w9WgXcQ")

    assert info.valid
    assert info.title == "My todo API walkthrough"
    assert route.calls.last.request.url.params["url"] == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


@pytest.mark.asyncio
async def test_validate_youtube_video_missing(respx_mock: MockRouter):
    respx_mock.get(host="www.youtube.com", path="/oembed").mock(return_value=httpx.Response(404))

    info = await validate_youtube_video("https://www.youtube.com/watch?v=gone")

    assert not info.valid


@pytest.mark.asyncio
async def test_validate_youtube_video_bad_url():
    info = await validate_youtube_video("https://vimeo.com/123")
    assert not info.valid


def test_check_defaults_follow_thresholds(llm_client_factory):
    thresholds = ValidationThresholds()
    check = VideoRelevanceCheck(llm_client_factory())

    assert check.max_prompt_chars == thresholds.max_prompt_chars
    assert check.min_transcript_chars == thresholds.min_transcript_chars
    assert PlagiarismCheck(llm_client_factory()).max_prompt_chars == thresholds.max_prompt_chars
