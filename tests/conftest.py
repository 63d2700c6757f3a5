"""Shared test fixtures."""

import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import yaml

from skillmatch.evaluation.providers import GeminiEvaluator, GroqEvaluator, OpenAIEvaluator
from skillmatch.evaluation.router import ModelRouter
from skillmatch.models.catalog import Provider
from skillmatch.models.challenge import Challenge, IdealSolution
from skillmatch.models.evaluation import EvaluationRequest, TokenUsage
from skillmatch.models.validation import ChallengeContext

SCORE_PAYLOAD = {
    "technicalScore": 85,
    "clarityScore": 80,
    "communicationScore": 90,
    "overallScore": 85,
    "feedback": "Solid work with clean structure.",
    "strengths": ["Clean code", "Good tests"],
    "improvements": ["Add documentation"],
}


def make_completion(content: str | None, prompt_tokens: int = 600, completion_tokens: int = 400) -> Any:
    """Build an object shaped like a LiteLLM completion response."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        ),
    )


def mock_llm_client(*responses: str) -> MagicMock:
    """Mock LLMClient whose generate_text returns the given texts in order."""
    client = MagicMock()
    client.generate_text = AsyncMock(
        side_effect=[(text, TokenUsage(prompt_tokens=100, completion_tokens=50, total_tokens=150)) for text in responses]
    )
    return client


@pytest.fixture
def score_json() -> str:
    return json.dumps(SCORE_PAYLOAD)


@pytest.fixture
def evaluation_request() -> EvaluationRequest:
    return EvaluationRequest(
        challenge_title="Build a REST API",
        challenge_description="Create a todo API with CRUD endpoints.",
        difficulty="medium",
        category="backend",
        tags=["python", "rest"],
        submission_content="GitHub/Project Link: https://github.com/alice/todo-api",
        selected_model="gpt-4o",
    )


@pytest.fixture
def challenge_context() -> ChallengeContext:
    return ChallengeContext(
        title="Build a REST API",
        description="Create a todo API with CRUD endpoints.",
        category="backend",
    )


@pytest.fixture
def challenge() -> Challenge:
    return Challenge(
        title="Build a REST API",
        description="Create a todo API with CRUD endpoints.",
        difficulty="medium",
        category="backend",
        tags=["python", "rest"],
        challenge_type="prize",
        ideal_solution=IdealSolution(type="text", value="FastAPI app with SQLite storage"),
        pricing_tier="premium",
    )


@pytest.fixture
def keyed_router() -> ModelRouter:
    """Router whose evaluators all have API keys configured."""
    return ModelRouter(
        {
            Provider.OPENAI: OpenAIEvaluator(api_key="sk-test"),
            Provider.GOOGLE: GeminiEvaluator(api_key="gemini-test"),
            Provider.GROQ: GroqEvaluator(api_key="groq-test"),
        }
    )


@pytest.fixture
def submission_file(tmp_path: Path) -> Path:
    """Write a minimal submission YAML in tmp_path.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to the submission file
    """
    data = {
        "challenge": {
            "title": "Build a REST API",
            "description": "Create a todo API with CRUD endpoints.",
            "difficulty": "hard",
            "category": "backend",
            "tags": ["python"],
            "type": "job",
            "pricing_tier": "balanced",
        },
        "submission": {
            "text_content": "I used FastAPI and SQLite.",
            "file_urls": ["https://files.skillmatch.dev/a.zip"],
        },
    }
    path = tmp_path / "submission.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def completion_factory():
    return make_completion


@pytest.fixture
def llm_client_factory():
    return mock_llm_client
