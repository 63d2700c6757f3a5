"""Base class for model-assisted validation checks.

Subclasses implement ``build_prompt()``, ``parse_response()`` and
``neutral_default()``. The base class handles the model call and applies the
soft-fail policy so that no internal failure escapes ``assess()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from loguru import logger

from skillmatch.evaluation.normalizer import extract_json_object
from skillmatch.exceptions import ResponseParseError
from skillmatch.infrastructure.llm_client import LLMClient
from skillmatch.models.config import ValidationThresholds
from skillmatch.validation.policy import soft_fail

T = TypeVar("T")

DEFAULT_MAX_PROMPT_CHARS = ValidationThresholds().max_prompt_chars


def coerce_bool(value: Any) -> bool:
    """Interpret a JSON value as a boolean, accepting "true"/"false" strings."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


class ModelAssistedCheck(ABC, Generic[T]):
    """A validation check that asks a model for a JSON judgment."""

    system_prompt = "You are a careful content reviewer. You respond in structured JSON format."

    def __init__(self, llm_client: LLMClient, max_prompt_chars: int = DEFAULT_MAX_PROMPT_CHARS) -> None:
        """Initialize check.

        Args:
            llm_client: Client used for the judgment call
            max_prompt_chars: Candidate content is truncated to this many chars
        """
        self.llm_client = llm_client
        self.max_prompt_chars = max_prompt_chars

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this check."""
        ...

    @abstractmethod
    def build_prompt(self, *args: Any) -> str:
        """Build the judgment prompt."""
        ...

    @abstractmethod
    def parse_response(self, data: dict[str, Any]) -> T:
        """Turn the extracted JSON object into the check's result type."""
        ...

    @abstractmethod
    def neutral_default(self) -> T:
        """Result used when the check fails internally."""
        ...

    def truncate(self, text: str) -> str:
        """Bound candidate content to the prompt budget."""
        if len(text) <= self.max_prompt_chars:
            return text
        return text[: self.max_prompt_chars] + " ..."

    async def _judge(self, *args: Any) -> T:
        prompt = self.build_prompt(*args)
        text, _ = await self.llm_client.generate_text(
            messages=[{"role": "user", "content": prompt}],
            system_prompt=self.system_prompt,
        )
        extraction = extract_json_object(text)
        if not extraction.ok:
            raise ResponseParseError(f"{self.name}: {extraction.failure}")
        result = self.parse_response(extraction.data or {})
        logger.debug(f"{self.name} judgment: {result}")
        return result

    async def assess(self, *args: Any) -> T:
        """Run the judgment under the soft-fail policy. Never raises."""
        return await soft_fail(self._judge(*args), self.neutral_default(), label=self.name)
