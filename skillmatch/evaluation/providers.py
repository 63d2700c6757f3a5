"""Provider evaluators: one thin adapter per supported LLM vendor.

Every evaluator renders the shared scoring prompt, sends it through an
``LLMClient`` routed to its vendor, normalizes the raw text and prices the
call. Vendors differ only in LiteLLM routing, credentials and billing.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Mapping

from loguru import logger

from skillmatch.evaluation.normalizer import parse_evaluation_response
from skillmatch.evaluation.pricing import metered_cost
from skillmatch.evaluation.prompts import EVALUATION_SYSTEM_PROMPT, build_evaluation_prompt
from skillmatch.exceptions import (
    ProviderCallError,
    ProviderNotConfiguredError,
    UnsupportedProviderError,
)
from skillmatch.infrastructure.llm_client import LLMClient
from skillmatch.models.catalog import ModelConfig, Provider, get_model_config
from skillmatch.models.config import Settings
from skillmatch.models.evaluation import EvaluationRequest, EvaluationResult, TokenUsage


class ProviderEvaluator(ABC):
    """Scores a request against one vendor's chat completion API."""

    provider: ClassVar[Provider]
    api_key_field: ClassVar[str]

    def __init__(
        self,
        api_key: str | None,
        temperature: float = 0.8,
        max_tokens: int = 3000,
        timeout: float | None = None,
    ) -> None:
        """Initialize evaluator.

        Args:
            api_key: Vendor API key (None when not configured)
            temperature: Sampling temperature for scoring calls
            max_tokens: Maximum completion tokens
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderEvaluator":
        return cls(
            api_key=settings.api_key(cls.api_key_field),
            temperature=settings.evaluation_temperature,
            max_tokens=settings.evaluation_max_tokens,
            timeout=settings.request_timeout,
        )

    @abstractmethod
    def route(self, config: ModelConfig) -> str:
        """LiteLLM model route for a catalog entry."""
        ...

    def compute_cost(self, config: ModelConfig, usage: TokenUsage) -> float:
        """Cost of a call. Free-tier vendors never charge."""
        return 0.0

    def client_for(self, config: ModelConfig) -> LLMClient:
        return LLMClient(
            model=self.route(config),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            api_key=self.api_key,
            timeout=self.timeout,
            json_mode=True,
        )

    async def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        """Score a request with the model it selects.

        Args:
            request: Evaluation request whose model belongs to this provider

        Returns:
            EvaluationResult with model_used and cost_incurred attached

        Raises:
            UnsupportedProviderError: If the model belongs to another provider
            ProviderCallError: If the vendor call fails or is not configured
        """
        config = get_model_config(request.selected_model)
        if config.provider is not self.provider:
            raise UnsupportedProviderError(config.provider.value)
        if not self.api_key:
            raise ProviderNotConfiguredError(self.provider.value, config.id.value)

        client = self.client_for(config)
        try:
            text, usage = await client.generate_text(
                messages=[{"role": "user", "content": build_evaluation_prompt(request)}],
                system_prompt=EVALUATION_SYSTEM_PROMPT,
            )
        except Exception as e:
            raise ProviderCallError(self.provider.value, config.id.value, str(e)) from e

        logger.debug(f"{config.name} raw response: {text[:200]}")

        breakdown = parse_evaluation_response(text)
        return EvaluationResult(
            **breakdown.model_dump(),
            model_used=config.id.value,
            cost_incurred=self.compute_cost(config, usage),
            token_usage=usage,
        )


class OpenAIEvaluator(ProviderEvaluator):
    """Metered OpenAI chat models."""

    provider = Provider.OPENAI
    api_key_field = "openai_api_key"

    def route(self, config: ModelConfig) -> str:
        return config.api_model

    def compute_cost(self, config: ModelConfig, usage: TokenUsage) -> float:
        return metered_cost(usage, config.cost_per_1k_tokens)


class GeminiEvaluator(ProviderEvaluator):
    """Google Gemini models on the free tier."""

    provider = Provider.GOOGLE
    api_key_field = "gemini_api_key"

    def route(self, config: ModelConfig) -> str:
        return f"gemini/{config.api_model}"


class GroqEvaluator(ProviderEvaluator):
    """Groq-hosted open models on the free tier."""

    provider = Provider.GROQ
    api_key_field = "groq_api_key"

    def route(self, config: ModelConfig) -> str:
        return f"groq/{config.api_model}"


EVALUATOR_CLASSES: Mapping[Provider, type[ProviderEvaluator]] = {
    Provider.OPENAI: OpenAIEvaluator,
    Provider.GOOGLE: GeminiEvaluator,
    Provider.GROQ: GroqEvaluator,
}


def build_default_evaluators(settings: Settings) -> dict[Provider, ProviderEvaluator]:
    """Instantiate one evaluator per provider from settings."""
    return {provider: cls.from_settings(settings) for provider, cls in EVALUATOR_CLASSES.items()}


def build_check_client(
    settings: Settings,
    temperature: float,
    model_id: str | None = None,
) -> LLMClient:
    """Build an LLMClient for a validation check's judgment calls.

    Validation checks reuse the evaluators' routing and credentials for the
    configured validation model.
    """
    config = get_model_config(model_id or settings.validation_model)
    evaluator = EVALUATOR_CLASSES[config.provider].from_settings(settings)
    return LLMClient(
        model=evaluator.route(config),
        temperature=temperature,
        max_tokens=settings.check_max_tokens,
        api_key=evaluator.api_key,
        timeout=settings.request_timeout,
    )
