"""Pure model-selection and pricing helpers.

Nothing here performs I/O. These functions back the challenge-creation flow,
which shows the resolved model and a cost estimate before a challenge is
published.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from skillmatch.models.catalog import (
    AI_MODELS,
    DEFAULT_MODEL,
    PRICING_TIERS,
    ModelConfig,
    get_model_config,
    get_tier_config,
)
from skillmatch.models.evaluation import TokenUsage

# Assumed token count per evaluation for pre-flight estimates.
ASSUMED_TOKENS_PER_EVAL = 1000
# Smaller figure used when listing the catalog.
CATALOG_TOKENS_PER_EVAL = 700


class CostQuote(BaseModel):
    """Pre-publication cost quote for a challenge."""

    model_config = ConfigDict(protected_namespaces=())

    pricing_tier: str
    selected_model: str
    model_name: str
    cost_per_evaluation: float
    expected_submissions: int
    estimated_total_cost: float
    is_free: bool


def metered_cost(usage: TokenUsage, cost_per_1k_tokens: float) -> float:
    """Cost of a metered call, rounded to 4 decimal places."""
    tokens = usage.prompt_tokens + usage.completion_tokens
    return round(tokens / 1000 * cost_per_1k_tokens, 4)


def get_model_for_challenge(pricing_tier: str, custom_model: Optional[str] = None) -> str:
    """Resolve the model id to use for a challenge.

    Args:
        pricing_tier: Tier name (free/budget/balanced/premium)
        custom_model: Explicit model chosen by the challenger

    Returns:
        The override when given, else the tier default, else the global default
    """
    if custom_model:
        return getattr(custom_model, "value", custom_model)

    tier = get_tier_config(pricing_tier)
    if tier is not None:
        return tier.default_model.value
    return DEFAULT_MODEL.value


def _per_eval_cost(config: ModelConfig, tokens: int) -> float:
    if config.is_free:
        return 0.0
    return tokens / 1000 * config.cost_per_1k_tokens


def estimate_evaluation_cost(pricing_tier: str, custom_model: Optional[str] = None) -> float:
    """Estimate the cost of one evaluation for display.

    Raises:
        UnsupportedModelError: If ``custom_model`` is not in the catalog
    """
    config = get_model_config(get_model_for_challenge(pricing_tier, custom_model))
    return _per_eval_cost(config, ASSUMED_TOKENS_PER_EVAL)


def quote_challenge_cost(
    pricing_tier: str,
    custom_model: Optional[str] = None,
    expected_submissions: int = 1,
) -> CostQuote:
    """Quote the total evaluation cost for an expected number of submissions."""
    model_id = get_model_for_challenge(pricing_tier, custom_model)
    config = get_model_config(model_id)
    per_eval = estimate_evaluation_cost(pricing_tier, custom_model)
    submissions = max(1, expected_submissions)

    return CostQuote(
        pricing_tier=pricing_tier,
        selected_model=model_id,
        model_name=config.name,
        cost_per_evaluation=per_eval,
        expected_submissions=submissions,
        estimated_total_cost=round(per_eval * submissions, 2),
        is_free=config.is_free,
    )


def list_models() -> list[dict[str, Any]]:
    """Catalog entries with a display cost estimate per evaluation."""
    return [
        {
            **config.model_dump(mode="json"),
            "estimated_cost_per_eval": _per_eval_cost(config, CATALOG_TOKENS_PER_EVAL),
        }
        for config in AI_MODELS.values()
    ]


def list_pricing_tiers() -> list[dict[str, Any]]:
    """Tier summaries including the default model's catalog entry."""
    return [
        {
            "tier": tier.tier.value,
            "default_model": tier.default_model.value,
            "fallback_model": tier.fallback_model.value,
            "estimated_cost_per_eval": tier.estimated_cost_per_eval,
            "description": tier.description,
            "model_details": AI_MODELS[tier.default_model].model_dump(mode="json"),
        }
        for tier in PRICING_TIERS.values()
    ]
