"""Static catalog of supported evaluation models and pricing tiers.

The catalog is read-only configuration data. Callers look models up by id
with ``get_model_config`` and tiers with ``get_tier_config``; nothing here is
persisted or mutated at runtime.
"""

from enum import Enum
from types import MappingProxyType
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from skillmatch.exceptions import UnsupportedModelError


class Provider(str, Enum):
    """External LLM vendors the router can dispatch to."""

    OPENAI = "openai"
    GOOGLE = "google"
    GROQ = "groq"


class AIModel(str, Enum):
    """Model identifiers exposed to challenge creators."""

    GPT4O_MINI = "gpt-4o-mini"
    GPT4O = "gpt-4o"
    GEMINI_FLASH = "gemini-2.0-flash"
    GEMINI_PRO = "gemini-1.5-pro"
    LLAMA_70B = "llama-3.1-70b"
    LLAMA_8B = "llama-3.1-8b"
    MIXTRAL_8X7B = "mixtral-8x7b"


class PricingTier(str, Enum):
    """Budget buckets that hide the concrete model choice from end users."""

    FREE = "free"
    BUDGET = "budget"
    BALANCED = "balanced"
    PREMIUM = "premium"


class ModelConfig(BaseModel):
    """Catalog entry for a single model."""

    model_config = ConfigDict(frozen=True)

    id: AIModel
    name: str
    provider: Provider
    api_model: str
    cost_per_1k_tokens: float = Field(ge=0.0)
    accuracy_rating: int = Field(ge=1, le=10)
    speed: Literal["fast", "medium", "slow"]
    best_for: tuple[str, ...] = ()
    description: str = ""
    is_free: bool
    free_tier_limit: Optional[str] = None


class TierConfig(BaseModel):
    """Default and fallback model for a pricing tier."""

    model_config = ConfigDict(frozen=True)

    tier: PricingTier
    default_model: AIModel
    fallback_model: AIModel
    estimated_cost_per_eval: float
    description: str


# Global default free model; also the router's fixed fallback.
DEFAULT_MODEL = AIModel.GEMINI_FLASH
FALLBACK_MODEL = AIModel.GEMINI_FLASH

AI_MODELS: Mapping[AIModel, ModelConfig] = MappingProxyType(
    {
        AIModel.GPT4O_MINI: ModelConfig(
            id=AIModel.GPT4O_MINI,
            name="GPT-4o Mini",
            provider=Provider.OPENAI,
            api_model="gpt-4o-mini",
            cost_per_1k_tokens=0.00015,
            accuracy_rating=7,
            speed="fast",
            best_for=("basic-tasks", "budget-friendly"),
            description="Most affordable option. Good for simple challenges.",
            is_free=False,
        ),
        AIModel.GPT4O: ModelConfig(
            id=AIModel.GPT4O,
            name="GPT-4o",
            provider=Provider.OPENAI,
            api_model="gpt-4o",
            cost_per_1k_tokens=0.0025,
            accuracy_rating=9,
            speed="fast",
            best_for=("code", "multimodal", "general"),
            description="Excellent performance with vision capabilities.",
            is_free=False,
        ),
        AIModel.GEMINI_FLASH: ModelConfig(
            id=AIModel.GEMINI_FLASH,
            name="Gemini 2.0 Flash",
            provider=Provider.GOOGLE,
            api_model="gemini-2.0-flash",
            cost_per_1k_tokens=0.0,
            accuracy_rating=7,
            speed="fast",
            best_for=("high-volume", "real-time", "free"),
            description="Free, fast and efficient.",
            is_free=True,
            free_tier_limit="15 requests/min, 1500 requests/day",
        ),
        AIModel.GEMINI_PRO: ModelConfig(
            id=AIModel.GEMINI_PRO,
            name="Gemini 1.5 Pro",
            provider=Provider.GOOGLE,
            api_model="gemini-1.5-pro",
            cost_per_1k_tokens=0.0,
            accuracy_rating=9,
            speed="medium",
            best_for=("complex-analysis", "large-context", "free"),
            description="Free, high accuracy with a large context window.",
            is_free=True,
            free_tier_limit="2 requests/min, 50 requests/day",
        ),
        AIModel.LLAMA_70B: ModelConfig(
            id=AIModel.LLAMA_70B,
            name="Llama 3.1 70B",
            provider=Provider.GROQ,
            api_model="llama-3.1-70b-versatile",
            cost_per_1k_tokens=0.0,
            accuracy_rating=8,
            speed="fast",
            best_for=("code", "reasoning", "free"),
            description="Free and very fast. Strong at code evaluation.",
            is_free=True,
            free_tier_limit="30 requests/min",
        ),
        AIModel.LLAMA_8B: ModelConfig(
            id=AIModel.LLAMA_8B,
            name="Llama 3.1 8B",
            provider=Provider.GROQ,
            api_model="llama-3.1-8b-instant",
            cost_per_1k_tokens=0.0,
            accuracy_rating=6,
            speed="fast",
            best_for=("quick-scoring", "high-volume", "free"),
            description="Free and very fast. Good for initial screening.",
            is_free=True,
            free_tier_limit="30 requests/min",
        ),
        AIModel.MIXTRAL_8X7B: ModelConfig(
            id=AIModel.MIXTRAL_8X7B,
            name="Mixtral 8x7B",
            provider=Provider.GROQ,
            api_model="mixtral-8x7b-32768",
            cost_per_1k_tokens=0.0,
            accuracy_rating=7,
            speed="fast",
            best_for=("multilingual", "general", "free"),
            description="Free. Handles diverse challenge types.",
            is_free=True,
            free_tier_limit="30 requests/min",
        ),
    }
)

PRICING_TIERS: Mapping[PricingTier, TierConfig] = MappingProxyType(
    {
        PricingTier.FREE: TierConfig(
            tier=PricingTier.FREE,
            default_model=AIModel.GEMINI_FLASH,
            fallback_model=AIModel.LLAMA_8B,
            estimated_cost_per_eval=0.0,
            description="Completely free. Gemini Flash with a Groq Llama backup.",
        ),
        PricingTier.BUDGET: TierConfig(
            tier=PricingTier.BUDGET,
            default_model=AIModel.GPT4O_MINI,
            fallback_model=AIModel.GEMINI_FLASH,
            estimated_cost_per_eval=0.01,
            description="Very affordable with good accuracy.",
        ),
        PricingTier.BALANCED: TierConfig(
            tier=PricingTier.BALANCED,
            default_model=AIModel.LLAMA_70B,
            fallback_model=AIModel.GEMINI_PRO,
            estimated_cost_per_eval=0.0,
            description="Free with excellent performance.",
        ),
        PricingTier.PREMIUM: TierConfig(
            tier=PricingTier.PREMIUM,
            default_model=AIModel.GPT4O,
            fallback_model=AIModel.GEMINI_PRO,
            estimated_cost_per_eval=0.05,
            description="Highest accuracy for critical evaluations.",
        ),
    }
)


def get_model_config(model_id: str) -> ModelConfig:
    """Look up a catalog entry by model id.

    Args:
        model_id: Model identifier (an ``AIModel`` or its string value)

    Returns:
        The matching ModelConfig

    Raises:
        UnsupportedModelError: If the id is not in the catalog
    """
    try:
        return AI_MODELS[AIModel(model_id)]
    except (ValueError, KeyError):
        raise UnsupportedModelError(str(model_id)) from None


def get_tier_config(pricing_tier: str) -> Optional[TierConfig]:
    """Return the tier configuration, or None for unknown tier names."""
    try:
        return PRICING_TIERS[PricingTier(pricing_tier)]
    except ValueError:
        return None
