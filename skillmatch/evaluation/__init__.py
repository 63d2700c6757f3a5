"""Model routing, provider evaluators and response normalization."""

from skillmatch.evaluation.comparison import ModelComparison, compare_models
from skillmatch.evaluation.normalizer import (
    JsonExtraction,
    extract_json_object,
    neutral_breakdown,
    parse_evaluation_response,
)
from skillmatch.evaluation.pricing import (
    CostQuote,
    estimate_evaluation_cost,
    get_model_for_challenge,
    list_models,
    list_pricing_tiers,
    quote_challenge_cost,
)
from skillmatch.evaluation.providers import (
    GeminiEvaluator,
    GroqEvaluator,
    OpenAIEvaluator,
    ProviderEvaluator,
    build_default_evaluators,
)
from skillmatch.evaluation.router import ModelRouter, evaluate_with_model

__all__ = [
    "CostQuote",
    "GeminiEvaluator",
    "GroqEvaluator",
    "JsonExtraction",
    "ModelComparison",
    "ModelRouter",
    "OpenAIEvaluator",
    "ProviderEvaluator",
    "build_default_evaluators",
    "compare_models",
    "estimate_evaluation_cost",
    "evaluate_with_model",
    "extract_json_object",
    "get_model_for_challenge",
    "list_models",
    "list_pricing_tiers",
    "neutral_breakdown",
    "parse_evaluation_response",
    "quote_challenge_cost",
]
