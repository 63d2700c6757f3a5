"""Evaluate one submission with several models side by side."""

from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from skillmatch.evaluation.router import ModelRouter
from skillmatch.infrastructure.cost_tracker import CostTracker
from skillmatch.models.evaluation import EvaluationRequest, EvaluationResult


class ModelComparison(BaseModel):
    """Results of running one request against several models."""

    model_config = ConfigDict(protected_namespaces=())

    results: dict[str, EvaluationResult] = Field(default_factory=dict)
    failures: dict[str, str] = Field(default_factory=dict)
    cost_summary: dict[str, Any] = Field(default_factory=dict)


async def compare_models(
    request: EvaluationRequest,
    model_ids: list[str],
    router: ModelRouter,
) -> ModelComparison:
    """Score the same request with each model in turn.

    Models run sequentially. A model whose evaluation fails even after the
    router's fallback is recorded under ``failures`` and skipped. Results are
    keyed by the requested model id; ``model_used`` shows whether a fallback
    answered instead.

    Args:
        request: Base request; its selected_model is replaced per run
        model_ids: Models to compare
        router: Router used for every run

    Returns:
        ModelComparison
    """
    tracker = CostTracker()
    comparison = ModelComparison()

    for model_id in model_ids:
        try:
            result = await router.evaluate_with_model(
                request.model_copy(update={"selected_model": model_id})
            )
        except Exception as e:
            logger.error(f"Model {model_id} failed during comparison: {e}")
            comparison.failures[model_id] = str(e)
            continue

        tracker.add_result(result)
        comparison.results[model_id] = result

    comparison.cost_summary = tracker.summary()
    return comparison
