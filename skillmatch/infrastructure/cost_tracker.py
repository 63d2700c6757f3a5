"""Cost tracker for evaluation runs."""

from typing import Any

from skillmatch.models.evaluation import EvaluationResult, TokenUsage


class CostTracker:
    """Track token usage and incurred cost across evaluations."""

    def __init__(self) -> None:
        self.usage_by_model: dict[str, TokenUsage] = {}
        self.cost_by_model: dict[str, float] = {}
        self.evaluations_by_model: dict[str, int] = {}

    def add_result(self, result: EvaluationResult) -> float:
        """Record one evaluation result.

        The cost is taken from the result itself since it was priced by the
        evaluator that produced it.

        Args:
            result: Completed evaluation

        Returns:
            Cost in USD recorded for this result
        """
        model = result.model_used
        usage = result.token_usage

        if model not in self.usage_by_model:
            self.usage_by_model[model] = TokenUsage()
            self.cost_by_model[model] = 0.0
            self.evaluations_by_model[model] = 0

        current = self.usage_by_model[model]
        self.usage_by_model[model] = TokenUsage(
            prompt_tokens=current.prompt_tokens + usage.prompt_tokens,
            completion_tokens=current.completion_tokens + usage.completion_tokens,
            total_tokens=current.total_tokens + usage.total_tokens,
        )
        self.cost_by_model[model] += result.cost_incurred
        self.evaluations_by_model[model] += 1

        return result.cost_incurred

    def total_cost(self) -> float:
        """Get total accumulated cost in USD, rounded to 4 decimals."""
        return round(sum(self.cost_by_model.values()), 4)

    def total_tokens(self) -> TokenUsage:
        """Get total accumulated token usage across all models."""
        return TokenUsage(
            prompt_tokens=sum(u.prompt_tokens for u in self.usage_by_model.values()),
            completion_tokens=sum(u.completion_tokens for u in self.usage_by_model.values()),
            total_tokens=sum(u.total_tokens for u in self.usage_by_model.values()),
        )

    def summary(self) -> dict[str, Any]:
        """Get detailed cost and usage summary.

        Returns:
            Dict with totals and a per-model breakdown
        """
        return {
            "total_cost_usd": self.total_cost(),
            "total_tokens": self.total_tokens().model_dump(),
            "by_model": {
                model: {
                    "evaluations": self.evaluations_by_model[model],
                    "tokens": usage.model_dump(),
                    "cost_usd": self.cost_by_model[model],
                }
                for model, usage in self.usage_by_model.items()
            },
        }
