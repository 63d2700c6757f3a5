"""Route evaluation requests to provider evaluators with a one-shot fallback."""

from typing import Mapping

from loguru import logger

from skillmatch.evaluation.providers import ProviderEvaluator, build_default_evaluators
from skillmatch.exceptions import UnsupportedProviderError
from skillmatch.models.catalog import FALLBACK_MODEL, Provider, get_model_config
from skillmatch.models.config import Settings
from skillmatch.models.evaluation import EvaluationRequest, EvaluationResult


class ModelRouter:
    """Dispatches scoring calls and absorbs provider failures.

    A failed primary attempt is retried exactly once against the fixed free
    fallback model. A failure of that second attempt propagates.
    """

    def __init__(
        self,
        evaluators: Mapping[Provider, ProviderEvaluator],
        fallback_model: str = FALLBACK_MODEL.value,
    ) -> None:
        """Initialize router.

        Args:
            evaluators: Lookup table from provider to its evaluator
            fallback_model: Model id used for the single fallback attempt
        """
        self.evaluators = dict(evaluators)
        self.fallback_model = getattr(fallback_model, "value", fallback_model)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelRouter":
        return cls(build_default_evaluators(settings))

    async def _dispatch(self, request: EvaluationRequest) -> EvaluationResult:
        config = get_model_config(request.selected_model)
        evaluator = self.evaluators.get(config.provider)
        if evaluator is None:
            raise UnsupportedProviderError(config.provider.value)

        logger.info(
            f"Evaluating with {config.name} ({'FREE' if config.is_free else 'PAID'})"
        )
        result = await evaluator.evaluate(request)
        logger.info(
            f"Evaluation complete with {result.model_used}: "
            f"technical={result.technical_score}, clarity={result.clarity_score}, "
            f"communication={result.communication_score}, overall={result.overall_score}"
        )
        return result

    async def evaluate_with_model(self, request: EvaluationRequest) -> EvaluationResult:
        """Score a request, falling back once to the free model on failure.

        Args:
            request: Evaluation request naming the primary model

        Returns:
            EvaluationResult; ``model_used`` names the fallback model when the
            primary attempt failed

        Raises:
            Exception: Whatever the fallback attempt raised, or the primary
                error when the primary already was the fallback model
        """
        try:
            return await self._dispatch(request)
        except Exception as e:
            if request.selected_model == self.fallback_model:
                logger.error(f"Fallback model {self.fallback_model} failed: {e}")
                raise
            logger.warning(
                f"{request.selected_model} failed ({type(e).__name__}: {e}); "
                f"falling back to {self.fallback_model}"
            )

        fallback_request = request.model_copy(update={"selected_model": self.fallback_model})
        return await self._dispatch(fallback_request)


async def evaluate_with_model(
    request: EvaluationRequest,
    router: ModelRouter | None = None,
) -> EvaluationResult:
    """Module-level entry point; builds a router from settings when none is given."""
    if router is None:
        router = ModelRouter.from_settings(Settings())
    return await router.evaluate_with_model(request)
