"""Exception hierarchy for the evaluation core."""


class SkillMatchError(Exception):
    """Base class for all evaluation core errors."""


class UnsupportedModelError(SkillMatchError):
    """Raised when a model id is not present in the catalog."""

    def __init__(self, model_id: str) -> None:
        super().__init__(f"Unsupported model: {model_id}")
        self.model_id = model_id


class UnsupportedProviderError(SkillMatchError):
    """Raised when no evaluator is registered for a provider."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"Unsupported provider: {provider}")
        self.provider = provider


class ProviderCallError(SkillMatchError):
    """Raised when a provider chat call fails for any reason."""

    def __init__(self, provider: str, model_id: str, message: str) -> None:
        super().__init__(f"{provider} call for {model_id} failed: {message}")
        self.provider = provider
        self.model_id = model_id


class ProviderNotConfiguredError(ProviderCallError):
    """Raised when a provider has no API key configured."""

    def __init__(self, provider: str, model_id: str) -> None:
        super().__init__(provider, model_id, "API key not configured")


class ResponseParseError(SkillMatchError):
    """Raised when a model response does not contain the expected JSON."""
