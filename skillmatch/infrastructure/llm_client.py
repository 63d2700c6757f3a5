"""Async chat client over LiteLLM returning raw text and token usage."""

from typing import Any

import litellm
from litellm import acompletion
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from skillmatch.models.evaluation import TokenUsage

# Transient provider conditions worth a short retry on the same model.
# Anything else surfaces immediately so the router can fall back.
TRANSIENT_ERRORS = (
    litellm.RateLimitError,
    litellm.APIConnectionError,
    litellm.Timeout,
)


class LLMClient:
    """Async LLM client for chat completions."""

    def __init__(
        self,
        model: str,
        temperature: float = 0.0,
        max_tokens: int = 4096,
        api_key: str | None = None,
        timeout: float | None = None,
        json_mode: bool = False,
    ) -> None:
        """Initialize LLM client.

        Args:
            model: LiteLLM route (e.g., "gpt-4o", "groq/llama-3.1-8b-instant")
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            api_key: Provider API key passed explicitly to each call
            timeout: Per-request timeout in seconds
            json_mode: Request a JSON object response format
        """
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.api_key = api_key
        self.timeout = timeout
        self.json_mode = json_mode

    @retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def generate_text(
        self,
        messages: list[dict[str, Any]],
        system_prompt: str | None = None,
    ) -> tuple[str, TokenUsage]:
        """Generate unstructured text output from LLM.

        Args:
            messages: List of message dicts with 'role' and 'content'
            system_prompt: Optional system prompt to prepend

        Returns:
            Tuple of (response text, token usage)
        """
        full_messages = []
        if system_prompt:
            full_messages.append({"role": "system", "content": system_prompt})
        full_messages.extend(messages)

        logger.info(f"LLM text call: model={self.model}, messages={len(full_messages)}")

        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": full_messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = await acompletion(**kwargs)

        content = response.choices[0].message.content or ""
        usage = getattr(response, "usage", None)
        if usage is None:
            token_usage = TokenUsage()
        else:
            prompt_tokens = usage.prompt_tokens or 0
            completion_tokens = usage.completion_tokens or 0
            token_usage = TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=usage.total_tokens or prompt_tokens + completion_tokens,
            )

        logger.info(
            f"LLM text response: tokens={token_usage.total_tokens} "
            f"(prompt={token_usage.prompt_tokens}, "
            f"completion={token_usage.completion_tokens})"
        )

        return content, token_usage
