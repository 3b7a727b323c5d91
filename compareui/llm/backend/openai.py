"""OpenAI chat-completions backend.

Also serves as the base for providers exposing an OpenAI-compatible
endpoint (see GeminiBackend).
"""

import logging
from typing import Any

from compareui.config import EnvVar, get_environment

from .base import (
    AuthenticationError,
    GenerationConfig,
    LLMBackend,
    LLMResponse,
    classify_error,
)
from .model_spec import DEFAULT_OPENAI_MODEL, LLMCapability, get_llm_spec

logger = logging.getLogger(__name__)


class OpenAIBackend(LLMBackend):
    """OpenAI GPT backend.

    Environment:
        OPENAI_API_KEY: API key (required if not passed to constructor).

    Example:
        >>> backend = OpenAIBackend(model="gpt-4.1")
        >>> result = backend.generate("Return a button config as JSON")
        >>> print(result.content)
    """

    PROVIDER = "openai"
    API_KEY_VAR = EnvVar.OPENAI_API_KEY
    DEFAULT_MODEL_NAME = DEFAULT_OPENAI_MODEL.spec.name

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float = 60.0,
        max_retries: int = 3,
    ):
        """Initialize the backend.

        Args:
            api_key: API key. Falls back to the provider's env var.
            model: Model name. Defaults to the provider's default model.
            base_url: Optional custom API endpoint. Defaults to the model
                spec's endpoint, if any.
            timeout: Request timeout in seconds.
            max_retries: SDK-level retry attempts for transient HTTP errors.

        Raises:
            AuthenticationError: If no API key available.
        """
        self._api_key = get_environment(self.API_KEY_VAR, override=api_key)
        if not self._api_key:
            raise AuthenticationError(
                f"{self.PROVIDER} API key required. Set {self.API_KEY_VAR.value.name} "
                "environment variable or pass api_key parameter."
            )

        self._spec = get_llm_spec(model or self.DEFAULT_MODEL_NAME)
        self._base_url = base_url or self._spec.base_url
        self._timeout = timeout
        self._max_retries = max_retries
        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazily initialize the OpenAI client.

        Raises:
            ImportError: If openai package not installed.
        """
        if self._client is None:
            try:
                from openai import OpenAI
            except ImportError as e:
                raise ImportError(
                    "openai package required. Install with: pip install openai"
                ) from e
            self._client = OpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=self._max_retries,
            )
        return self._client

    @property
    def model_name(self) -> str:
        """Get the model identifier."""
        return self._spec.name

    @property
    def provider(self) -> str:
        """Get the provider identifier."""
        return self.PROVIDER

    @property
    def supports_json_mode(self) -> bool:
        """Check if backend natively supports JSON mode."""
        return self._spec.supports(LLMCapability.JSON_MODE)

    @property
    def context_window(self) -> int:
        """Get maximum context window size."""
        return self._spec.context_window

    def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        config: GenerationConfig | None = None,
    ) -> LLMResponse:
        """Generate text using the chat completions API.

        Raises:
            BackendError: If generation fails.
            RateLimitError: If rate limit exceeded.
            ContextLengthError: If prompt too long.
            AuthenticationError: If the key is rejected.
        """
        config = config or GenerationConfig()
        client = self._get_client()

        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        kwargs: dict[str, Any] = {
            "model": self._spec.name,
            "messages": messages,
            "temperature": config.temperature,
            "max_tokens": config.max_tokens,
            "top_p": config.top_p,
        }

        if config.json_mode and self.supports_json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        if config.stop_sequences:
            kwargs["stop"] = config.stop_sequences

        if config.seed is not None and self._spec.supports(LLMCapability.SEED):
            kwargs["seed"] = config.seed

        try:
            response = client.chat.completions.create(**kwargs)
        except Exception as e:
            raise classify_error(e) from e

        choice = response.choices[0]
        usage = response.usage
        return LLMResponse(
            content=choice.message.content or "",
            finish_reason=choice.finish_reason or "unknown",
            usage={
                "prompt_tokens": usage.prompt_tokens if usage else 0,
                "completion_tokens": usage.completion_tokens if usage else 0,
                "total_tokens": usage.total_tokens if usage else 0,
            },
            model=response.model or self._spec.name,
            raw_response=response,
        )


__all__ = ["OpenAIBackend"]
