"""Anthropic Claude backend implementation."""

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
from .model_spec import DEFAULT_ANTHROPIC_MODEL, get_llm_spec

logger = logging.getLogger(__name__)

JSON_ONLY_SUFFIX = (
    "IMPORTANT: Respond with valid JSON only. "
    "Do not include any text, explanation, or markdown formatting "
    "before or after the JSON object."
)


class AnthropicBackend(LLMBackend):
    """Anthropic Claude backend.

    Anthropic has no native JSON mode, so when `json_mode` is requested the
    prompt gets an explicit JSON-only suffix. Any stray prose is removed by
    the orchestrator's JSON extraction.

    Environment:
        ANTHROPIC_API_KEY: API key (required if not passed to constructor).
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_ANTHROPIC_MODEL.spec.name,
        timeout: float = 60.0,
        max_retries: int = 3,
    ):
        """Initialize Anthropic backend.

        Raises:
            AuthenticationError: If no API key available.
        """
        self._api_key = get_environment(EnvVar.ANTHROPIC_API_KEY, override=api_key)
        if not self._api_key:
            raise AuthenticationError(
                "Anthropic API key required. Set ANTHROPIC_API_KEY environment "
                "variable or pass api_key parameter."
            )

        self._spec = get_llm_spec(model)
        self._timeout = timeout
        self._max_retries = max_retries
        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazily initialize Anthropic client.

        Raises:
            ImportError: If anthropic package not installed.
        """
        if self._client is None:
            try:
                import anthropic
            except ImportError as e:
                raise ImportError(
                    "anthropic package required. Install with: pip install anthropic"
                ) from e
            self._client = anthropic.Anthropic(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=self._max_retries,
            )
        return self._client

    @property
    def model_name(self) -> str:
        return self._spec.name

    @property
    def provider(self) -> str:
        return "anthropic"

    @property
    def supports_json_mode(self) -> bool:
        return False

    @property
    def context_window(self) -> int:
        return self._spec.context_window

    def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        config: GenerationConfig | None = None,
    ) -> LLMResponse:
        """Generate text using the Anthropic messages API.

        Raises:
            BackendError: If generation fails.
        """
        config = config or GenerationConfig()
        client = self._get_client()

        effective_prompt = prompt
        if config.json_mode:
            effective_prompt = f"{prompt}\n\n{JSON_ONLY_SUFFIX}"

        kwargs: dict[str, Any] = {
            "model": self._spec.name,
            "messages": [{"role": "user", "content": effective_prompt}],
            "max_tokens": config.max_tokens,
            "temperature": config.temperature,
        }

        if system_prompt:
            kwargs["system"] = system_prompt

        if config.stop_sequences:
            kwargs["stop_sequences"] = config.stop_sequences

        try:
            response = client.messages.create(**kwargs)
        except Exception as e:
            raise classify_error(e) from e

        content = "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )

        return LLMResponse(
            content=content,
            finish_reason=response.stop_reason or "unknown",
            usage={
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens,
            },
            model=response.model,
            raw_response=response,
        )


__all__ = ["AnthropicBackend"]
