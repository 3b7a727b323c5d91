"""Ollama local backend implementation.

Setup:
    1. Install Ollama: https://ollama.com
    2. Pull a model: `ollama pull llama3.2`
    3. Ollama server runs on localhost:11434 (override with OLLAMA_HOST)
"""

import logging
from typing import Any

from compareui.config import EnvVar, get_environment

from .base import BackendError, GenerationConfig, LLMBackend, LLMResponse
from .model_spec import DEFAULT_OLLAMA_MODEL, LLMCapability, get_llm_spec

logger = logging.getLogger(__name__)


class OllamaBackend(LLMBackend):
    """Ollama local inference backend. No API key required."""

    def __init__(
        self,
        model: str = DEFAULT_OLLAMA_MODEL.spec.name,
        base_url: str | None = None,
        timeout: float = 120.0,
    ):
        """Initialize Ollama backend.

        Args:
            model: Model name (llama3.2, qwen3).
            base_url: Ollama server URL. Defaults to OLLAMA_HOST.
            timeout: Request timeout in seconds (local inference can be slow).
        """
        self._spec = get_llm_spec(model)
        self._base_url = get_environment(EnvVar.OLLAMA_HOST, override=base_url)
        self._timeout = timeout
        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazily initialize Ollama client.

        Raises:
            ImportError: If ollama package not installed.
        """
        if self._client is None:
            try:
                import ollama
            except ImportError as e:
                raise ImportError(
                    "ollama package required. Install with: pip install ollama"
                ) from e
            self._client = ollama.Client(host=self._base_url, timeout=self._timeout)
        return self._client

    @property
    def model_name(self) -> str:
        return self._spec.name

    @property
    def provider(self) -> str:
        return "ollama"

    @property
    def supports_json_mode(self) -> bool:
        """Ollama supports JSON format via the format parameter."""
        return self._spec.supports(LLMCapability.JSON_MODE)

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
        """Generate text using Ollama.

        Raises:
            BackendError: If generation fails (e.g., model not found, server down).
        """
        config = config or GenerationConfig()
        client = self._get_client()

        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        options: dict[str, Any] = {
            "temperature": config.temperature,
            "num_predict": config.max_tokens,
            "top_p": config.top_p,
        }
        if config.seed is not None:
            options["seed"] = config.seed
        if config.stop_sequences:
            options["stop"] = config.stop_sequences

        kwargs: dict[str, Any] = {
            "model": self._spec.name,
            "messages": messages,
            "options": options,
        }
        if config.json_mode and self.supports_json_mode:
            kwargs["format"] = "json"

        try:
            response = client.chat(**kwargs)
        except Exception as e:
            error_msg = str(e).lower()
            if "not found" in error_msg or "pull" in error_msg:
                raise BackendError(
                    f"Model '{self._spec.name}' not found. "
                    f"Pull it first with: ollama pull {self._spec.name}"
                ) from e
            if "connect" in error_msg or "refused" in error_msg:
                raise BackendError(
                    f"Cannot connect to Ollama server at {self._base_url}. "
                    "Ensure Ollama is running: https://ollama.com"
                ) from e
            raise BackendError(str(e)) from e

        prompt_tokens = response.get("prompt_eval_count") or 0
        completion_tokens = response.get("eval_count") or 0
        return LLMResponse(
            content=(response.get("message") or {}).get("content") or "",
            finish_reason=response.get("done_reason") or "stop",
            usage={
                "prompt_tokens": prompt_tokens,
                "completion_tokens": completion_tokens,
                "total_tokens": prompt_tokens + completion_tokens,
            },
            model=self._spec.name,
            raw_response=response,
        )


__all__ = ["OllamaBackend"]
