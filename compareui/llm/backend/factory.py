"""Backend factory for creating LLM backends from model specifications."""

import logging

from compareui.config import get_default_llm_model

from .base import AuthenticationError, LLMBackend
from .model_spec import LLMModel, LLMProviderType, LLMSpec, get_llm_spec

logger = logging.getLogger(__name__)


def create_llm_backend(
    model: str | LLMModel | LLMSpec | None = None,
    *,
    api_key: str | None = None,
    base_url: str | None = None,
    **kwargs,
) -> LLMBackend:
    """Create an LLM backend from a model specification.

    Routes to the backend class for the model's provider.

    Args:
        model: Model name, LLMModel member or LLMSpec. When None, the model
            is taken from LLM_MODEL, else from the first provider with an
            API key configured (Gemini, OpenAI, Anthropic).
        api_key: API key for remote providers. Falls back to environment
            variable if not provided.
        base_url: Optional custom API endpoint. Uses provider default if None.
        **kwargs: Additional arguments passed to backend constructor
            (e.g., timeout, max_retries).

    Returns:
        Configured LLMBackend instance.

    Raises:
        ValueError: If model is unknown.
        AuthenticationError: If no model can be chosen or the chosen
            provider's API key is missing.

    Example:
        >>> backend = create_llm_backend()
        >>> backend = create_llm_backend("claude-sonnet-4-5", timeout=120.0)
    """
    if model is None:
        model = get_default_llm_model()
        if model is None:
            raise AuthenticationError(
                "No LLM configured. Set GEMINI_API_KEY, OPENAI_API_KEY or "
                "ANTHROPIC_API_KEY, or choose a model with LLM_MODEL."
            )

    spec = get_llm_spec(model)
    logger.debug(f"Creating {spec.provider.value} backend for {spec.name}")

    if spec.provider == LLMProviderType.GEMINI:
        from .gemini import GeminiBackend

        return GeminiBackend(api_key=api_key, model=spec.name, base_url=base_url, **kwargs)

    if spec.provider == LLMProviderType.OPENAI:
        from .openai import OpenAIBackend

        return OpenAIBackend(api_key=api_key, model=spec.name, base_url=base_url, **kwargs)

    if spec.provider == LLMProviderType.ANTHROPIC:
        from .anthropic import AnthropicBackend

        return AnthropicBackend(api_key=api_key, model=spec.name, **kwargs)

    if spec.provider == LLMProviderType.OLLAMA:
        from .ollama import OllamaBackend

        return OllamaBackend(model=spec.name, base_url=base_url, **kwargs)

    raise ValueError(f"Unsupported provider type: {spec.provider}")


__all__ = ["create_llm_backend"]
