"""LLM backend implementations.

Provides the abstract generation backend and concrete implementations for
Gemini, OpenAI, Anthropic and local Ollama models.
"""

from .base import (
    AuthenticationError,
    BackendError,
    ContextLengthError,
    GenerationConfig,
    LLMBackend,
    LLMResponse,
    RateLimitError,
    classify_error,
)
from .factory import create_llm_backend
from .model_spec import (
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_MODEL,
    DEFAULT_OLLAMA_MODEL,
    DEFAULT_OPENAI_MODEL,
    LLMCapability,
    LLMModel,
    LLMProviderType,
    LLMSpec,
    get_llm_spec,
)

__all__ = [
    # Base classes and types
    "LLMBackend",
    "GenerationConfig",
    "LLMResponse",
    # Exceptions
    "BackendError",
    "RateLimitError",
    "ContextLengthError",
    "AuthenticationError",
    "classify_error",
    # Model specification
    "LLMCapability",
    "LLMProviderType",
    "LLMSpec",
    "LLMModel",
    "get_llm_spec",
    # Defaults
    "DEFAULT_MODEL",
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_OPENAI_MODEL",
    "DEFAULT_ANTHROPIC_MODEL",
    "DEFAULT_OLLAMA_MODEL",
    # Factory
    "create_llm_backend",
]
