"""LLM integration layer for component configuration and code generation.

Main components:
- ArtifactGenerator: Runs the generate, validate, repair loop
- LLMBackend: Abstract interface for LLM providers
- create_llm_backend: Factory function for creating backends

Supported providers:
- Gemini (2.5 Flash, Flash-Lite, Pro)
- OpenAI (GPT-4.1)
- Anthropic (Claude 4.5)
- Ollama (local models)

Example:
    >>> from compareui.llm import ArtifactGenerator
    >>> generator = ArtifactGenerator()
    >>> result = generator.generate_config("button", "make it outlined", {...})
    >>> result.to_dict()

    >>> # With specific model
    >>> from compareui.llm import create_llm_backend, LLMModel
    >>> backend = create_llm_backend(LLMModel.CLAUDE_SONNET_4_5)
    >>> generator = ArtifactGenerator(backend=backend)
"""

from .backend import (
    DEFAULT_MODEL,
    AuthenticationError,
    BackendError,
    ContextLengthError,
    GenerationConfig,
    LLMBackend,
    LLMModel,
    LLMProviderType,
    LLMResponse,
    LLMSpec,
    RateLimitError,
    create_llm_backend,
    get_llm_spec,
)
from .generator import (
    ArtifactGenerator,
    ConfigRequest,
    GenerationExhausted,
    GenerationRequest,
    GenerationResult,
    GenerationState,
    GenerationSuccess,
    GeneratorConfig,
    MalformedResponseError,
    PlaygroundRequest,
    RetriesExhaustedError,
    extract_json,
    parse_request,
)

__all__ = [
    # Main API
    "ArtifactGenerator",
    "create_llm_backend",
    # Generator types
    "GeneratorConfig",
    "GenerationState",
    "GenerationSuccess",
    "GenerationExhausted",
    "GenerationResult",
    "ConfigRequest",
    "PlaygroundRequest",
    "GenerationRequest",
    "parse_request",
    "extract_json",
    # Backend types
    "LLMBackend",
    "GenerationConfig",
    "LLMResponse",
    "LLMProviderType",
    "LLMSpec",
    "LLMModel",
    "get_llm_spec",
    "DEFAULT_MODEL",
    # Exceptions
    "BackendError",
    "RateLimitError",
    "ContextLengthError",
    "AuthenticationError",
    "MalformedResponseError",
    "RetriesExhaustedError",
]
