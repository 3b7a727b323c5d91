"""Abstract base class for LLM backends.

Defines the interface that all generation backend implementations must
follow. The orchestrator only ever calls `generate()`; everything else is
metadata for logging and the CLI.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class GenerationConfig:
    """Configuration for LLM text generation.

    Attributes:
        temperature: Sampling temperature (0.0-2.0). Lower = more deterministic.
        max_tokens: Maximum tokens to generate in response.
        json_mode: Whether to enforce JSON output format.
        stop_sequences: Optional sequences that stop generation.
        top_p: Nucleus sampling parameter (0.0-1.0).
        seed: Optional seed for reproducible generation.
    """

    temperature: float = 0.7
    max_tokens: int = 4096
    json_mode: bool = True
    stop_sequences: list[str] = field(default_factory=list)
    top_p: float = 1.0
    seed: int | None = None


@dataclass
class LLMResponse:
    """Raw response from one LLM call.

    Attributes:
        content: Generated text content.
        finish_reason: Why generation stopped ('stop', 'length', 'content_filter').
        usage: Token usage dict (prompt_tokens, completion_tokens, total_tokens).
        model: Model identifier that was used.
        raw_response: Provider-specific raw response for debugging.
    """

    content: str
    finish_reason: str
    usage: dict[str, int]
    model: str
    raw_response: Any = None


class LLMBackend(ABC):
    """Abstract interface for LLM text generation backends.

    Implementations may use external APIs (Gemini, OpenAI, Anthropic) or
    local models (Ollama). Calls may block for an unpredictable time and
    fail with any BackendError subclass.

    Example:
        >>> backend = GeminiBackend(model="gemini-2.5-flash")
        >>> result = backend.generate("Return a button config as JSON")
        >>> print(result.content)
    """

    @abstractmethod
    def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        config: GenerationConfig | None = None,
    ) -> LLMResponse:
        """Generate text from a prompt.

        Args:
            prompt: User prompt text.
            system_prompt: Optional system instruction for context.
            config: Generation configuration options.

        Returns:
            LLMResponse with generated content and metadata.

        Raises:
            BackendError: If generation fails.
            RateLimitError: If API rate limit is exceeded.
            ContextLengthError: If prompt exceeds context window.
        """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model identifier.

        Returns:
            String model name (e.g., 'gemini-2.5-flash', 'gpt-4.1-mini').
        """

    @property
    @abstractmethod
    def provider(self) -> str:
        """Get the provider identifier.

        Returns:
            String provider name (e.g., 'gemini', 'anthropic').
        """

    @property
    def name(self) -> str:
        """Get backend identifier for logging.

        Returns:
            String in format 'provider:model'.
        """
        return f"{self.provider}:{self.model_name}"

    @property
    @abstractmethod
    def supports_json_mode(self) -> bool:
        """Check if backend natively supports JSON mode."""

    @property
    @abstractmethod
    def context_window(self) -> int:
        """Get maximum context window size in tokens."""


class BackendError(Exception):
    """Base exception for generation backend errors."""


class RateLimitError(BackendError):
    """Raised when API rate limit or quota is exceeded.

    Attributes:
        retry_after: Suggested wait time in seconds before retry.
    """

    def __init__(self, message: str, retry_after: float | None = None):
        super().__init__(message)
        self.retry_after = retry_after


class ContextLengthError(BackendError):
    """Raised when prompt exceeds the model's context window."""


class AuthenticationError(BackendError):
    """Raised when API authentication fails (invalid or missing key)."""


def classify_error(error: Exception) -> BackendError:
    """Map a provider SDK exception to the matching BackendError.

    SDK exception types differ per provider, so classification is done on
    the message text.
    """
    error_str = str(error).lower()

    if "rate limit" in error_str or "rate_limit" in error_str or "quota" in error_str:
        return RateLimitError(str(error))
    if "context length" in error_str or "maximum context" in error_str:
        return ContextLengthError(str(error))
    if (
        "authentication" in error_str
        or "invalid api key" in error_str
        or "api key not valid" in error_str
    ):
        return AuthenticationError(str(error))
    return BackendError(str(error))


__all__ = [
    "LLMBackend",
    "GenerationConfig",
    "LLMResponse",
    "BackendError",
    "RateLimitError",
    "ContextLengthError",
    "AuthenticationError",
    "classify_error",
]
