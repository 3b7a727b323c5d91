"""Model specification registry for generation backends.

Lists the models the engine can route to, with the provider that serves
them and the capabilities the backends rely on (JSON mode, seeding).
"""

from dataclasses import dataclass, field
from enum import Enum


class LLMCapability(Enum):
    """Capabilities that an LLM model may support."""

    JSON_MODE = "json_mode"  # Native JSON output enforcement
    STREAMING = "streaming"
    SYSTEM_PROMPT = "system_prompt"  # Dedicated system role
    SEED = "seed"  # Reproducible generation with seed


class LLMProviderType(Enum):
    """Available LLM backend providers."""

    GEMINI = "gemini"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    OLLAMA = "ollama"


@dataclass(frozen=True)
class LLMSpec:
    """Specification for an LLM model.

    Attributes:
        name: Model identifier (e.g., 'gemini-2.5-flash', 'gpt-4.1-mini').
        provider: Backend provider type.
        context_window: Maximum context size in tokens.
        max_output_tokens: Maximum generation tokens.
        capabilities: Set of supported capabilities.
        description: Human-readable description.
        requires_api_key: Whether this model needs an API key.
        api_key_env_var: Environment variable name for API key.
        base_url: Optional custom API endpoint.
    """

    name: str
    provider: LLMProviderType
    context_window: int
    max_output_tokens: int
    capabilities: frozenset[LLMCapability] = field(default_factory=frozenset)
    description: str = ""
    requires_api_key: bool = True
    api_key_env_var: str = ""
    base_url: str | None = None

    def supports(self, capability: LLMCapability) -> bool:
        """Check if model supports a capability."""
        return capability in self.capabilities

    @property
    def is_local(self) -> bool:
        """Check if model runs locally."""
        return self.provider == LLMProviderType.OLLAMA

    @property
    def is_remote(self) -> bool:
        """Check if model uses remote API."""
        return not self.is_local


GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

_GEMINI_FULL = frozenset(
    {
        LLMCapability.JSON_MODE,
        LLMCapability.STREAMING,
        LLMCapability.SYSTEM_PROMPT,
    }
)

_OPENAI_FULL = frozenset(
    {
        LLMCapability.JSON_MODE,
        LLMCapability.STREAMING,
        LLMCapability.SYSTEM_PROMPT,
        LLMCapability.SEED,
    }
)

_ANTHROPIC_FULL = frozenset(
    {
        LLMCapability.STREAMING,
        LLMCapability.SYSTEM_PROMPT,
    }
)

_OLLAMA_BASIC = frozenset(
    {
        LLMCapability.JSON_MODE,
        LLMCapability.SYSTEM_PROMPT,
        LLMCapability.SEED,
    }
)


class LLMModel(Enum):
    """Registry of available LLM models."""

    # === Google Gemini Models ===
    GEMINI_2_5_FLASH = LLMSpec(
        name="gemini-2.5-flash",
        provider=LLMProviderType.GEMINI,
        context_window=1048576,
        max_output_tokens=65536,
        capabilities=_GEMINI_FULL,
        description="Gemini fast general model",
        api_key_env_var="GEMINI_API_KEY",
        base_url=GEMINI_OPENAI_BASE_URL,
    )

    GEMINI_2_5_FLASH_LITE = LLMSpec(
        name="gemini-2.5-flash-lite",
        provider=LLMProviderType.GEMINI,
        context_window=1048576,
        max_output_tokens=65536,
        capabilities=_GEMINI_FULL,
        description="Gemini lowest latency model",
        api_key_env_var="GEMINI_API_KEY",
        base_url=GEMINI_OPENAI_BASE_URL,
    )

    GEMINI_2_5_PRO = LLMSpec(
        name="gemini-2.5-pro",
        provider=LLMProviderType.GEMINI,
        context_window=1048576,
        max_output_tokens=65536,
        capabilities=_GEMINI_FULL,
        description="Gemini most capable model",
        api_key_env_var="GEMINI_API_KEY",
        base_url=GEMINI_OPENAI_BASE_URL,
    )

    # === OpenAI Models ===
    GPT_4_1 = LLMSpec(
        name="gpt-4.1",
        provider=LLMProviderType.OPENAI,
        context_window=128000,
        max_output_tokens=16384,
        capabilities=_OPENAI_FULL,
        description="OpenAI model tuned for coding",
        api_key_env_var="OPENAI_API_KEY",
    )

    GPT_4_1_MINI = LLMSpec(
        name="gpt-4.1-mini",
        provider=LLMProviderType.OPENAI,
        context_window=128000,
        max_output_tokens=16384,
        capabilities=_OPENAI_FULL,
        description="OpenAI fast and efficient small model",
        api_key_env_var="OPENAI_API_KEY",
    )

    # === Anthropic Claude Models ===
    CLAUDE_SONNET_4_5 = LLMSpec(
        name="claude-sonnet-4-5",
        provider=LLMProviderType.ANTHROPIC,
        context_window=200000,
        max_output_tokens=64000,
        capabilities=_ANTHROPIC_FULL,
        description="Anthropic balanced model",
        api_key_env_var="ANTHROPIC_API_KEY",
    )

    CLAUDE_HAIKU_4_5 = LLMSpec(
        name="claude-haiku-4-5",
        provider=LLMProviderType.ANTHROPIC,
        context_window=200000,
        max_output_tokens=64000,
        capabilities=_ANTHROPIC_FULL,
        description="Anthropic fastest model",
        api_key_env_var="ANTHROPIC_API_KEY",
    )

    # === Ollama Local Models ===
    OLLAMA_LLAMA3_2 = LLMSpec(
        name="llama3.2",
        provider=LLMProviderType.OLLAMA,
        context_window=128000,
        max_output_tokens=4096,
        capabilities=_OLLAMA_BASIC,
        description="Meta Llama 3.2 via Ollama (local)",
        requires_api_key=False,
    )

    OLLAMA_QWEN3 = LLMSpec(
        name="qwen3",
        provider=LLMProviderType.OLLAMA,
        context_window=32768,
        max_output_tokens=8192,
        capabilities=_OLLAMA_BASIC,
        description="Qwen3 via Ollama (local)",
        requires_api_key=False,
    )

    @property
    def spec(self) -> LLMSpec:
        """Get the LLMSpec for this model."""
        return self.value

    @classmethod
    def by_name(cls, name: str) -> "LLMModel | None":
        """Look up model by name string, or None if unknown."""
        for model in cls:
            if model.spec.name == name:
                return model
        return None

    @classmethod
    def list_by_provider(cls, provider: LLMProviderType) -> list["LLMModel"]:
        """Get all models for a specific provider."""
        return [m for m in cls if m.spec.provider == provider]


# Default models for each provider
DEFAULT_GEMINI_MODEL = LLMModel.GEMINI_2_5_FLASH
DEFAULT_OPENAI_MODEL = LLMModel.GPT_4_1_MINI
DEFAULT_ANTHROPIC_MODEL = LLMModel.CLAUDE_SONNET_4_5
DEFAULT_OLLAMA_MODEL = LLMModel.OLLAMA_LLAMA3_2

# Overall default
DEFAULT_MODEL = DEFAULT_GEMINI_MODEL


def get_llm_spec(model: str | LLMModel | LLMSpec) -> LLMSpec:
    """Resolve a model reference to its LLMSpec.

    Args:
        model: Can be a model name string, LLMModel enum, or LLMSpec.

    Returns:
        The resolved LLMSpec.

    Raises:
        ValueError: If model name is not found.
    """
    if isinstance(model, LLMSpec):
        return model
    if isinstance(model, LLMModel):
        return model.spec
    found = LLMModel.by_name(model)
    if found:
        return found.spec
    raise ValueError(f"Unknown model: {model}")


__all__ = [
    "GEMINI_OPENAI_BASE_URL",
    "LLMCapability",
    "LLMProviderType",
    "LLMSpec",
    "LLMModel",
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_OPENAI_MODEL",
    "DEFAULT_ANTHROPIC_MODEL",
    "DEFAULT_OLLAMA_MODEL",
    "DEFAULT_MODEL",
    "get_llm_spec",
]
