"""Centralized environment configuration management for compareui.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from compareui.config import EnvVar, get_environment
    >>>
    >>> # Get values with automatic type conversion
    >>> attempts = get_environment(EnvVar.MAX_ATTEMPTS)  # Returns int
    >>> api_key = get_environment(EnvVar.GEMINI_API_KEY)  # Returns str | None
    >>>
    >>> # Override at runtime
    >>> attempts = get_environment(EnvVar.MAX_ATTEMPTS, override=3)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

import httpx

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "COMPAREUI_MAX_ATTEMPTS").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, float, bool, Path).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by compareui.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - llm: LLM provider API keys and model selection
        - generation: Retry loop tuning
        - compiler: Node/Babel front end used for code validation
        - history: Prompt audit storage
        - service: Tool server host and port
    """

    # -------------------------------------------------------------------------
    # LLM API Keys
    # -------------------------------------------------------------------------
    GEMINI_API_KEY = EnvConfig(
        name="GEMINI_API_KEY",
        default=None,
        var_type=str,
        description="Google Gemini API key",
        category="llm",
    )
    OPENAI_API_KEY = EnvConfig(
        name="OPENAI_API_KEY",
        default=None,
        var_type=str,
        description="OpenAI API key for GPT models",
        category="llm",
    )
    ANTHROPIC_API_KEY = EnvConfig(
        name="ANTHROPIC_API_KEY",
        default=None,
        var_type=str,
        description="Anthropic API key for Claude models",
        category="llm",
    )
    LLM_MODEL = EnvConfig(
        name="LLM_MODEL",
        default=None,
        var_type=str,
        description="Preferred model name (e.g. gemini-2.5-flash, gpt-4.1-mini)",
        category="llm",
    )
    OLLAMA_HOST = EnvConfig(
        name="OLLAMA_HOST",
        default="http://localhost:11434",
        var_type=str,
        description="Ollama server URL for local LLM",
        category="llm",
    )

    # -------------------------------------------------------------------------
    # Generation Loop
    # -------------------------------------------------------------------------
    MAX_ATTEMPTS = EnvConfig(
        name="COMPAREUI_MAX_ATTEMPTS",
        default=5,
        var_type=int,
        description="Retry ceiling: generation attempts per request",
        category="generation",
    )
    TEMPERATURE = EnvConfig(
        name="COMPAREUI_TEMPERATURE",
        default=0.7,
        var_type=float,
        description="Sampling temperature passed to the generation backend",
        category="generation",
    )

    # -------------------------------------------------------------------------
    # Compiler Front End
    # -------------------------------------------------------------------------
    NODE_BINARY = EnvConfig(
        name="COMPAREUI_NODE_BINARY",
        default="node",
        var_type=str,
        description="Node.js executable used to run the Babel front end",
        category="compiler",
    )
    BABEL_DIR = EnvConfig(
        name="COMPAREUI_BABEL_DIR",
        default=None,  # Computed from package location
        var_type=Path,
        description="Directory holding node_modules with @babel/core and presets",
        category="compiler",
    )
    COMPILE_TIMEOUT = EnvConfig(
        name="COMPAREUI_COMPILE_TIMEOUT",
        default=30.0,
        var_type=float,
        description="Seconds allowed for one Babel compilation",
        category="compiler",
    )

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------
    HISTORY_DB = EnvConfig(
        name="COMPAREUI_HISTORY_DB",
        default=None,  # Computed from cwd
        var_type=Path,
        description="SQLite database file for the prompt audit log",
        category="history",
    )

    # -------------------------------------------------------------------------
    # Service Configuration
    # -------------------------------------------------------------------------
    MCP_HOST = EnvConfig(
        name="MCP_HOST",
        default="0.0.0.0",
        var_type=str,
        description="Tool server bind address",
        category="service",
    )
    MCP_PORT = EnvConfig(
        name="MCP_PORT",
        default=5001,
        var_type=int,
        description="Tool server port for HTTP transport",
        category="service",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is float:
        try:
            return float(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    if var_type is Path:
        return Path(value)

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: float) -> float: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, float, bool, or Path).

    Example:
        >>> get_environment(EnvVar.MAX_ATTEMPTS)
        5
        >>> get_environment(EnvVar.MAX_ATTEMPTS, override=3)
        3
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_babel_dir(override: Path | str | None = None) -> Path:
    """Get the directory Node resolves @babel packages from.

    Resolution: override > COMPAREUI_BABEL_DIR > bundled compiler/js directory.
    """
    if override is not None:
        return Path(override)

    env_path = get_environment(EnvVar.BABEL_DIR)
    if env_path:
        return env_path

    return Path(__file__).resolve().parent.parent / "compiler" / "js"


def get_history_db_path(override: Path | str | None = None) -> Path:
    """Get the prompt audit database path.

    Resolution: override > COMPAREUI_HISTORY_DB > ./data/history/prompts.db
    """
    if override is not None:
        return Path(override)

    env_path = get_environment(EnvVar.HISTORY_DB)
    if env_path:
        return env_path

    return Path("data") / "history" / "prompts.db"


def get_available_llm_providers() -> list[str]:
    """Get list of available LLM providers.

    Checks both cloud providers (by API key) and local providers (by availability).

    Returns:
        List of provider names (e.g., ["gemini", "ollama"]).
    """
    providers = []

    if get_environment(EnvVar.GEMINI_API_KEY):
        providers.append("gemini")
    if get_environment(EnvVar.OPENAI_API_KEY):
        providers.append("openai")
    if get_environment(EnvVar.ANTHROPIC_API_KEY):
        providers.append("anthropic")

    ollama_url = get_environment(EnvVar.OLLAMA_HOST)
    if ollama_url:
        try:
            response = httpx.get(f"{ollama_url}/api/tags", timeout=2.0)
            if response.status_code == 200:
                providers.append("ollama")
        except httpx.HTTPError:
            pass  # Ollama not running

    return providers


def get_default_llm_model() -> str | None:
    """Get the model name to use when the caller does not pick one.

    Resolution: LLM_MODEL > first provider with an API key configured.
    Ollama is never chosen implicitly.

    Returns:
        Model name, or None if nothing is configured.
    """
    explicit = get_environment(EnvVar.LLM_MODEL)
    if explicit:
        return explicit

    defaults = {
        EnvVar.GEMINI_API_KEY: "gemini-2.5-flash",
        EnvVar.OPENAI_API_KEY: "gpt-4.1-mini",
        EnvVar.ANTHROPIC_API_KEY: "claude-sonnet-4-5",
    }
    for key_var, model_name in defaults.items():
        if get_environment(key_var):
            return model_name
    return None


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (llm, generation, compiler, history, service).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_babel_dir",
    "get_history_db_path",
    "get_available_llm_providers",
    "get_default_llm_model",
    # Introspection
    "list_environment_variables",
]
