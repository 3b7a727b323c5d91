"""Centralized configuration management for compareui.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from compareui.config import EnvVar, get_environment
    >>>
    >>> # Get any environment variable with automatic type conversion
    >>> attempts = get_environment(EnvVar.MAX_ATTEMPTS)  # Returns int: 5
    >>> api_key = get_environment(EnvVar.GEMINI_API_KEY)  # Returns str | None
    >>>
    >>> # List available variables by category
    >>> for var in list_environment_variables("compiler"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    llm: API keys for LLM providers (Gemini, OpenAI, Anthropic) and model choice
    generation: Retry ceiling and sampling temperature
    compiler: Node.js / Babel front end for code validation
    history: Prompt audit database location
    service: Tool server host and port
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_available_llm_providers,
    get_babel_dir,
    get_default_llm_model,
    get_environment,
    get_environment_info,
    get_history_db_path,
    # Introspection
    list_environment_variables,
)

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
