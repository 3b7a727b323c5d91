"""Google Gemini backend.

Gemini exposes an OpenAI-compatible chat completions endpoint, so this
backend reuses OpenAIBackend with Gemini's key, endpoint and models.
"""

from compareui.config import EnvVar

from .model_spec import DEFAULT_GEMINI_MODEL
from .openai import OpenAIBackend


class GeminiBackend(OpenAIBackend):
    """Google Gemini backend.

    Environment:
        GEMINI_API_KEY: API key (required if not passed to constructor).

    Example:
        >>> backend = GeminiBackend()
        >>> backend.name
        'gemini:gemini-2.5-flash'
    """

    PROVIDER = "gemini"
    API_KEY_VAR = EnvVar.GEMINI_API_KEY
    DEFAULT_MODEL_NAME = DEFAULT_GEMINI_MODEL.spec.name


__all__ = ["GeminiBackend"]
