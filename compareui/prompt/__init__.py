"""Prompt building module for LLM interactions.

Provides PromptBuilder for constructing configuration prompts (schema
description, current state, intent, retry feedback) and multi-provider
playground prompts.
"""

from compareui.prompt.lib import (
    CONFIG_INSTRUCTIONS,
    FEEDBACK_HEADER,
    PlaygroundCode,
    PromptBuilder,
    PromptConfig,
    PromptContext,
)

__all__ = [
    "CONFIG_INSTRUCTIONS",
    "FEEDBACK_HEADER",
    "PlaygroundCode",
    "PromptBuilder",
    "PromptConfig",
    "PromptContext",
]
