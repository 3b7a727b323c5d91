"""LLM module test fixtures."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

import pytest

from compareui.llm.backend.base import GenerationConfig, LLMBackend, LLMResponse
from compareui.schema import example_valid

# =============================================================================
# Mock LLM Backend
# =============================================================================


class MockLLMBackend(LLMBackend):
    """Scripted backend for testing without API keys.

    Each call to `generate` consumes the next scripted entry. Strings are
    returned as response content, dicts are serialized to JSON, exceptions
    are raised. The last entry repeats once the script runs out.

    Attributes:
        prompts: Every prompt received, in call order.
    """

    def __init__(self, responses: Iterable[str | dict[str, Any] | Exception]):
        self._responses = list(responses)
        if not self._responses:
            raise ValueError("MockLLMBackend needs at least one scripted response")
        self.prompts: list[str] = []
        self.configs: list[GenerationConfig | None] = []

    @property
    def model_name(self) -> str:
        return "mock-model-v1"

    @property
    def provider(self) -> str:
        return "mock"

    @property
    def supports_json_mode(self) -> bool:
        return True

    @property
    def context_window(self) -> int:
        return 4096

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        config: GenerationConfig | None = None,
    ) -> LLMResponse:
        index = min(len(self.prompts), len(self._responses) - 1)
        self.prompts.append(prompt)
        self.configs.append(config)

        entry = self._responses[index]
        if isinstance(entry, Exception):
            raise entry
        content = entry if isinstance(entry, str) else json.dumps(entry)
        return LLMResponse(
            content=content,
            finish_reason="stop",
            usage={"total_tokens": 100},
            model=self.model_name,
        )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_llm_backend():
    """Factory fixture: `mock_llm_backend([...responses])`."""
    return MockLLMBackend


@pytest.fixture
def progress_state() -> dict[str, Any]:
    """Progress configuration used by the 'make the bar green' scenario."""
    return example_valid("progress")
