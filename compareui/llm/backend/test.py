"""Tests for LLM backend implementations."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from .anthropic import JSON_ONLY_SUFFIX, AnthropicBackend
from .base import (
    AuthenticationError,
    BackendError,
    ContextLengthError,
    GenerationConfig,
    LLMResponse,
    RateLimitError,
    classify_error,
)
from .factory import create_llm_backend
from .gemini import GeminiBackend
from .model_spec import (
    GEMINI_OPENAI_BASE_URL,
    LLMCapability,
    LLMModel,
    LLMProviderType,
    LLMSpec,
    get_llm_spec,
)
from .ollama import OllamaBackend
from .openai import OpenAIBackend


@pytest.fixture
def no_api_keys(monkeypatch):
    for var in ("GEMINI_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY", "LLM_MODEL"):
        monkeypatch.delenv(var, raising=False)


def _chat_completion(content: str, finish_reason: str = "stop"):
    return SimpleNamespace(
        choices=[
            SimpleNamespace(
                message=SimpleNamespace(content=content), finish_reason=finish_reason
            )
        ],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5, total_tokens=15),
        model="gemini-2.5-flash",
    )


class TestLLMSpec:
    """Tests for LLMSpec dataclass."""

    @pytest.mark.unit
    def test_spec_capabilities(self):
        spec = LLMSpec(
            name="test",
            provider=LLMProviderType.OPENAI,
            context_window=128000,
            max_output_tokens=4096,
            capabilities=frozenset({LLMCapability.JSON_MODE}),
        )
        assert spec.supports(LLMCapability.JSON_MODE)
        assert not spec.supports(LLMCapability.SEED)

    @pytest.mark.unit
    def test_spec_is_local(self):
        assert LLMModel.OLLAMA_QWEN3.spec.is_local
        assert LLMModel.GEMINI_2_5_FLASH.spec.is_remote


class TestLLMModel:
    """Tests for LLMModel enum registry."""

    @pytest.mark.unit
    def test_gemini_models_use_compatible_endpoint(self):
        for model in LLMModel.list_by_provider(LLMProviderType.GEMINI):
            assert model.spec.base_url == GEMINI_OPENAI_BASE_URL
            assert model.spec.api_key_env_var == "GEMINI_API_KEY"

    @pytest.mark.unit
    def test_by_name_lookup(self):
        assert LLMModel.by_name("gemini-2.5-flash") == LLMModel.GEMINI_2_5_FLASH
        assert LLMModel.by_name("nonexistent") is None

    @pytest.mark.unit
    def test_every_provider_has_models(self):
        for provider in LLMProviderType:
            assert LLMModel.list_by_provider(provider)


class TestGetLLMSpec:
    """Tests for get_llm_spec function."""

    @pytest.mark.unit
    def test_resolution(self):
        spec = LLMModel.GPT_4_1.spec
        assert get_llm_spec("gpt-4.1") is spec
        assert get_llm_spec(LLMModel.GPT_4_1) is spec
        assert get_llm_spec(spec) is spec

    @pytest.mark.unit
    def test_unknown_model_raises(self):
        with pytest.raises(ValueError, match="Unknown model"):
            get_llm_spec("not-a-real-model")


class TestGenerationConfig:
    """Tests for GenerationConfig dataclass."""

    @pytest.mark.unit
    def test_defaults(self):
        config = GenerationConfig()
        assert config.temperature == 0.7
        assert config.max_tokens == 4096
        assert config.json_mode is True
        assert config.stop_sequences == []
        assert config.seed is None


class TestClassifyError:
    """Provider exception classification."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "message, expected",
        [
            ("Rate limit reached for requests", RateLimitError),
            ("429 RESOURCE_EXHAUSTED: quota exceeded", RateLimitError),
            ("This model's maximum context length is 8192 tokens", ContextLengthError),
            ("API key not valid. Please pass a valid API key.", AuthenticationError),
            ("Connection reset by peer", BackendError),
        ],
    )
    def test_classification(self, message, expected):
        error = classify_error(RuntimeError(message))
        assert type(error) is expected
        assert str(error) == message


class TestOpenAIBackend:
    """Tests for OpenAI backend."""

    @pytest.mark.unit
    def test_requires_api_key(self, no_api_keys):
        with pytest.raises(AuthenticationError, match="OPENAI_API_KEY"):
            OpenAIBackend()

    @pytest.mark.unit
    def test_creates_with_api_key(self):
        backend = OpenAIBackend(api_key="test-key-12345")
        assert backend.provider == "openai"
        assert backend.model_name == "gpt-4.1-mini"
        assert backend.supports_json_mode is True
        assert backend.name == "openai:gpt-4.1-mini"

    @pytest.mark.unit
    def test_generate_request(self):
        backend = OpenAIBackend(api_key="k")
        backend._client = MagicMock()
        backend._client.chat.completions.create.return_value = _chat_completion('{"a": 1}')

        result = backend.generate(
            "prompt text",
            system_prompt="be terse",
            config=GenerationConfig(temperature=0.2, seed=7),
        )

        assert result.content == '{"a": 1}'
        assert result.usage["total_tokens"] == 15
        kwargs = backend._client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"] == [
            {"role": "system", "content": "be terse"},
            {"role": "user", "content": "prompt text"},
        ]
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["temperature"] == 0.2
        assert kwargs["seed"] == 7

    @pytest.mark.unit
    def test_generate_maps_errors(self):
        backend = OpenAIBackend(api_key="k")
        backend._client = MagicMock()
        backend._client.chat.completions.create.side_effect = RuntimeError(
            "Rate limit exceeded"
        )
        with pytest.raises(RateLimitError):
            backend.generate("prompt")


class TestGeminiBackend:
    """Tests for Gemini backend."""

    @pytest.mark.unit
    def test_requires_api_key(self, no_api_keys):
        with pytest.raises(AuthenticationError, match="GEMINI_API_KEY"):
            GeminiBackend()

    @pytest.mark.unit
    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        backend = GeminiBackend()
        assert backend.name == "gemini:gemini-2.5-flash"
        assert backend._api_key == "env-key"
        assert backend._base_url == GEMINI_OPENAI_BASE_URL

    @pytest.mark.unit
    def test_seed_not_sent(self):
        backend = GeminiBackend(api_key="k")
        backend._client = MagicMock()
        backend._client.chat.completions.create.return_value = _chat_completion("{}")
        backend.generate("p", config=GenerationConfig(seed=3))
        assert "seed" not in backend._client.chat.completions.create.call_args.kwargs


class TestAnthropicBackend:
    """Tests for Anthropic backend."""

    @pytest.mark.unit
    def test_requires_api_key(self, no_api_keys):
        with pytest.raises(AuthenticationError, match="ANTHROPIC_API_KEY"):
            AnthropicBackend()

    @pytest.mark.unit
    def test_json_mode_appends_instruction(self):
        backend = AnthropicBackend(api_key="k")
        backend._client = MagicMock()
        backend._client.messages.create.return_value = SimpleNamespace(
            content=[SimpleNamespace(type="text", text='{"ok": true}')],
            stop_reason="end_turn",
            usage=SimpleNamespace(input_tokens=4, output_tokens=2),
            model="claude-sonnet-4-5",
        )

        result = backend.generate("prompt", system_prompt="sys")

        kwargs = backend._client.messages.create.call_args.kwargs
        assert kwargs["messages"][0]["content"].endswith(JSON_ONLY_SUFFIX)
        assert kwargs["system"] == "sys"
        assert result == LLMResponse(
            content='{"ok": true}',
            finish_reason="end_turn",
            usage={"prompt_tokens": 4, "completion_tokens": 2, "total_tokens": 6},
            model="claude-sonnet-4-5",
            raw_response=backend._client.messages.create.return_value,
        )


class TestOllamaBackend:
    """Tests for Ollama backend."""

    @pytest.mark.unit
    def test_no_api_key_required(self, no_api_keys, monkeypatch):
        monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434")
        backend = OllamaBackend()
        assert backend.provider == "ollama"
        assert backend._base_url == "http://gpu-box:11434"

    @pytest.mark.unit
    def test_generate(self):
        backend = OllamaBackend(model="qwen3")
        backend._client = MagicMock()
        backend._client.chat.return_value = {
            "message": {"content": "{}"},
            "prompt_eval_count": 3,
            "eval_count": 1,
        }
        result = backend.generate("p")
        assert result.content == "{}"
        assert result.usage["total_tokens"] == 4
        assert backend._client.chat.call_args.kwargs["format"] == "json"

    @pytest.mark.unit
    def test_connection_error(self):
        backend = OllamaBackend()
        backend._client = MagicMock()
        backend._client.chat.side_effect = ConnectionError("Connection refused")
        with pytest.raises(BackendError, match="Cannot connect to Ollama"):
            backend.generate("p")


class TestCreateLLMBackend:
    """Tests for create_llm_backend factory function."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "model, provider",
        [
            (LLMModel.GEMINI_2_5_PRO, "gemini"),
            (LLMModel.GPT_4_1, "openai"),
            (LLMModel.CLAUDE_HAIKU_4_5, "anthropic"),
        ],
    )
    def test_routes_by_provider(self, model, provider):
        backend = create_llm_backend(model, api_key="test-key")
        assert backend.provider == provider
        assert backend.model_name == model.spec.name

    @pytest.mark.unit
    def test_creates_ollama_backend(self):
        backend = create_llm_backend(LLMModel.OLLAMA_QWEN3)
        assert backend.provider == "ollama"

    @pytest.mark.unit
    def test_default_from_environment(self, no_api_keys, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert create_llm_backend().name == "openai:gpt-4.1-mini"

    @pytest.mark.unit
    def test_explicit_model_env(self, no_api_keys, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "g")
        monkeypatch.setenv("LLM_MODEL", "gemini-2.5-pro")
        assert create_llm_backend().model_name == "gemini-2.5-pro"

    @pytest.mark.unit
    def test_nothing_configured(self, no_api_keys):
        with pytest.raises(AuthenticationError, match="No LLM configured"):
            create_llm_backend()
