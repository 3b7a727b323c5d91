"""Tests for configuration management."""

from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_babel_dir,
    get_default_llm_model,
    get_environment,
    get_environment_info,
    get_history_db_path,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("COMPAREUI_MAX_ATTEMPTS", raising=False)
        result = get_environment(EnvVar.MAX_ATTEMPTS)
        assert result == 5

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("COMPAREUI_MAX_ATTEMPTS", "9")
        result = get_environment(EnvVar.MAX_ATTEMPTS, override=2)
        assert result == 2

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("COMPAREUI_MAX_ATTEMPTS", "3")
        result = get_environment(EnvVar.MAX_ATTEMPTS)
        assert result == 3

    @pytest.mark.unit
    def test_int_type_conversion(self, monkeypatch):
        """Integer type conversion from string."""
        monkeypatch.setenv("MCP_PORT", "8080")
        result = get_environment(EnvVar.MCP_PORT)
        assert result == 8080
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_float_type_conversion(self, monkeypatch):
        """Float type conversion from string."""
        monkeypatch.setenv("COMPAREUI_TEMPERATURE", "0.25")
        result = get_environment(EnvVar.TEMPERATURE)
        assert result == pytest.approx(0.25)
        assert isinstance(result, float)

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch, tmp_path):
        """Path type conversion from string."""
        monkeypatch.setenv("COMPAREUI_HISTORY_DB", str(tmp_path / "h.db"))
        result = get_environment(EnvVar.HISTORY_DB)
        assert result == tmp_path / "h.db"
        assert isinstance(result, Path)

    @pytest.mark.unit
    def test_string_type(self, monkeypatch):
        """String type returns as-is."""
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        result = get_environment(EnvVar.GEMINI_API_KEY)
        assert result == "test-key"
        assert isinstance(result, str)

    @pytest.mark.unit
    def test_none_default_for_api_keys(self, monkeypatch):
        """API keys default to None when not set."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        result = get_environment(EnvVar.OPENAI_API_KEY)
        assert result is None

    @pytest.mark.unit
    def test_invalid_int_returns_default(self, monkeypatch):
        """Invalid integer value returns default."""
        monkeypatch.setenv("COMPAREUI_MAX_ATTEMPTS", "not-a-number")
        result = get_environment(EnvVar.MAX_ATTEMPTS)
        assert result == 5

    @pytest.mark.unit
    def test_invalid_float_returns_default(self, monkeypatch):
        """Invalid float value returns default."""
        monkeypatch.setenv("COMPAREUI_COMPILE_TIMEOUT", "soon")
        result = get_environment(EnvVar.COMPILE_TIMEOUT)
        assert result == 30.0


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.MAX_ATTEMPTS)
        assert isinstance(info, EnvConfig)
        assert info.name == "COMPAREUI_MAX_ATTEMPTS"
        assert info.default == 5
        assert info.var_type is int
        assert info.category == "generation"

    @pytest.mark.unit
    def test_description_present(self):
        """Description field is populated."""
        info = get_environment_info(EnvVar.GEMINI_API_KEY)
        assert "Gemini" in info.description


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_returns_all_variables(self):
        """Returns all EnvVar members when no category."""
        result = list_environment_variables()
        assert len(result) == len(EnvVar)
        assert all(isinstance(v, EnvVar) for v in result)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Filters by category correctly."""
        compiler_vars = list_environment_variables("compiler")
        assert EnvVar.NODE_BINARY in compiler_vars
        assert EnvVar.BABEL_DIR in compiler_vars
        assert EnvVar.GEMINI_API_KEY not in compiler_vars

    @pytest.mark.unit
    def test_llm_category(self):
        """LLM category includes API keys."""
        llm_vars = list_environment_variables("llm")
        assert EnvVar.GEMINI_API_KEY in llm_vars
        assert EnvVar.ANTHROPIC_API_KEY in llm_vars


# =============================================================================
# Tests for convenience functions
# =============================================================================


class TestGetBabelDir:
    """Tests for Babel directory resolution."""

    @pytest.mark.unit
    def test_override_takes_priority(self, tmp_path, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("COMPAREUI_BABEL_DIR", str(tmp_path / "env"))
        result = get_babel_dir(tmp_path / "override")
        assert result == tmp_path / "override"

    @pytest.mark.unit
    def test_env_var_used(self, tmp_path, monkeypatch):
        """COMPAREUI_BABEL_DIR env var used when no override."""
        monkeypatch.setenv("COMPAREUI_BABEL_DIR", str(tmp_path))
        assert get_babel_dir() == tmp_path

    @pytest.mark.unit
    def test_default_is_bundled_script_dir(self, monkeypatch):
        """Default points at the bundled compiler scripts."""
        monkeypatch.delenv("COMPAREUI_BABEL_DIR", raising=False)
        result = get_babel_dir()
        assert result.name == "js"
        assert result.parent.name == "compiler"


class TestGetHistoryDbPath:
    """Tests for audit database path resolution."""

    @pytest.mark.unit
    def test_string_override(self, tmp_path):
        """Override parameter accepts string paths."""
        result = get_history_db_path(str(tmp_path / "x.db"))
        assert result == tmp_path / "x.db"

    @pytest.mark.unit
    def test_default_path(self, monkeypatch):
        """Default lives under data/history."""
        monkeypatch.delenv("COMPAREUI_HISTORY_DB", raising=False)
        assert get_history_db_path() == Path("data") / "history" / "prompts.db"


class TestGetDefaultLlmModel:
    """Tests for implicit model selection."""

    @pytest.fixture(autouse=True)
    def _clear_keys(self, monkeypatch):
        for name in ("LLM_MODEL", "GEMINI_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY"):
            monkeypatch.delenv(name, raising=False)

    @pytest.mark.unit
    def test_explicit_model_wins(self, monkeypatch):
        """LLM_MODEL is used verbatim."""
        monkeypatch.setenv("LLM_MODEL", "gpt-4.1")
        monkeypatch.setenv("GEMINI_API_KEY", "k")
        assert get_default_llm_model() == "gpt-4.1"

    @pytest.mark.unit
    def test_gemini_preferred(self, monkeypatch):
        """Gemini is picked first when its key is present."""
        monkeypatch.setenv("OPENAI_API_KEY", "k")
        monkeypatch.setenv("GEMINI_API_KEY", "k")
        assert get_default_llm_model() == "gemini-2.5-flash"

    @pytest.mark.unit
    def test_nothing_configured(self):
        """Returns None without keys or explicit model."""
        assert get_default_llm_model() is None
