"""Unit tests for health checking module."""

from unittest.mock import patch

import pytest

from . import health as health_module
from .health import (
    HealthStatus,
    ServerHealth,
    ServiceStatus,
    check_compiler,
    check_history_db,
    check_llm_providers,
    format_startup_banner,
    get_required_actions,
    get_server_health,
)

UP = ServiceStatus(available=True, message="up")
DOWN = ServiceStatus(available=False, message="down")


@pytest.fixture
def services(monkeypatch):
    """Set the result of each service check: services(llm, compiler, history)."""

    def install(llm: ServiceStatus, compiler: ServiceStatus, history: ServiceStatus = UP):
        monkeypatch.setattr(health_module, "check_llm_providers", lambda: llm)
        monkeypatch.setattr(health_module, "check_compiler", lambda: compiler)
        monkeypatch.setattr(health_module, "check_history_db", lambda: history)

    return install


@pytest.fixture
def history_db(monkeypatch, tmp_path):
    """Point the global history manager at a temporary database."""
    from compareui.history import close_history_manager

    close_history_manager()
    monkeypatch.setenv("COMPAREUI_HISTORY_DB", str(tmp_path / "prompts.db"))
    yield tmp_path / "prompts.db"
    close_history_manager()


class TestHealthStatus:
    """Tests for HealthStatus enum."""

    @pytest.mark.unit
    def test_status_values(self):
        assert HealthStatus.HEALTHY.value == "healthy"
        assert HealthStatus.DEGRADED.value == "degraded"
        assert HealthStatus.UNHEALTHY.value == "unhealthy"

    @pytest.mark.unit
    def test_status_is_string_enum(self):
        """HealthStatus inherits from str for JSON serialization."""
        assert isinstance(HealthStatus.HEALTHY, str)
        assert HealthStatus.HEALTHY == "healthy"


class TestServiceStatus:
    """Tests for ServiceStatus dataclass."""

    @pytest.mark.unit
    def test_to_dict_merges_details(self):
        status = ServiceStatus(available=True, message="ok", details={"node": "node"})
        assert status.to_dict() == {"available": True, "message": "ok", "node": "node"}

    @pytest.mark.unit
    def test_default_details(self):
        assert ServiceStatus(available=False).details == {}


class TestServiceChecks:
    """Tests for individual dependency checks."""

    @pytest.mark.unit
    def test_llm_providers_none(self):
        with patch("compareui.config.get_available_llm_providers", return_value=[]):
            status = check_llm_providers()
        assert status.available is False
        assert status.details["available_providers"] == []

    @pytest.mark.unit
    def test_llm_providers_configured(self, monkeypatch):
        monkeypatch.delenv("LLM_MODEL", raising=False)
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        with patch("compareui.config.get_available_llm_providers", return_value=["gemini"]):
            status = check_llm_providers()
        assert status.available is True
        assert status.details["default_model"] == "gemini-2.5-flash"

    @pytest.mark.unit
    def test_compiler_missing(self):
        with patch("compareui.compiler.BabelFrontend.is_available", return_value=False):
            status = check_compiler()
        assert status.available is False
        assert "dev compiler install" in status.message

    @pytest.mark.unit
    def test_compiler_ready(self):
        with patch("compareui.compiler.BabelFrontend.is_available", return_value=True):
            status = check_compiler()
        assert status.available is True
        assert "babel_dir" in status.details

    @pytest.mark.unit
    def test_history_db(self, history_db):
        status = check_history_db()
        assert status.available is True
        assert status.details["record_count"] == 0


class TestGetServerHealth:
    """Tests for overall status derivation."""

    @pytest.mark.unit
    def test_healthy(self, services):
        services(UP, UP)
        health = get_server_health()

        assert isinstance(health, ServerHealth)
        assert health.status == HealthStatus.HEALTHY
        assert health.can_generate_config and health.can_generate_code

    @pytest.mark.unit
    def test_degraded_without_compiler(self, services):
        services(UP, DOWN)
        health = get_server_health()

        assert health.status == HealthStatus.DEGRADED
        assert health.can_generate_config is True
        assert health.can_generate_code is False

    @pytest.mark.unit
    def test_unhealthy_without_llm(self, services):
        services(DOWN, UP)
        health = get_server_health()

        assert health.status == HealthStatus.UNHEALTHY
        assert health.can_generate_code is False

    @pytest.mark.unit
    def test_history_does_not_affect_status(self, services):
        services(UP, UP, DOWN)
        assert get_server_health().status == HealthStatus.HEALTHY

    @pytest.mark.unit
    def test_to_dict_format(self, services):
        services(UP, DOWN)
        result = get_server_health().to_dict()

        assert result["status"] == "degraded"
        assert set(result["services"]) == {"llm_providers", "compiler", "history_db"}
        assert result["capabilities"] == {"generate_config": True, "generate_code": False}
        for name, data in result["services"].items():
            assert "available" in data, f"{name} missing 'available'"
            assert "message" in data, f"{name} missing 'message'"

    @pytest.mark.unit
    def test_required_actions(self, services):
        services(DOWN, DOWN)
        actions = get_required_actions(get_server_health())
        assert len(actions) == 2
        assert any("GEMINI_API_KEY" in a for a in actions)
        assert any("dev compiler install" in a for a in actions)


class TestStartupBanner:
    """Tests for the startup banner."""

    @pytest.mark.unit
    def test_banner_lists_services(self, services):
        services(UP, DOWN)
        banner = format_startup_banner(get_server_health())

        assert "compareui MCP Server" in banner
        assert "DEGRADED" in banner
        assert "Compiler:" in banner
        assert "Action Required:" in banner

    @pytest.mark.unit
    def test_healthy_banner_has_no_actions(self, services):
        services(UP, UP)
        banner = format_startup_banner(get_server_health())
        assert "Action Required:" not in banner
