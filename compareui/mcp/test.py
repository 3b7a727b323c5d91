"""Unit tests for MCP server module.

Tests cover:
- Server configuration
- Tool registration
- Tool calls over an in-memory client
- CLI argument handling
"""

import asyncio
import json
from typing import Any
from unittest.mock import patch

import pytest

from compareui.schema import example_valid, list_config_kinds

from .lib import (
    ServerConfig,
    TransportType,
    get_server_capabilities,
    get_server_version,
)

# Conditionally import server module (requires fastmcp)
try:
    from fastmcp import Client
    from fastmcp.exceptions import ToolError

    from .server import create_server, main, mcp

    FASTMCP_AVAILABLE = True
except ImportError:
    create_server = None  # type: ignore[assignment,misc]
    mcp = None  # type: ignore[assignment]
    FASTMCP_AVAILABLE = False

requires_fastmcp = pytest.mark.skipif(
    not FASTMCP_AVAILABLE,
    reason="fastmcp not installed",
)


def call_tool(name: str, arguments: dict[str, Any] | None = None) -> Any:
    """Call a tool through an in-memory client and return its structured result."""

    async def _call():
        async with Client(mcp) as client:
            result = await client.call_tool(name, arguments or {})
            return result.structured_content

    return asyncio.run(_call())


# =============================================================================
# Configuration Tests
# =============================================================================


class TestServerConfig:
    """Tests for ServerConfig dataclass."""

    @pytest.mark.unit
    def test_default_config(self):
        config = ServerConfig()

        assert config.name == "compareui"
        assert config.transport == TransportType.STDIO
        assert config.host == "0.0.0.0"
        assert config.port == 5001
        assert config.path == "/mcp"

    @pytest.mark.unit
    def test_from_env(self, monkeypatch):
        """from_env reads MCP_HOST and MCP_PORT."""
        monkeypatch.setenv("MCP_HOST", "127.0.0.1")
        monkeypatch.setenv("MCP_PORT", "9000")

        config = ServerConfig.from_env(transport=TransportType.HTTP)

        assert config.host == "127.0.0.1"
        assert config.port == 9000
        assert config.transport == TransportType.HTTP


class TestTransportType:
    """Tests for TransportType enum."""

    @pytest.mark.unit
    def test_transport_from_string(self):
        assert TransportType("stdio") == TransportType.STDIO
        assert TransportType("http") == TransportType.HTTP
        assert TransportType("sse") == TransportType.SSE


class TestServerUtilities:
    """Tests for server utility functions."""

    @pytest.mark.unit
    def test_get_server_version(self):
        assert len(get_server_version().split(".")) >= 2

    @pytest.mark.unit
    def test_get_server_capabilities(self):
        caps = get_server_capabilities()
        assert caps["tools"] is True
        assert caps["resources"] is True


# =============================================================================
# Server Instance Tests
# =============================================================================


@requires_fastmcp
class TestServerInstance:
    """Tests for FastMCP server instance."""

    @pytest.mark.unit
    def test_create_server_returns_mcp(self):
        assert create_server() is mcp

    @pytest.mark.unit
    def test_server_has_name(self):
        assert mcp.name == "compareui"

    @pytest.mark.unit
    def test_tools_registered(self):
        """Exactly the generation, discovery and status tools are exposed."""
        tools = asyncio.run(mcp.get_tools())

        assert set(tools) == {
            "generate_config",
            "generate_code",
            "list_components",
            "describe_component",
            "status",
            "list_models",
        }


# =============================================================================
# Tool Call Tests
# =============================================================================


@requires_fastmcp
class TestDiscoveryTools:
    """Tests for list_components and describe_component."""

    @pytest.mark.unit
    def test_list_components(self):
        result = call_tool("list_components")

        kinds = [entry["kind"] for entry in result["kinds"]]
        assert kinds == [k.value for k in list_config_kinds()]
        assert "playground" not in kinds
        assert [p["id"] for p in result["providers"]] == ["mui", "chakra", "antd", "shadcn"]

    @pytest.mark.unit
    def test_describe_component(self):
        result = call_tool("describe_component", {"kind": "select"})

        assert result["kind"] == "select"
        assert result["example"] == example_valid("select")
        assert result["json_schema"]["type"] == "object"
        assert "options" in result["description"]

    @pytest.mark.unit
    def test_describe_unknown_kind(self):
        with pytest.raises(ToolError, match="Unsupported artifact kind"):
            call_tool("describe_component", {"kind": "carousel"})

    @pytest.mark.unit
    def test_component_schema_resource(self):
        async def _read():
            async with Client(mcp) as client:
                return await client.read_resource("schema://components")

        contents = asyncio.run(_read())
        schemas = json.loads(contents[0].text)
        assert set(schemas) == {k.value for k in list_config_kinds()}


@requires_fastmcp
class TestGenerationTools:
    """Tests for generate_config and generate_code over the protocol."""

    @pytest.mark.unit
    def test_generate_config(self, scripted_backend, audit_recorder):
        state = example_valid("progress")
        green = example_valid("progress")
        green["styles"]["indicatorColor"] = "#00FF00"
        scripted_backend(green)

        result = call_tool(
            "generate_config",
            {"kind": "progress", "intent": "make the bar green", "current_state": state},
        )

        assert result == {"success": True, "config": green, "attempts": 1}

    @pytest.mark.unit
    def test_exhausted_is_a_payload(self, scripted_backend, audit_recorder, monkeypatch):
        monkeypatch.setenv("COMPAREUI_MAX_ATTEMPTS", "1")
        scripted_backend("no json here")

        result = call_tool("generate_config", {"kind": "progress", "intent": "green bar"})

        assert result["success"] is False
        assert result["attempts"] == 1
        assert result["lastError"].startswith("Failed to parse JSON response")

    @pytest.mark.unit
    def test_unknown_kind_is_a_tool_error(self, scripted_backend, audit_recorder):
        scripted_backend({})
        with pytest.raises(ToolError, match="Unsupported artifact kind"):
            call_tool("generate_config", {"kind": "carousel", "intent": "add slides"})

    @pytest.mark.unit
    def test_invalid_temperature(self):
        with pytest.raises(ToolError, match="Temperature must be 0.0-2.0"):
            call_tool(
                "generate_config",
                {"kind": "progress", "intent": "green", "temperature": 3.0},
            )

    @pytest.mark.unit
    def test_unknown_provider_is_a_tool_error(self, scripted_backend, audit_recorder):
        scripted_backend({})
        with pytest.raises(ToolError, match="Unknown provider 'vue'"):
            call_tool("generate_code", {"intent": "a card", "providers": ["vue"]})

    @pytest.mark.unit
    def test_no_backend_is_a_tool_error(self, monkeypatch):
        for var in ("LLM_MODEL", "GEMINI_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY"):
            monkeypatch.delenv(var, raising=False)
        with pytest.raises(ToolError, match="No LLM configured"):
            call_tool("generate_config", {"kind": "progress", "intent": "green"})


@requires_fastmcp
class TestStatusTools:
    """Tests for status and list_models."""

    @pytest.mark.unit
    def test_status_reports_actions(self):
        from .health import ServiceStatus

        down = ServiceStatus(available=False, message="down")
        with (
            patch("compareui.mcp.health.check_llm_providers", return_value=down),
            patch("compareui.mcp.health.check_compiler", return_value=down),
            patch("compareui.mcp.health.check_history_db", return_value=down),
        ):
            result = call_tool("status")

        assert result["status"] == "unhealthy"
        assert len(result["action_required"]) == 2
        assert result["next_steps"]

    @pytest.mark.unit
    def test_list_models(self):
        with patch("compareui.config.get_available_llm_providers", return_value=[]):
            result = call_tool("list_models")

        assert "gemini-2.5-flash" in result["models"]["gemini"]
        assert "claude-sonnet-4-5" in result["models"]["anthropic"]
        assert result["available"] == []


# =============================================================================
# CLI Tests
# =============================================================================


@requires_fastmcp
class TestMain:
    """Tests for the server CLI entry point."""

    @pytest.mark.unit
    def test_http_arguments(self):
        with patch("compareui.mcp.server.run_server") as run:
            assert main(["--transport", "http", "--port", "9001"]) == 0

        kwargs = run.call_args.kwargs
        assert kwargs["transport"] == TransportType.HTTP
        assert kwargs["port"] == 9001

    @pytest.mark.unit
    def test_server_error_exit_code(self):
        with patch("compareui.mcp.server.run_server", side_effect=OSError("port in use")):
            assert main([]) == 1
