"""Pytest fixtures for MCP server tests.

This module provides:
- FASTMCP_AVAILABLE check for graceful degradation
- Automatic skipping of MCP tests when fastmcp not installed
- A scripted backend installed in place of the configured LLM
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest

from compareui.llm import LLMBackend, LLMResponse

# Check if fastmcp is available
try:
    from fastmcp import Client  # noqa: F401

    FASTMCP_AVAILABLE = True
except ImportError:
    FASTMCP_AVAILABLE = False

if TYPE_CHECKING:
    from fastmcp import FastMCP


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    """Skip tests marked with @pytest.mark.mcp when fastmcp is missing."""
    if not FASTMCP_AVAILABLE:
        skip_mcp = pytest.mark.skip(reason="fastmcp not installed")
        for item in items:
            # Check the marker, not the keyword: the package name is also a keyword
            if item.get_closest_marker("mcp") is not None:
                item.add_marker(skip_mcp)


# =============================================================================
# Server Fixtures
# =============================================================================


@pytest.fixture
def mcp_server() -> FastMCP:
    """MCP server instance for testing."""
    if not FASTMCP_AVAILABLE:
        pytest.skip("fastmcp not installed")

    from .server import create_server

    return create_server()


# =============================================================================
# Generation Fixtures
# =============================================================================


@pytest.fixture
def scripted_backend(monkeypatch):
    """Factory fixture installing a backend that replays `responses`.

    Dict responses are serialized to JSON. Returns the backend mock so tests
    can inspect `generate.call_args_list`.
    """

    def install(*responses: str | dict[str, Any]) -> MagicMock:
        backend = MagicMock(spec=LLMBackend)
        backend.name = "mock:scripted"
        backend.generate.side_effect = [
            LLMResponse(
                content=r if isinstance(r, str) else json.dumps(r),
                finish_reason="stop",
                usage={},
                model="scripted",
            )
            for r in responses
        ]
        monkeypatch.setattr(
            "compareui.mcp.tools.generate.create_llm_backend",
            lambda *args, **kwargs: backend,
        )
        return backend

    return install


@pytest.fixture
def audit_recorder(monkeypatch) -> MagicMock:
    """Replace the global audit recorder so tests never touch disk."""
    recorder = MagicMock()
    monkeypatch.setattr(
        "compareui.mcp.tools.generate.get_audit_recorder", lambda: recorder
    )
    return recorder


@pytest.fixture
def compile_ok(monkeypatch):
    """Make every Babel compilation succeed without Node."""
    from compareui.compiler import BabelFrontend, CompileResult

    monkeypatch.setattr(BabelFrontend, "compile", lambda self, source: CompileResult(ok=True))
