"""MCP (Model Context Protocol) server for compareui.

This module provides the MCP server implementation that exposes component
configuration and multi-library code generation to LLM clients like
Claude Desktop.

Example:
    # Start server in STDIO mode (for Claude Desktop)
    >>> from compareui.mcp.server import run_server
    >>> run_server()

    # Start server in HTTP mode
    >>> from compareui.mcp.server import run_server, TransportType
    >>> run_server(transport=TransportType.HTTP, port=5001)

Available Tools:
    - generate_config: Modify a component configuration from natural language
    - generate_code: Generate React code for several UI libraries
    - list_components: Configurable component kinds and UI libraries
    - describe_component: Fields, JSON Schema and example for one kind
    - status: Dependency health
    - list_models: Known and configured LLM models
"""

from .lib import (
    ServerConfig,
    TransportType,
    get_server_capabilities,
    get_server_version,
)

# Conditionally import server module (requires fastmcp)
try:
    from .server import create_server, mcp, run_server

    _FASTMCP_AVAILABLE = True
except ImportError:
    create_server = None  # type: ignore[assignment,misc]
    mcp = None  # type: ignore[assignment]
    run_server = None  # type: ignore[assignment]
    _FASTMCP_AVAILABLE = False

__all__ = [
    # Server instance (requires fastmcp)
    "mcp",
    "create_server",
    "run_server",
    # Configuration
    "ServerConfig",
    "TransportType",
    # Utilities
    "get_server_version",
    "get_server_capabilities",
]
