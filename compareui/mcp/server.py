"""FastMCP server instance for compareui.

This module provides the MCP server that exposes component generation
tools to LLM clients. The API follows the comparison workflow:

    1. list_components / describe_component: discover kinds and schemas
    2. generate_config: intent + current config -> validated config
    3. generate_code: intent -> compiling source per UI library

Usage:
    # STDIO mode (for Claude Desktop)
    python -m compareui.mcp.server

    # HTTP mode (for web deployment)
    python -m compareui.mcp.server --transport http --port 5001

    # Via CLI
    python . mcp run
    python . mcp serve --port 5001
"""

import argparse
import json
import logging
import sys
from functools import lru_cache
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from compareui.compiler import CompilerUnavailableError
from compareui.llm import AuthenticationError

from .lib import (
    SERVER_NAME,
    TransportType,
    get_server_version,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Validation Helpers (Internal)
# =============================================================================


def _validate_temperature(temperature: float | None) -> None:
    """Validate temperature parameter."""
    if temperature is not None and not 0.0 <= temperature <= 2.0:
        raise ToolError(f"Temperature must be 0.0-2.0, got {temperature}")


# Caller and environment faults. Exhausted attempts are a normal payload.
_CALLER_ERRORS = (ValueError, AuthenticationError, CompilerUnavailableError)


# =============================================================================
# Server Instructions (LLM Guidance)
# =============================================================================

SERVER_INSTRUCTIONS = """\
## compareui MCP Server

Generates validated UI component configurations and multi-library React
code from natural language.

### Workflow
1. `list_components()` to see the configurable component kinds.
2. `describe_component(kind)` for the fields, constraints and an example.
3. `generate_config(kind, intent, current_state)` to apply a change. Pass
   the full current configuration; unchanged fields are kept.
4. `generate_code(intent, providers=["mui", "chakra"])` for source code
   per UI library. Every provider's code is checked with Babel.

### Results
- `success: true` with `config` and `attempts` when a valid result was
  produced.
- `success: false` with `error`, `lastError` and `attempts` when every
  attempt failed validation. Rephrase the intent and try again.

Colors must be 6-digit hex codes such as #00FF00.
Call `status()` first if unsure whether an LLM is configured.
"""

mcp = FastMCP(name=SERVER_NAME, instructions=SERVER_INSTRUCTIONS)


# =============================================================================
# Generation Tools
# =============================================================================


@mcp.tool
def generate_config(
    kind: str,
    intent: str,
    current_state: dict[str, Any] | None = None,
    model: str | None = None,
    temperature: float | None = None,
) -> dict[str, Any]:
    """Modify a UI component configuration from a natural language request.

    This is the primary tool. The result is validated against the
    component's schema; invalid LLM output is repaired automatically.

    Args:
        kind: Component kind. One of: button, icon-button, accordion,
            input, select, radio, card, modal, tabs, progress.
        intent: What to change.
            Examples:
            - "make the bar green"
            - "add an option called Germany"
            - "use a larger, rounded outlined button"
        current_state: The current configuration (from a previous call or
            describe_component's example). Default: empty.
        model: LLM model to use (optional, uses default if not specified).
        temperature: Creativity level 0.0-2.0 (optional).

    Returns:
        Dictionary with:
        - success: Whether a valid configuration was produced
        - config: The new configuration (on success)
        - attempts: Number of attempts used
        - error, lastError: Failure summary and final validation errors

    Example workflow:
        1. describe_component("progress") -> take "example"
        2. generate_config("progress", "make the bar green", example)
        3. generate_config("progress", "thicker track", result["config"])
    """
    _validate_temperature(temperature)

    from .tools.generate import generate_config as _generate

    try:
        return _generate(
            kind=kind,
            intent=intent,
            current_state=current_state,
            model=model,
            temperature=temperature,
        )
    except _CALLER_ERRORS as e:
        raise ToolError(str(e)) from e


@mcp.tool
def generate_code(
    intent: str,
    providers: list[str] | None = None,
    current_state: str | dict[str, str] | None = None,
    model: str | None = None,
    temperature: float | None = None,
) -> dict[str, Any]:
    """Generate a React component for several UI libraries at once.

    Use this when the user wants to COMPARE how a component looks across
    libraries. Each library's code must compile and may only use that
    library's allowed components.

    Args:
        intent: What to build, e.g. "a login card with email field and button".
        providers: UI libraries to target: "mui", "chakra", "antd",
            "shadcn". Default: ["mui"]
        current_state: Existing code to modify, either one source string or
            a mapping of provider id to source (optional).
        model: LLM model to use (optional).
        temperature: Creativity level 0.0-2.0 (optional).

    Returns:
        Dictionary with:
        - success: Whether every provider's code compiled
        - config: Mapping of provider id to source code (on success)
        - attempts: Number of attempts used
        - error, lastError: Failure summary and per-provider diagnostics

    Note: Requires Node.js with Babel (`python . dev compiler install`).
    """
    _validate_temperature(temperature)

    from .tools.generate import generate_code as _generate

    try:
        return _generate(
            intent=intent,
            current_state=current_state,
            providers=providers or ["mui"],
            model=model,
            temperature=temperature,
        )
    except _CALLER_ERRORS as e:
        raise ToolError(str(e)) from e


# =============================================================================
# Discovery Tools
# =============================================================================


@mcp.tool
def list_components() -> dict[str, Any]:
    """List the component kinds generate_config accepts.

    Returns:
        Dictionary with:
        - kinds: Component kinds with display name and required fields
        - providers: UI libraries generate_code accepts
    """
    from compareui.providers import get_provider, list_providers
    from compareui.schema import list_config_kinds, schema_for

    kinds = []
    for kind in list_config_kinds():
        schema = schema_for(kind)
        kinds.append(
            {
                "kind": kind.value,
                "title": schema.display_name,
                "required_fields": schema.required_fields(),
            }
        )

    providers = [
        {"id": p, "name": get_provider(p).display_name, "import_path": get_provider(p).import_path}
        for p in list_providers()
    ]
    return {"kinds": kinds, "providers": providers}


@mcp.tool
def describe_component(kind: str) -> dict[str, Any]:
    """Describe one component kind's configuration.

    Args:
        kind: Component kind, e.g. "select".

    Returns:
        Dictionary with:
        - kind: The resolved kind
        - description: Field list and constraints as text
        - json_schema: JSON Schema for the configuration
        - example: A valid configuration to start from
    """
    from compareui.schema import describe, example_valid, export_json_schema, schema_for

    try:
        schema = schema_for(kind)
    except ValueError as e:
        raise ToolError(str(e)) from e

    return {
        "kind": schema.kind.value,
        "title": schema.display_name,
        "description": describe(schema.kind),
        "json_schema": export_json_schema(schema.kind),
        "example": example_valid(schema.kind),
    }


# =============================================================================
# Status Tools
# =============================================================================


@mcp.tool
def status() -> dict[str, Any]:
    """Check server health and dependency status.

    Use this FIRST to verify the server is ready before generating.

    Returns:
        Dictionary with:
        - status: "healthy", "degraded", or "unhealthy"
        - version: Server version
        - capabilities: Which tools will work
            - generate_config: True if an LLM provider is configured
            - generate_code: True if an LLM and Babel are available
        - services: Detailed status of each dependency
        - action_required: What to fix if degraded/unhealthy
    """
    from .health import HealthStatus, get_required_actions, get_server_health

    health = get_server_health()
    result = health.to_dict()

    actions = get_required_actions(health)
    if actions:
        result["action_required"] = actions

    if health.status == HealthStatus.HEALTHY:
        next_steps = [
            "Ready! Call list_components() to see what can be generated.",
            "Example: generate_config('progress', 'make the bar green', {...})",
        ]
    elif health.can_generate_config:
        next_steps = [
            "Config generation available. generate_code needs Babel.",
            "Call generate_config(kind, intent, current_state).",
        ]
    else:
        next_steps = [
            "Server not ready. Review action_required items above.",
            "Most common: Set GEMINI_API_KEY in .env file.",
        ]
    result["next_steps"] = next_steps

    return result


@mcp.tool
def list_models() -> dict[str, Any]:
    """List LLM models usable with generate_config(model='...').

    Returns:
        Dictionary with:
        - available: Configured provider names
        - default: The model used if none is specified
        - models: Known model names grouped by provider
    """
    from compareui.config import get_available_llm_providers, get_default_llm_model
    from compareui.llm import LLMModel

    models: dict[str, list[str]] = {}
    for model in LLMModel:
        models.setdefault(model.spec.provider.value, []).append(model.spec.name)

    return {
        "available": get_available_llm_providers(),
        "default": get_default_llm_model(),
        "models": models,
    }


# =============================================================================
# Resources (Schema Reference)
# =============================================================================


@lru_cache(maxsize=1)
def _cached_component_schemas() -> str:
    """Cached JSON Schema export for every config kind."""
    from compareui.schema import export_json_schema, list_config_kinds

    schemas = {kind.value: export_json_schema(kind) for kind in list_config_kinds()}
    return json.dumps(schemas, indent=2)


@mcp.resource("schema://components")
def get_component_schemas() -> str:
    """Get JSON Schemas for all component configuration kinds."""
    return _cached_component_schemas()


# =============================================================================
# Server Factory & Runner
# =============================================================================


def create_server() -> FastMCP:
    """Create and configure the MCP server instance."""
    return mcp


def run_server(
    transport: TransportType = TransportType.STDIO,
    host: str = "0.0.0.0",
    port: int = 5001,
) -> None:
    """Run the MCP server with specified transport.

    Args:
        transport: Transport type (stdio, http, sse).
        host: Bind address for HTTP/SSE.
        port: Port for HTTP/SSE.
    """
    from compareui.history import close_history_manager

    from .health import log_startup_status

    logger.info(f"Starting compareui server v{get_server_version()}")
    logger.info(f"Transport: {transport.value}")

    log_startup_status()

    try:
        if transport == TransportType.STDIO:
            logger.info("Running in STDIO mode (for Claude Desktop)")
            mcp.run()
        elif transport == TransportType.HTTP:
            logger.info(f"Running in HTTP mode at http://{host}:{port}/mcp")
            mcp.run(transport="http", host=host, port=port, path="/mcp")
        elif transport == TransportType.SSE:
            logger.info(f"Running in SSE mode at http://{host}:{port}")
            mcp.run(transport="sse", host=host, port=port)
        else:
            raise ValueError(f"Unknown transport: {transport}")
    finally:
        close_history_manager()


# =============================================================================
# CLI Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for MCP server.

    Args:
        argv: Command line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 for success).
    """
    from .lib import ServerConfig

    defaults = ServerConfig.from_env()

    parser = argparse.ArgumentParser(
        prog="compareui-mcp",
        description="MCP server for validated UI component generation",
    )
    parser.add_argument(
        "--transport",
        "-t",
        type=str,
        choices=["stdio", "http", "sse"],
        default="stdio",
        help="Transport type (default: stdio)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=defaults.host,
        help=f"Bind address for HTTP/SSE (default: {defaults.host})",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=defaults.port,
        help=f"Port for HTTP/SSE (default: {defaults.port})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    from compareui.core.log import setup_logging

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, stream=sys.stderr)

    try:
        run_server(
            transport=TransportType(args.transport),
            host=args.host,
            port=args.port,
        )
        return 0
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except Exception as e:
        logger.error(f"Server error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
