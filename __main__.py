"""CLI entry point for compareui.

This module acts as the central entry point for the project's CLI tools.
It delegates commands to the appropriate submodules or runs specific tasks.
"""

import argparse
import json
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from compareui.config import get_available_llm_providers, get_babel_dir
from compareui.core.log import get_logger, setup_logging

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


# =============================================================================
# Generate Command
# =============================================================================


def _load_state(args: argparse.Namespace) -> Any:
    """Read the starting state from --state or --state-file."""
    if args.state_file:
        text = args.state_file.read_text(encoding="utf-8")
    elif args.state:
        text = args.state
    else:
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        # Plain source code for the playground
        return text


def _create_generator(args: argparse.Namespace):
    """Build an ArtifactGenerator from CLI options, or None on bad input."""
    from compareui.llm import ArtifactGenerator, GeneratorConfig, LLMModel, create_llm_backend

    backend = None
    if args.model:
        model = LLMModel.by_name(args.model)
        if model is None:
            logger.error(f"Unknown model: {args.model}")
            logger.info("Available models:")
            for m in LLMModel:
                logger.info(f"  {m.spec.name}")
            return None
        backend = create_llm_backend(model, api_key=args.api_key)
    else:
        backend = create_llm_backend(api_key=args.api_key)

    overrides: dict[str, Any] = {}
    if args.temperature is not None:
        overrides["temperature"] = args.temperature
    if args.attempts is not None:
        overrides["max_attempts"] = args.attempts
    return ArtifactGenerator(backend=backend, config=GeneratorConfig(**overrides))


def _emit_result(result, args: argparse.Namespace, intent: str, state: Any) -> int:
    """Print or save a generation result and queue it for history."""
    from compareui.history import close_history_manager, get_audit_recorder

    if not result.ok:
        logger.error(result.message)
        logger.error(f"Last error:\n{result.last_error}")
        return 1

    if args.format == "payload":
        result_text = json.dumps(result.to_dict(), indent=2)
    elif args.format == "code" and isinstance(result.value, dict):
        result_text = "\n\n".join(
            f"// {provider}\n{code}" for provider, code in result.value.items()
        )
    else:
        result_text = json.dumps(result.value, indent=2)

    if args.output:
        args.output.write_text(result_text, encoding="utf-8")
        logger.info(f"Result saved to {args.output}")
    else:
        print(result_text)

    logger.info(f"Stats: {result.attempts_used} attempt(s)")

    if not args.no_history:
        get_audit_recorder().record(
            intent=intent,
            kind=result.kind.value,
            response_config=result.value,
            current_config=state,
            attempts=result.attempts_used,
        )
        close_history_manager()
    return 0


def cmd_generate_config(args: argparse.Namespace) -> int:
    """Handle the generate config command."""
    from compareui.schema import UnsupportedArtifactKindError

    try:
        state = _load_state(args)
        if state is not None and not isinstance(state, dict):
            logger.error("--state must be a JSON object for config kinds")
            return 1

        generator = _create_generator(args)
        if generator is None:
            return 1

        logger.info(f"Generating {args.kind} config for: {args.intent}")
        result = generator.generate_config(args.kind, args.intent, state)
        return _emit_result(result, args, args.intent, state)

    except UnsupportedArtifactKindError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Generation failed: {e}")
        return 1


def cmd_generate_code(args: argparse.Namespace) -> int:
    """Handle the generate code command."""
    try:
        state = _load_state(args)
        generator = _create_generator(args)
        if generator is None:
            return 1

        logger.info(f"Generating code for {', '.join(args.providers)}: {args.intent}")
        result = generator.generate_code(args.intent, state, args.providers)
        return _emit_result(result, args, args.intent, state)

    except Exception as e:
        logger.error(f"Generation failed: {e}")
        return 1


def cmd_list_models(_args: argparse.Namespace) -> int:
    """Handle the list models command."""
    from compareui.llm import LLMModel, LLMProviderType

    configured = get_available_llm_providers()

    logger.info("Available LLM Models:")
    for provider in LLMProviderType:
        models = LLMModel.list_by_provider(provider)
        if models:
            ready = " (configured)" if provider.value in configured else ""
            logger.info(f"\n  {provider.value}{ready}:")
            for model in models:
                spec = model.spec
                local_tag = " (local)" if spec.is_local else ""
                logger.info(f"    {spec.name}{local_tag}")
    return 0


def _add_generation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--state",
        "-s",
        type=str,
        default=None,
        help="Current state as JSON (or source code for 'code')",
    )
    parser.add_argument(
        "--state-file",
        type=Path,
        default=None,
        help="Read the current state from a file",
    )
    parser.add_argument(
        "--model",
        "-m",
        type=str,
        default=None,
        help="LLM model name (e.g. gemini-2.5-flash, claude-sonnet-4-5)",
    )
    parser.add_argument(
        "--api-key",
        "-k",
        type=str,
        default=None,
        help="API key (uses env var if not provided)",
    )
    parser.add_argument(
        "--temperature",
        type=float,
        default=None,
        help="LLM temperature (default: COMPAREUI_TEMPERATURE)",
    )
    parser.add_argument(
        "--attempts",
        type=int,
        default=None,
        help="Max generation attempts (default: COMPAREUI_MAX_ATTEMPTS)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not record the result in the history log",
    )


def handle_generate_command(argv: list[str]) -> int:
    """Handle generate-specific commands."""
    parser = argparse.ArgumentParser(
        prog="python . generate",
        description="Generate component configurations and code from natural language",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Modify a component configuration",
    )
    config_parser.add_argument("kind", type=str, help="Component kind (see: python . kinds)")
    config_parser.add_argument("intent", type=str, help="What to change")
    _add_generation_options(config_parser)
    config_parser.add_argument(
        "--format",
        "-f",
        type=str,
        default="json",
        choices=["json", "payload"],
        help="Output format (default: json)",
    )
    config_parser.set_defaults(func=cmd_generate_config)

    # code command
    code_parser = subparsers.add_parser(
        "code",
        help="Generate React code for several UI libraries",
    )
    code_parser.add_argument("intent", type=str, help="What to build")
    code_parser.add_argument(
        "--providers",
        "-p",
        nargs="+",
        default=["mui"],
        help="UI libraries: mui, chakra, antd, shadcn (default: mui)",
    )
    _add_generation_options(code_parser)
    code_parser.add_argument(
        "--format",
        "-f",
        type=str,
        default="code",
        choices=["code", "json", "payload"],
        help="Output format (default: code)",
    )
    code_parser.set_defaults(func=cmd_generate_code)

    # models command
    models_parser = subparsers.add_parser(
        "models",
        help="List available LLM models",
    )
    models_parser.set_defaults(func=cmd_list_models)

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


# =============================================================================
# Kinds Command
# =============================================================================


def handle_kinds_command(argv: list[str]) -> int:
    """Show component kinds, or one kind's schema description.

    Usage:
        python . kinds                  # List kinds
        python . kinds select           # Prompt description and example
        python . kinds select --json    # JSON Schema
    """
    from compareui.schema import (
        UnsupportedArtifactKindError,
        describe,
        example_valid,
        export_json_schema,
        list_config_kinds,
        schema_for,
    )

    parser = argparse.ArgumentParser(prog="python . kinds")
    parser.add_argument("kind", nargs="?", default=None, help="Component kind")
    parser.add_argument("--json", action="store_true", help="Print JSON Schema")
    args = parser.parse_args(argv)

    if args.kind is None:
        print("Component kinds:")
        for kind in list_config_kinds():
            schema = schema_for(kind)
            print(f"  {kind.value:<12} {schema.display_name}")
        print("\nPlayground code: python . generate code '<intent>' -p mui chakra")
        return 0

    try:
        schema = schema_for(args.kind)
    except UnsupportedArtifactKindError as e:
        logger.error(str(e))
        return 1

    if args.json:
        print(json.dumps(export_json_schema(schema.kind), indent=2))
    else:
        print(describe(schema.kind))
        print("\nExample:")
        print(json.dumps(example_valid(schema.kind), indent=2))
    return 0


# =============================================================================
# History Command
# =============================================================================


def handle_history_command(argv: list[str]) -> int:
    """Inspect the prompt history log.

    Usage:
        python . history list [--kind progress] [--limit 20]
        python . history stats
        python . history prune
    """
    from compareui.history import HistoryManager

    parser = argparse.ArgumentParser(prog="python . history")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    list_parser = subparsers.add_parser("list", help="List recent records")
    list_parser.add_argument("--kind", type=str, default=None, help="Filter by kind")
    list_parser.add_argument("--limit", type=int, default=20, help="Max records")
    list_parser.add_argument("--db", type=Path, default=None, help="Database path")

    stats_parser = subparsers.add_parser("stats", help="Show record counts")
    stats_parser.add_argument("--db", type=Path, default=None, help="Database path")

    prune_parser = subparsers.add_parser("prune", help="Drop records beyond the limit")
    prune_parser.add_argument("--db", type=Path, default=None, help="Database path")

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)
    manager = HistoryManager(db_path=args.db, auto_cleanup=False)

    try:
        if args.command == "list":
            for record in manager.list_records(kind=args.kind, limit=args.limit):
                print(
                    f"{record.created_at:%Y-%m-%d %H:%M:%S}  {record.kind:<12} "
                    f"{record.attempts} attempt(s)  {record.intent}"
                )
        elif args.command == "stats":
            stats = manager.get_stats()
            print(f"Records: {stats.record_count}")
            for kind, count in sorted(stats.by_kind.items()):
                print(f"  {kind:<12} {count}")
            if stats.oldest:
                print(f"Oldest: {stats.oldest.isoformat()}")
        elif args.command == "prune":
            removed = manager.cleanup()
            logger.info(f"Removed {removed} record(s)")
        else:
            parser.print_help()
            return 1
    finally:
        manager.close()
    return 0


# =============================================================================
# Dev Subcommand Handler
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments and test tier options.

    Usage:
        python . dev test                # Run all tests
        python . dev test --unit         # Run only unit tests (fast, no dependencies)
        python . dev test --integration  # Run integration tests (Node, network)
        python . dev test -k "progress"  # Run tests matching pattern
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--integration": ["-m", "integration"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []

    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


def cmd_compiler(argv: list[str]) -> int:
    """Manage the Babel packages used to check playground code.

    Usage:
        python . dev compiler install   # npm install in the Babel directory
        python . dev compiler status    # Show Node and Babel availability
    """
    from compareui.compiler import BabelFrontend

    subcommand = argv[0] if argv else "status"
    babel_dir = get_babel_dir()

    if subcommand == "install":
        npm = shutil.which("npm")
        if npm is None:
            logger.error("npm not found. Install Node.js first.")
            return 1
        if not (babel_dir / "package.json").exists():
            bundled = Path(__file__).resolve().parent / "compareui" / "compiler" / "js"
            babel_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy(bundled / "package.json", babel_dir / "package.json")
        logger.info(f"Installing Babel packages in {babel_dir}")
        return subprocess.call([npm, "install", "--no-audit", "--no-fund"], cwd=str(babel_dir))

    if subcommand == "status":
        frontend = BabelFrontend()
        state = "ready" if frontend.is_available() else "missing"
        print(f"Node binary: {frontend.node_binary}")
        print(f"Babel dir:   {frontend.babel_dir}")
        print(f"Status:      {state}")
        return 0 if state == "ready" else 1

    logger.error(f"Unknown compiler command: {subcommand}")
    return 1


def handle_dev_command(argv: list[str]) -> int:
    """Handle development workflow commands.

    Usage:
        python . dev test [args]          # Run pytest
        python . dev compiler install     # Install Babel for playground checks
    """
    if not argv:
        print("Development workflow commands")
        print("\nUsage: python . dev {command} [args]")
        print("\nCommands:")
        print("  test       Run pytest with tier options")
        print("  compiler   Install or check the Babel toolchain")
        print("\nExamples:")
        print("  python . dev test --unit           # Fast unit tests")
        print("  python . dev test --integration    # Integration tests")
        print("  python . dev compiler install      # npm install @babel packages")
        return 1

    subcommand = argv[0]
    subargs = argv[1:]

    dev_commands = {
        "test": lambda: cmd_test(subargs),
        "compiler": lambda: cmd_compiler(subargs),
    }

    if subcommand in dev_commands:
        setup_logging()
        return dev_commands[subcommand]()

    logger.error(f"Unknown dev command: {subcommand}")
    return handle_dev_command([])  # Show help


# =============================================================================
# MCP Server Command
# =============================================================================


def handle_mcp_command(argv: list[str]) -> int:
    """Handle MCP server commands.

    Usage:
        python . mcp run              # Start in STDIO mode (for Claude Desktop)
        python . mcp serve            # Start in HTTP mode
        python . mcp serve --port 8080
        python . mcp info             # Show server info
    """
    if not argv:
        print("MCP Server Commands")
        print("\nUsage: python . mcp {command} [options]")
        print("\nCommands:")
        print("  run                 Start server in STDIO mode (for Claude Desktop)")
        print("  serve               Start server in HTTP mode")
        print("  info                Show server information")
        print("\nOptions for 'serve':")
        print("  --host HOST         Bind address (default: MCP_HOST or 0.0.0.0)")
        print("  --port PORT         Port number (default: MCP_PORT or 5001)")
        print("  --transport TYPE    Transport: http or sse (default: http)")
        print("\nClaude Desktop Configuration:")
        print("  Add to claude_desktop_config.json:")
        print("  {")
        print('    "mcpServers": {')
        print('      "compareui": {')
        print('        "command": "python",')
        print('        "args": [".", "mcp", "run"],')
        print('        "cwd": "/path/to/compareui"')
        print("      }")
        print("    }")
        print("  }")
        return 1

    subcommand = argv[0]
    subargs = argv[1:]

    if subcommand == "run":
        from compareui.mcp.server import main as mcp_main

        return mcp_main(["--transport", "stdio", *subargs])

    elif subcommand == "serve":
        from compareui.mcp.server import main as mcp_main

        if "--transport" not in subargs and "-t" not in subargs:
            subargs = ["--transport", "http", *subargs]
        return mcp_main(subargs)

    elif subcommand == "info":
        from compareui.mcp import get_server_capabilities, get_server_version

        print("compareui MCP Server")
        print("=" * 40)
        print(f"Version: {get_server_version()}")
        print("\nCapabilities:")
        for cap, enabled in get_server_capabilities().items():
            status = "enabled" if enabled else "disabled"
            print(f"  {cap}: {status}")
        print("\nTools:")
        print("  - generate_config: Modify a component configuration")
        print("  - generate_code: React code for several UI libraries")
        print("  - list_components: Configurable component kinds")
        print("  - describe_component: Schema and example for one kind")
        print("  - status: Dependency health")
        print("  - list_models: Known and configured LLM models")
        return 0

    else:
        logger.error(f"Unknown mcp command: {subcommand}")
        return handle_mcp_command([])


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python . {command} [args]")
    print("\n=== MCP Server ===")
    print("  mcp        Run MCP server (STDIO or HTTP mode)")
    print("\n=== Generation ===")
    print("  generate   Generate component configs and code from natural language")
    print("  kinds      List component kinds and their schemas")
    print("  history    Inspect the prompt history log")
    print("\n=== Development ===")
    print("  dev        Development workflows (test, compiler)")
    print("\nExamples:")
    print("  python . generate config progress 'make the bar green' --state '{\"value\": 10}'")
    print("  python . generate code 'a login card' --providers mui chakra")
    print("  python . generate models")
    print("  python . kinds select")
    print("  python . mcp run                    # Start STDIO server (Claude Desktop)")
    print("  python . mcp serve --port 5001      # Start HTTP server")
    print("  python . dev compiler install       # Enable playground code checks")
    print("  python . dev test --unit            # Run unit tests")


def main() -> int:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2:
        show_help()
        return 1

    command = sys.argv[1]
    rest_args = sys.argv[2:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    # Development commands (nested under 'dev')
    if command == "dev":
        return handle_dev_command(rest_args)

    # The server configures its own logging
    if command == "mcp":
        return handle_mcp_command(rest_args)

    commands = {
        "generate": lambda: handle_generate_command(rest_args),
        "kinds": lambda: handle_kinds_command(rest_args),
        "history": lambda: handle_history_command(rest_args),
    }

    if command in commands:
        setup_logging()
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
