"""Health checking for MCP server dependencies.

Provides centralized status checking for all server dependencies:
- LLM provider availability
- Node.js and Babel for playground code checks
- History storage
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Overall health status."""

    HEALTHY = "healthy"  # All dependencies available
    DEGRADED = "degraded"  # Config generation only
    UNHEALTHY = "unhealthy"  # No LLM configured


@dataclass
class ServiceStatus:
    """Status of a single service/dependency."""

    available: bool
    message: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"available": self.available, "message": self.message, **self.details}


@dataclass
class ServerHealth:
    """Complete server health report."""

    status: HealthStatus
    version: str
    checked_at: datetime

    llm_providers: ServiceStatus
    compiler: ServiceStatus
    history_db: ServiceStatus

    can_generate_config: bool  # LLM available
    can_generate_code: bool  # LLM and compiler available

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "status": self.status.value,
            "version": self.version,
            "checked_at": self.checked_at.isoformat(),
            "services": {
                "llm_providers": self.llm_providers.to_dict(),
                "compiler": self.compiler.to_dict(),
                "history_db": self.history_db.to_dict(),
            },
            "capabilities": {
                "generate_config": self.can_generate_config,
                "generate_code": self.can_generate_code,
            },
        }


def check_llm_providers() -> ServiceStatus:
    """Check which LLM providers are available."""
    try:
        from compareui.config import get_available_llm_providers, get_default_llm_model

        providers = get_available_llm_providers()
        default_model = get_default_llm_model()

        if not providers:
            return ServiceStatus(
                available=False,
                message="No LLM providers configured. Set API keys in .env",
                details={"available_providers": [], "default_model": default_model},
            )

        return ServiceStatus(
            available=True,
            message=f"LLM providers available: {', '.join(providers)}",
            details={"available_providers": providers, "default_model": default_model},
        )
    except Exception as e:
        return ServiceStatus(
            available=False,
            message=f"LLM provider check failed: {e}",
        )


def check_compiler() -> ServiceStatus:
    """Check that Node.js and the Babel packages are installed."""
    try:
        from compareui.compiler import BabelFrontend

        frontend = BabelFrontend()
        details = {"node": frontend.node_binary, "babel_dir": str(frontend.babel_dir)}
        if frontend.is_available():
            return ServiceStatus(
                available=True,
                message="Babel ready for playground code checks",
                details=details,
            )
        return ServiceStatus(
            available=False,
            message="Node.js or Babel missing. Run: python . dev compiler install",
            details=details,
        )
    except Exception as e:
        return ServiceStatus(
            available=False,
            message=f"Compiler check failed: {e}",
        )


def check_history_db() -> ServiceStatus:
    """Check if history database is accessible."""
    try:
        from compareui.history import get_history_manager

        stats = get_history_manager().get_stats()

        return ServiceStatus(
            available=True,
            message=f"History DB: {stats.record_count} records",
            details={"record_count": stats.record_count, "by_kind": stats.by_kind},
        )
    except Exception as e:
        return ServiceStatus(
            available=False,
            message=f"History DB check failed: {e}",
        )


def get_server_health() -> ServerHealth:
    """Get comprehensive server health status.

    History storage never affects the overall status; persistence failures
    are logged and do not reach callers.
    """
    from .lib import get_server_version

    llm_providers = check_llm_providers()
    compiler = check_compiler()
    history_db = check_history_db()

    can_generate_config = llm_providers.available
    can_generate_code = llm_providers.available and compiler.available

    if can_generate_code:
        status = HealthStatus.HEALTHY
    elif can_generate_config:
        status = HealthStatus.DEGRADED
    else:
        status = HealthStatus.UNHEALTHY

    return ServerHealth(
        status=status,
        version=get_server_version(),
        checked_at=datetime.now(UTC),
        llm_providers=llm_providers,
        compiler=compiler,
        history_db=history_db,
        can_generate_config=can_generate_config,
        can_generate_code=can_generate_code,
    )


def get_required_actions(health: ServerHealth) -> list[str]:
    """List what to fix for a degraded or unhealthy server."""
    actions = []
    if not health.llm_providers.available:
        actions.append("Set GEMINI_API_KEY, OPENAI_API_KEY or ANTHROPIC_API_KEY in .env")
    if not health.compiler.available:
        actions.append("Run: python . dev compiler install")
    return actions


def format_startup_banner(health: ServerHealth) -> str:
    """Format a startup status banner for logging."""
    status_icon = {
        HealthStatus.HEALTHY: "[OK]",
        HealthStatus.DEGRADED: "[!!]",
        HealthStatus.UNHEALTHY: "[XX]",
    }

    def svc_icon(available: bool) -> str:
        return "[OK]" if available else "[--]"

    config_status = "Yes" if health.can_generate_config else "No - needs LLM"
    code_status = "Yes" if health.can_generate_code else "No - needs LLM and Babel"

    lines = [
        "",
        "=" * 60,
        f"  compareui MCP Server v{health.version}",
        "=" * 60,
        f"  Status: {status_icon[health.status]} {health.status.value.upper()}",
        "",
        "  Services:",
        f"    {svc_icon(health.llm_providers.available)} LLM Providers: "
        f"{health.llm_providers.message}",
        f"    {svc_icon(health.compiler.available)} Compiler:      {health.compiler.message}",
        f"    {svc_icon(health.history_db.available)} History DB:    "
        f"{health.history_db.message}",
        "",
        "  Capabilities:",
        f"    generate_config:    {config_status}",
        f"    generate_code:      {code_status}",
    ]

    actions = get_required_actions(health)
    if actions:
        lines.append("")
        lines.append("  Action Required:")
        lines.extend(f"    - {action}" for action in actions)

    lines.extend(["", "=" * 60, ""])
    return "\n".join(lines)


def log_startup_status() -> None:
    """Log server health status on startup."""
    health = get_server_health()

    for line in format_startup_banner(health).split("\n"):
        if line.strip():
            logger.info(line)

    if health.status == HealthStatus.UNHEALTHY:
        logger.error(
            "Server is UNHEALTHY - generation will fail. "
            "Configure LLM provider API keys to proceed."
        )
    elif health.status == HealthStatus.DEGRADED:
        logger.warning(
            "Server is DEGRADED - generate_code needs Node.js and Babel."
        )
    else:
        logger.info("Server is ready - all features available.")


__all__ = [
    "HealthStatus",
    "ServiceStatus",
    "ServerHealth",
    "check_llm_providers",
    "check_compiler",
    "check_history_db",
    "get_server_health",
    "get_required_actions",
    "format_startup_banner",
    "log_startup_status",
]
