"""Syntax validation for generated React source.

Generated playground code is run through Babel (`@babel/core` with
`preset-react` in automatic runtime mode and `preset-typescript`) using a
small Node script shipped in `compareui/compiler/js`. Success only means
the source is syntactically well formed; nothing is executed.

Example:
    >>> validator = SyntaxValidator()
    >>> outcome = validator.check_providers(
    ...     {"mui": "export default () => <Box />"}, ["mui"]
    ... )
"""

from __future__ import annotations

import json
import logging
import re
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from compareui.config import EnvVar, get_babel_dir, get_environment
from compareui.providers import UIProvider, resolve_providers
from compareui.validation import (
    ROOT_PATH,
    Accepted,
    FieldError,
    Rejected,
    ValidationOutcome,
)

logger = logging.getLogger(__name__)

CHECK_SCRIPT = Path(__file__).resolve().parent / "js" / "check.js"
SOURCE_PATH = "source"

# Exit code used by check.js when @babel packages cannot be loaded.
_EXIT_UNAVAILABLE = 3


class CompilerUnavailableError(RuntimeError):
    """Node.js or the Babel packages are not installed.

    This is an environment fault, not a property of the candidate source,
    so it is never turned into retry feedback.
    """


@dataclass(frozen=True)
class CompileResult:
    """Outcome of compiling one source text.

    Attributes:
        ok: Whether the front end accepted the source.
        error: Diagnostic message, verbatim from the front end.
    """

    ok: bool
    error: str | None = None


@runtime_checkable
class CompilerFrontend(Protocol):
    """Anything that can syntax-check a TSX source string."""

    def compile(self, source: str) -> CompileResult: ...


class BabelFrontend:
    """Compile TSX through Babel in a Node subprocess.

    Args:
        node_binary: Node executable. Defaults to COMPAREUI_NODE_BINARY.
        babel_dir: Directory Node resolves @babel packages from. Defaults
            to COMPAREUI_BABEL_DIR, then the bundled script directory.
        timeout: Seconds per compilation. Defaults to COMPAREUI_COMPILE_TIMEOUT.
    """

    def __init__(
        self,
        node_binary: str | None = None,
        babel_dir: Path | str | None = None,
        timeout: float | None = None,
    ):
        self.node_binary = get_environment(EnvVar.NODE_BINARY, override=node_binary)
        self.babel_dir = get_babel_dir(babel_dir)
        self.timeout = float(get_environment(EnvVar.COMPILE_TIMEOUT, override=timeout))

    def is_available(self) -> bool:
        """Check that Node is on PATH and @babel/core is installed, without compiling."""
        if shutil.which(self.node_binary) is None:
            return False
        return (self.babel_dir / "node_modules" / "@babel" / "core").exists()

    def compile(self, source: str) -> CompileResult:
        """Compile a source string.

        Raises:
            CompilerUnavailableError: If Node cannot be started or Babel is
                not installed.
        """
        cmd = [self.node_binary, str(CHECK_SCRIPT)]
        try:
            proc = subprocess.run(
                cmd,
                input=source,
                cwd=str(self.babel_dir),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise CompilerUnavailableError(
                f"Node.js executable not found: {self.node_binary}"
            ) from e
        except subprocess.TimeoutExpired:
            logger.warning(f"Babel compilation timed out after {self.timeout:g}s")
            return CompileResult(
                ok=False, error=f"Compilation timed out after {self.timeout:g}s"
            )

        try:
            payload = json.loads(proc.stdout or "")
        except json.JSONDecodeError as e:
            detail = (proc.stderr or proc.stdout or "").strip()
            raise CompilerUnavailableError(
                f"Babel check script failed (exit {proc.returncode}): {detail}"
            ) from e

        if proc.returncode == _EXIT_UNAVAILABLE or payload.get("unavailable"):
            raise CompilerUnavailableError(
                f"Babel is not installed in {self.babel_dir}: {payload.get('error')}. "
                "Run `python . dev compiler install`."
            )

        if payload.get("ok"):
            return CompileResult(ok=True)
        return CompileResult(ok=False, error=str(payload.get("error") or "Unknown error"))


# =============================================================================
# Import vocabulary
# =============================================================================

_IMPORT_RE = re.compile(
    r"""^\s*import\s+(?:type\s+)?(?P<clause>[^'";]*?)\s+from\s+['"](?P<module>[^'"]+)['"]""",
    re.MULTILINE,
)


def parse_imports(source: str) -> list[tuple[str, list[str], bool]]:
    """Extract `(module, imported_names, is_namespace)` from import statements.

    Named imports report the exported name, so `{ Box as B }` gives "Box".
    Default imports report the local binding.
    """
    imports: list[tuple[str, list[str], bool]] = []
    for match in _IMPORT_RE.finditer(source):
        clause = match.group("clause").strip()
        module = match.group("module")
        names: list[str] = []
        namespace = False

        named = re.search(r"\{([^}]*)\}", clause)
        if named:
            for item in named.group(1).split(","):
                item = item.strip()
                if item.startswith("type "):
                    continue
                if item:
                    names.append(item.split(" as ")[0].strip())
            clause = clause[: named.start()] + clause[named.end() :]

        for part in clause.split(","):
            part = part.strip()
            if not part:
                continue
            if part.startswith("*"):
                namespace = True
            else:
                names.append(part)

        imports.append((module, names, namespace))
    return imports


def check_vocabulary(source: str, provider: UIProvider) -> list[str]:
    """List import violations against a provider's allowed components.

    Only capitalized names are checked, so hooks and helpers such as
    `useDisclosure` pass.
    """
    problems: list[str] = []
    for module, names, namespace in parse_imports(source):
        if not provider.owns_import(module):
            continue
        if namespace:
            problems.append(
                f"Namespace import from '{module}' is not allowed; import components by name"
            )
        for name in names:
            if name[:1].isupper() and not provider.allows(name):
                problems.append(
                    f"Component '{name}' imported from '{module}' is not in the "
                    f"allowed list for {provider.display_name}"
                )
    return problems


# =============================================================================
# Syntax validator
# =============================================================================


class SyntaxValidator:
    """Check candidate source through a compiler front end.

    Args:
        frontend: Front end to compile with. Defaults to BabelFrontend.
        check_imports: Also enforce each provider's component vocabulary.
    """

    def __init__(
        self,
        frontend: CompilerFrontend | None = None,
        check_imports: bool = True,
    ):
        self._frontend = frontend or BabelFrontend()
        self._check_imports = check_imports

    def check_compiles(self, source: str) -> ValidationOutcome:
        """Check that a single source text compiles.

        Returns:
            Accepted(source) or Rejected with the front end's diagnostic.
        """
        result = self._frontend.compile(source)
        if result.ok:
            return Accepted(source)
        return Rejected(
            (FieldError(SOURCE_PATH, result.error or "Unknown error"),),
            source="compilation",
        )

    def check_providers(
        self,
        sources: Any,
        providers: Sequence[str | UIProvider],
    ) -> ValidationOutcome:
        """Check every requested provider's source independently.

        Args:
            sources: Decoded backend output, expected to map provider id to
                source text.
            providers: Providers that must all be present and compile.

        Returns:
            Accepted with a mapping restricted to the requested providers,
            or Rejected listing every failing provider as
            `Provider <id>: <message>`.
        """
        resolved = resolve_providers(p.id if isinstance(p, UIProvider) else p for p in providers)

        if not isinstance(sources, Mapping):
            return Rejected(
                (
                    FieldError(
                        ROOT_PATH,
                        "Expected a JSON object keyed by provider id, "
                        f"received {type(sources).__name__}",
                    ),
                ),
                source="compilation",
            )

        errors: list[FieldError] = []
        accepted: dict[str, str] = {}
        for provider in resolved:
            label = f"Provider {provider.id}"
            code = sources.get(provider.id)
            if code is None:
                errors.append(FieldError(label, "Missing code for this provider"))
                continue
            if not isinstance(code, str):
                errors.append(
                    FieldError(label, f"Expected code string, received {type(code).__name__}")
                )
                continue
            if not code.strip():
                errors.append(FieldError(label, "Code is empty"))
                continue

            result = self._frontend.compile(code)
            if not result.ok:
                logger.debug(f"{label} failed to compile: {result.error}")
                errors.append(FieldError(label, result.error or "Unknown error"))
                continue

            if self._check_imports:
                problems = check_vocabulary(code, provider)
                if problems:
                    errors.append(FieldError(label, "; ".join(problems)))
                    continue

            accepted[provider.id] = code

        if errors:
            return Rejected(tuple(errors), source="compilation")
        return Accepted(accepted)


__all__ = [
    "CHECK_SCRIPT",
    "CompilerUnavailableError",
    "CompileResult",
    "CompilerFrontend",
    "BabelFrontend",
    "SyntaxValidator",
    "parse_imports",
    "check_vocabulary",
]
