"""Syntax validation for generated playground code.

Provides SyntaxValidator, which compiles candidate React/TSX source through
a compiler front end (Babel under Node by default) and enforces each
provider's component vocabulary.
"""

from compareui.compiler.lib import (
    CHECK_SCRIPT,
    BabelFrontend,
    CompileResult,
    CompilerFrontend,
    CompilerUnavailableError,
    SyntaxValidator,
    check_vocabulary,
    parse_imports,
)

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
