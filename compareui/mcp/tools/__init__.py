"""MCP tools for compareui.

Tools:
    - generate_config: Modify a component configuration from natural language
    - generate_code: Generate React source for several UI libraries
"""

from .generate import generate_code, generate_config

__all__ = [
    "generate_config",
    "generate_code",
]
