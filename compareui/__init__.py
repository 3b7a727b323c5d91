"""compareui: validated UI component generation from natural language."""

from compareui.llm import ArtifactGenerator, GenerationExhausted, GenerationSuccess
from compareui.providers import UIProvider, get_provider, list_providers
from compareui.schema import ArtifactKind, describe, example_valid, export_json_schema
from compareui.validation import is_valid, validate

__all__ = [
    # Generation
    "ArtifactGenerator",
    "GenerationSuccess",
    "GenerationExhausted",
    # Schema
    "ArtifactKind",
    "describe",
    "example_valid",
    "export_json_schema",
    # Providers
    "UIProvider",
    "get_provider",
    "list_providers",
    # Validation
    "validate",
    "is_valid",
]
