"""Schema module - authoritative source for component configuration schemas.

This module provides:
- ArtifactKind, the tag that routes every generation request
- Frozen pydantic models for the ten component configuration kinds
- Prompt-ready schema descriptions and known-valid examples
- JSON Schema exports for tool clients

Example usage:
    >>> from compareui.schema import ArtifactKind, describe, example_valid
    >>> text = describe(ArtifactKind.PROGRESS)  # For prompt injection
    >>> config = example_valid("select")
"""

from .kinds import (
    SCHEMA_REGISTRY,
    UNION_TAGS,
    AccordionConfig,
    ButtonConfig,
    CardConfig,
    IconButtonConfig,
    InputConfig,
    ModalConfig,
    Padding,
    ProgressConfig,
    RadioConfig,
    SelectConfig,
    SelectOption,
    TabItem,
    TabsConfig,
)
from .lib import (
    OMISSION_RULE,
    describe,
    example_valid,
    export_json_schema,
    is_hex_color,
    list_config_kinds,
    resolve_kind,
    schema_for,
)
from .types import (
    HEX_COLOR_PATTERN,
    ArtifactKind,
    ComponentConfig,
    HexColor,
    MembershipRule,
    Number,
    SchemaModel,
    UnsupportedArtifactKindError,
)

__all__ = [
    # Kinds
    "ArtifactKind",
    "UnsupportedArtifactKindError",
    # Models
    "SchemaModel",
    "ComponentConfig",
    "ButtonConfig",
    "IconButtonConfig",
    "AccordionConfig",
    "InputConfig",
    "SelectConfig",
    "RadioConfig",
    "CardConfig",
    "ModalConfig",
    "TabsConfig",
    "ProgressConfig",
    "Padding",
    "SelectOption",
    "TabItem",
    "HexColor",
    "Number",
    "MembershipRule",
    "HEX_COLOR_PATTERN",
    "UNION_TAGS",
    # Registry
    "SCHEMA_REGISTRY",
    "OMISSION_RULE",
    "resolve_kind",
    "schema_for",
    "list_config_kinds",
    "example_valid",
    "is_hex_color",
    "describe",
    "export_json_schema",
]
