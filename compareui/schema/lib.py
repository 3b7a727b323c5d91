"""Authoritative schema registry for component configurations.

This module is the single source of truth for configuration shapes. It
provides:
- Kind resolution and model lookup
- Prompt-ready natural language schema descriptions
- Known-valid example configurations
- JSON Schema exports for tool clients

All schema-related queries should route through this module.
"""

from __future__ import annotations

import copy
from typing import Any

from .kinds import SCHEMA_REGISTRY
from .types import (
    DEFAULT_KEY,
    HEX_COLOR_PATTERN,
    UNIT_KEY,
    ArtifactKind,
    ComponentConfig,
    UnsupportedArtifactKindError,
)

OMISSION_RULE = "Omit a field (or leave it undefined) to keep its current value unchanged."
OPTIONAL_RULE = "Fields marked with ? are optional; all other fields are required."

# === REGISTRY QUERIES ===


def resolve_kind(value: ArtifactKind | str) -> ArtifactKind:
    """Resolve a string or enum member to an ArtifactKind.

    Args:
        value: Kind name such as "icon-button" or an ArtifactKind member.

    Returns:
        Matching ArtifactKind.

    Raises:
        UnsupportedArtifactKindError: If the value names no known kind.
    """
    if isinstance(value, ArtifactKind):
        return value
    try:
        return ArtifactKind(str(value).strip().lower())
    except ValueError:
        raise UnsupportedArtifactKindError(value) from None


def schema_for(kind: ArtifactKind | str) -> type[ComponentConfig]:
    """Get the configuration model for a kind.

    Raises:
        UnsupportedArtifactKindError: For unknown kinds and for PLAYGROUND,
            which is validated by compilation rather than a schema.
    """
    resolved = resolve_kind(kind)
    model = SCHEMA_REGISTRY.get(resolved)
    if model is None:
        raise UnsupportedArtifactKindError(resolved.value)
    return model


def list_config_kinds() -> list[ArtifactKind]:
    """List every kind that has a config schema, in declaration order."""
    return [kind for kind in ArtifactKind if kind in SCHEMA_REGISTRY]


def example_valid(kind: ArtifactKind | str) -> dict[str, Any]:
    """Return a fresh copy of a configuration known to validate for `kind`."""
    return copy.deepcopy(schema_for(kind).example)


def is_hex_color(value: Any) -> bool:
    """True if value is a '#RRGGBB' string."""
    return isinstance(value, str) and HEX_COLOR_PATTERN.fullmatch(value) is not None


# === JSON SCHEMA EXPORT ===


def export_json_schema(kind: ArtifactKind | str) -> dict[str, Any]:
    """Export a kind's configuration model as JSON Schema.

    Cross-field membership rules have no JSON Schema equivalent and are
    listed under the `x-rules` extension key instead.
    """
    model = schema_for(kind)
    document = model.model_json_schema()
    if model.membership:
        document["x-rules"] = [f"{rule.field}: {rule.message}" for rule in model.membership]
    return document


# === PROMPT DESCRIPTIONS ===


class _SchemaText:
    """Renders a model's JSON Schema as compact TypeScript-like text."""

    def __init__(self, document: dict[str, Any]):
        self._defs = document.get("$defs", {})

    def node(self, node: dict[str, Any]) -> dict[str, Any]:
        """Unwrap `X | None` and `$ref`, keeping field-level keys."""
        options = node.get("anyOf")
        if options:
            kept = [option for option in options if option.get("type") != "null"]
            if len(kept) == 1:
                outer = {k: v for k, v in node.items() if k not in ("anyOf", "default")}
                node = {**kept[0], **outer}
        ref = node.get("$ref")
        if ref:
            target = self._defs[ref.rsplit("/", 1)[-1]]
            outer = {k: v for k, v in node.items() if k != "$ref"}
            node = {**target, **outer}
        return node

    def inline(self, raw: dict[str, Any]) -> str:
        """Render a type on a single line."""
        node = self.node(raw)
        alternatives = node.get("anyOf") or node.get("oneOf")
        if alternatives:
            return " | ".join(self.inline(option) for option in alternatives)
        if "enum" in node:
            return " | ".join(f'"{value}"' for value in node["enum"])
        if "const" in node:
            return f'"{node["const"]}"'
        if "properties" in node:
            required = set(node.get("required", ()))
            members = ", ".join(
                f"{name}{'' if name in required else '?'}: {self.inline(prop)}"
                for name, prop in node["properties"].items()
            )
            return f"{{ {members} }}"

        json_type = node.get("type")
        if json_type == "string":
            if node.get("pattern") == HEX_COLOR_PATTERN.pattern:
                return "string (hex format: #RRGGBB)"
            return "string"
        if json_type in ("number", "integer"):
            return _number_text(node)
        if json_type == "array":
            items_node = self.node(node["items"])
            items = self.inline(items_node)
            if items_node.get("anyOf") or items_node.get("oneOf"):
                items = f"({items})"
            text = f"{items}[]"
            if node.get("minItems"):
                text += f" (at least {node['minItems']} item(s))"
            return text
        return json_type or "any"

    def fields(self, node: dict[str, Any], indent: int) -> list[str]:
        pad = "  " * indent
        required = set(node.get("required", ()))
        properties = list(node["properties"].items())
        lines: list[str] = []
        for index, (name, raw) in enumerate(properties):
            prop = self.node(raw)
            marker = "" if name in required else "?"
            trailing = "," if index < len(properties) - 1 else ""
            if "properties" in prop:
                lines.append(f"{pad}{name}{marker}: {{")
                lines.extend(self.fields(prop, indent + 1))
                lines.append(f"{pad}}}{trailing}")
                continue
            description = prop.get("description")
            comment = f"  // {description}" if description else ""
            lines.append(f"{pad}{name}{marker}: {self.inline(prop)}{trailing}{comment}")
        return lines

    def default_rules(self, node: dict[str, Any], prefix: str = "") -> list[str]:
        rules: list[str] = []
        for name, raw in node["properties"].items():
            prop = self.node(raw)
            path = f"{prefix}{name}"
            if DEFAULT_KEY in prop:
                rules.append(f"{path} defaults to {prop[DEFAULT_KEY]} if omitted.")
            if "properties" in prop:
                rules.extend(self.default_rules(prop, prefix=f"{path}."))
        return rules


def _fmt_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _number_text(node: dict[str, Any]) -> str:
    parts: list[str] = []
    minimum = node.get("minimum")
    maximum = node.get("maximum")
    if minimum is not None and maximum is not None:
        parts.append(f"{_fmt_number(minimum)}-{_fmt_number(maximum)}")
    elif "exclusiveMinimum" in node:
        parts.append(f"> {_fmt_number(node['exclusiveMinimum'])}")
    elif minimum is not None:
        parts.append(f">= {_fmt_number(minimum)}")
    elif maximum is not None:
        parts.append(f"<= {_fmt_number(maximum)}")
    if UNIT_KEY in node:
        parts.append(f"in {node[UNIT_KEY]}")
    if not parts:
        return "number"
    return f"number ({', '.join(parts)})"


def describe(kind: ArtifactKind | str) -> str:
    """Render a kind's schema as text suitable for embedding in a prompt.

    Every field is listed with its type and constraints, optional fields are
    marked with `?`, followed by the omission rule, kind rules and default
    notes.

    Raises:
        UnsupportedArtifactKindError: For unknown kinds and PLAYGROUND.
    """
    model = schema_for(kind)
    document = model.model_json_schema()
    text = _SchemaText(document)

    lines = [f"{model.display_name} Configuration Schema:", "{"]
    lines.extend(text.fields(document, indent=1))
    lines.append("}")
    lines.append("")
    lines.append("RULES:")
    rules = [OMISSION_RULE, OPTIONAL_RULE, *model.rules]
    rules.extend(text.default_rules(document))
    lines.extend(f"- {rule}" for rule in rules)
    return "\n".join(lines)


__all__ = [
    "OMISSION_RULE",
    "resolve_kind",
    "schema_for",
    "list_config_kinds",
    "example_valid",
    "is_hex_color",
    "describe",
    "export_json_schema",
]
