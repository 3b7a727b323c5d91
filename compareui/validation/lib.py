"""Configuration validation against the component models.

This module runs candidate configurations produced by a generation backend
through the pydantic models in `compareui.schema`, adds the cross-field
membership checks, and reports every violation with its field path so the
full list can be fed back to the backend on the next attempt.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Union

from pydantic import ValidationError as PydanticValidationError

from compareui.schema import (
    UNION_TAGS,
    ArtifactKind,
    ComponentConfig,
    schema_for,
)

ROOT_PATH = "(root)"

# === OUTCOMES ===


@dataclass(frozen=True)
class FieldError:
    """A single violation at a dotted field path (e.g. "styles.backgroundColor")."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def format_errors(errors: Sequence[FieldError]) -> str:
    """Render errors one per line as `path: message`."""
    return "\n".join(str(error) for error in errors)


class SchemaViolationError(Exception):
    """Candidate configuration failed schema validation."""

    def __init__(self, errors: Sequence[FieldError]):
        self.errors = tuple(errors)
        super().__init__(format_errors(self.errors))

    @property
    def feedback(self) -> str:
        return format_errors(self.errors)


class CompilationError(Exception):
    """Candidate source failed to compile for one or more providers."""

    def __init__(self, errors: Sequence[FieldError]):
        self.errors = tuple(errors)
        super().__init__(format_errors(self.errors))

    @property
    def feedback(self) -> str:
        return format_errors(self.errors)


@dataclass(frozen=True)
class Accepted:
    """Candidate passed validation. `value` holds only declared fields."""

    value: Any

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Rejected:
    """Candidate failed validation.

    Attributes:
        errors: Every violation in schema declaration order, cross-field
            rules last.
        source: "schema" for configuration checks, "compilation" for
            source code checks.
    """

    errors: tuple[FieldError, ...]
    source: Literal["schema", "compilation"] = "schema"

    @property
    def ok(self) -> bool:
        return False

    @property
    def feedback(self) -> str:
        return format_errors(self.errors)

    def unwrap(self) -> Any:
        """Raise the exception matching this rejection's source."""
        if self.source == "compilation":
            raise CompilationError(self.errors)
        raise SchemaViolationError(self.errors)


ValidationOutcome = Union[Accepted, Rejected]

# === ERROR TRANSLATION ===


def _path(loc: tuple[int | str, ...]) -> str:
    """Join a pydantic error location into a dotted path.

    Tagged union members add their tag after the list index; those are
    dropped so paths stay in document terms ("options.2.label").
    """
    parts: list[str] = []
    previous: int | str | None = None
    for part in loc:
        if isinstance(previous, int) and part in UNION_TAGS:
            previous = part
            continue
        parts.append(str(part))
        previous = part
    return ".".join(parts) if parts else ROOT_PATH


def _field_errors(error: PydanticValidationError) -> list[FieldError]:
    return [FieldError(_path(detail["loc"]), detail["msg"]) for detail in error.errors()]


def _membership_errors(
    model: type[ComponentConfig],
    candidate: dict[str, Any],
    errors: list[FieldError],
) -> list[FieldError]:
    """Check cross-field rules whose fields passed field validation."""
    failed = {error.path.split(".")[0] for error in errors}
    found: list[FieldError] = []
    for rule in model.membership:
        if rule.field in failed or rule.among in failed:
            continue
        selected = candidate.get(rule.field)
        entries = candidate.get(rule.among)
        if not isinstance(selected, str) or not isinstance(entries, list):
            continue
        allowed = rule.allowed_values(entries)
        if selected not in allowed:
            choices = ", ".join(f"'{v}'" for v in allowed)
            found.append(
                FieldError(rule.field, f"{rule.message} ({choices}), received '{selected}'")
            )
    return found


# === PUBLIC API ===


def validate_schema(model: type[ComponentConfig], candidate: Any) -> ValidationOutcome:
    """Validate a candidate against a configuration model.

    Args:
        model: Configuration model to validate against.
        candidate: Decoded JSON value, usually a dict.

    Returns:
        Accepted with only the fields the candidate set (no defaults
        injected, unknown keys dropped), or Rejected listing every violation.

    Example:
        >>> outcome = validate_schema(schema_for("select"), {"options": [], "value": "a"})
        >>> outcome.feedback
        'options: List should have at least 1 item after validation, not 0'
    """
    try:
        config = model.model_validate(candidate)
    except PydanticValidationError as e:
        config = None
        errors = _field_errors(e)
    else:
        errors = []

    if isinstance(candidate, dict):
        errors.extend(_membership_errors(model, candidate, errors))

    if errors or config is None:
        return Rejected(tuple(errors))
    return Accepted(config.model_dump(exclude_unset=True, exclude_none=True))


def validate(kind: ArtifactKind | str, candidate: Any) -> ValidationOutcome:
    """Validate a candidate configuration for a component kind.

    Raises:
        UnsupportedArtifactKindError: If the kind has no config schema.
    """
    return validate_schema(schema_for(kind), candidate)


def get_validator(kind: ArtifactKind | str) -> Callable[[Any], ValidationOutcome]:
    """Get the validator function bound to a kind's model."""
    return functools.partial(validate_schema, schema_for(kind))


def is_valid(kind: ArtifactKind | str, candidate: Any) -> bool:
    """Check if a candidate configuration is valid.

    Convenience function that returns True if validation accepts it.
    """
    return validate(kind, candidate).ok


__all__ = [
    "ROOT_PATH",
    "FieldError",
    "Accepted",
    "Rejected",
    "ValidationOutcome",
    "SchemaViolationError",
    "CompilationError",
    "format_errors",
    "validate_schema",
    "validate",
    "get_validator",
    "is_valid",
]
