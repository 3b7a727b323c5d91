"""Configuration validation utilities."""

from compareui.validation.lib import (
    ROOT_PATH,
    Accepted,
    CompilationError,
    FieldError,
    Rejected,
    SchemaViolationError,
    ValidationOutcome,
    format_errors,
    get_validator,
    is_valid,
    validate,
    validate_schema,
)

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
