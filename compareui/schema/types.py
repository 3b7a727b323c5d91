"""Field types and base models for component configurations.

Each configuration kind is a frozen pydantic model. Field constraints are
expressed with pydantic types (`Literal`, `Field(ge=, le=)`, string
patterns) so validation and JSON Schema export both come from the model.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ClassVar, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    StrictBool,
    StrictStr,
    StringConstraints,
)

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


class ArtifactKind(str, Enum):
    """Category of artifact a request asks for.

    Ten structured component configurations plus the distinguished
    PLAYGROUND kind, which produces per-provider React source instead of
    a configuration object.
    """

    BUTTON = "button"
    ICON_BUTTON = "icon-button"
    ACCORDION = "accordion"
    INPUT = "input"
    SELECT = "select"
    RADIO = "radio"
    CARD = "card"
    MODAL = "modal"
    TABS = "tabs"
    PROGRESS = "progress"
    PLAYGROUND = "playground"

    @property
    def is_config(self) -> bool:
        """True for kinds validated against a config schema."""
        return self is not ArtifactKind.PLAYGROUND


class UnsupportedArtifactKindError(ValueError):
    """Raised when a kind has no registered schema or route."""

    def __init__(self, kind: Any):
        self.kind = kind
        supported = ", ".join(k.value for k in ArtifactKind if k.is_config)
        super().__init__(
            f"Unsupported artifact kind: {kind!r}. Supported config kinds: {supported}"
        )


# === FIELD TYPES ===


def _compact_number(value: float) -> int | float:
    return int(value) if value.is_integer() else value


Text = StrictStr
Flag = StrictBool

HexColor = Annotated[str, StringConstraints(strict=True, pattern=HEX_COLOR_PATTERN.pattern)]

# Booleans are not numbers. Whole values serialize back as ints.
Number = Annotated[
    float,
    Field(strict=True, allow_inf_nan=False),
    PlainSerializer(_compact_number, return_type=int | float),
]

Size = Literal["small", "medium", "large"]
BorderStyle = Literal["solid", "dashed", "dotted"]

# Extra JSON Schema keys read by the prompt renderer.
UNIT_KEY = "x-unit"
DEFAULT_KEY = "x-default"
PIXELS = {UNIT_KEY: "pixels"}


def pixels(low: float, high: float) -> Any:
    """Bounded pixel measurement type, inclusive on both ends."""
    return Annotated[Number, Field(ge=low, le=high)]


# === CROSS-FIELD RULES ===


@dataclass(frozen=True)
class MembershipRule:
    """A scalar field whose value must appear in a sibling array.

    Attributes:
        field: Top-level field holding the selected value.
        among: Top-level array field holding the allowed entries.
        key: For object entries, the key holding each entry's value.
            Plain string entries are compared directly.
        message: Error text reported at `field`'s path.
    """

    field: str
    among: str
    message: str
    key: str | None = None

    def allowed_values(self, entries: list[Any]) -> list[str]:
        """Collect comparable values from the sibling array."""
        values: list[str] = []
        for entry in entries:
            if isinstance(entry, str):
                values.append(entry)
            elif self.key is not None and isinstance(entry, dict):
                value = entry.get(self.key)
                if isinstance(value, str):
                    values.append(value)
        return values


# === BASE MODELS ===


class SchemaModel(BaseModel):
    """Frozen model that drops undeclared keys."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class ComponentConfig(SchemaModel):
    """Base for the ten component configuration models.

    Class attributes:
        kind: Artifact kind the model validates.
        display_name: Name used in prompt text.
        rules: Kind-specific rules rendered into the prompt description.
        membership: Cross-field rules checked alongside field validation.
        hint: Worked example of translating an intent into a change.
        example: Known-valid configuration. Read through
            `compareui.schema.example_valid`, which returns a copy.
    """

    kind: ClassVar[ArtifactKind]
    display_name: ClassVar[str]
    rules: ClassVar[tuple[str, ...]] = ()
    membership: ClassVar[tuple[MembershipRule, ...]] = ()
    hint: ClassVar[str] = ""
    example: ClassVar[dict[str, Any]] = {}

    @classmethod
    def required_fields(cls) -> list[str]:
        """Names of required top-level fields in declaration order."""
        return [name for name, info in cls.model_fields.items() if info.is_required()]


__all__ = [
    "HEX_COLOR_PATTERN",
    "ArtifactKind",
    "UnsupportedArtifactKindError",
    "Text",
    "Flag",
    "HexColor",
    "Number",
    "Size",
    "BorderStyle",
    "UNIT_KEY",
    "DEFAULT_KEY",
    "PIXELS",
    "pixels",
    "MembershipRule",
    "SchemaModel",
    "ComponentConfig",
]
