"""Unit tests for the Schema module."""

import pytest
from pydantic import BaseModel, ValidationError

from compareui.schema import (
    SCHEMA_REGISTRY,
    ArtifactKind,
    CardConfig,
    Padding,
    UnsupportedArtifactKindError,
    describe,
    example_valid,
    export_json_schema,
    is_hex_color,
    list_config_kinds,
    resolve_kind,
    schema_for,
)

CONFIG_KINDS = [kind for kind in ArtifactKind if kind is not ArtifactKind.PLAYGROUND]


def _optional(prop: dict, document: dict) -> dict:
    """Resolve an optional property's non-null branch, following $ref."""
    branch = next(option for option in prop["anyOf"] if option.get("type") != "null")
    ref = branch.get("$ref")
    if ref:
        return document["$defs"][ref.rsplit("/", 1)[-1]]
    return branch


class TestSchemaRegistry:
    """Tests for SCHEMA_REGISTRY completeness."""

    @pytest.mark.unit
    def test_every_config_kind_registered(self):
        """Every non-playground kind has a model."""
        for kind in CONFIG_KINDS:
            assert kind in SCHEMA_REGISTRY, f"Missing schema for {kind}"

    @pytest.mark.unit
    def test_registry_has_10_entries(self):
        """Registry contains exactly the ten config kinds."""
        assert len(SCHEMA_REGISTRY) == 10
        assert ArtifactKind.PLAYGROUND not in SCHEMA_REGISTRY

    @pytest.mark.unit
    def test_schema_kind_matches_key(self):
        """Each model is registered under its own kind."""
        for kind, model in SCHEMA_REGISTRY.items():
            assert model.kind is kind
            assert issubclass(model, BaseModel)

    @pytest.mark.unit
    def test_list_config_kinds(self):
        """Config kinds are listed in enum order without playground."""
        assert list_config_kinds() == CONFIG_KINDS

    @pytest.mark.unit
    def test_models_are_frozen(self):
        """Validated configurations cannot be reassigned."""
        config = CardConfig.model_validate(example_valid("card"))
        with pytest.raises(ValidationError):
            config.title = "Other"


class TestResolveKind:
    """Tests for kind resolution."""

    @pytest.mark.unit
    def test_resolves_string(self):
        """Hyphenated string values resolve."""
        assert resolve_kind("icon-button") is ArtifactKind.ICON_BUTTON

    @pytest.mark.unit
    def test_case_and_whitespace_insensitive(self):
        """Resolution tolerates case and surrounding whitespace."""
        assert resolve_kind("  Progress ") is ArtifactKind.PROGRESS

    @pytest.mark.unit
    def test_passes_enum_through(self):
        """Enum members are returned unchanged."""
        assert resolve_kind(ArtifactKind.TABS) is ArtifactKind.TABS

    @pytest.mark.unit
    def test_unknown_kind_raises(self):
        """Unknown names raise UnsupportedArtifactKindError."""
        with pytest.raises(UnsupportedArtifactKindError, match="slider"):
            resolve_kind("slider")

    @pytest.mark.unit
    def test_error_is_value_error(self):
        """The error is catchable as ValueError."""
        with pytest.raises(ValueError):
            schema_for("carousel")


class TestSchemaFor:
    """Tests for model lookup."""

    @pytest.mark.unit
    def test_lookup_by_string(self):
        """String names return the registered model."""
        assert schema_for("select") is SCHEMA_REGISTRY[ArtifactKind.SELECT]

    @pytest.mark.unit
    def test_playground_has_no_schema(self):
        """Playground is validated by compilation, not by schema."""
        with pytest.raises(UnsupportedArtifactKindError):
            schema_for(ArtifactKind.PLAYGROUND)

    @pytest.mark.unit
    def test_required_fields(self):
        """Required fields follow declaration order."""
        assert schema_for("input").required_fields() == [
            "label",
            "placeholder",
            "variant",
            "size",
        ]
        assert schema_for("progress").required_fields() == []

    @pytest.mark.unit
    def test_card_padding_is_nested_model(self):
        """Card styles.padding is a model of px/py."""
        from compareui.schema.kinds import CardStyles

        assert Padding in CardStyles.model_fields["padding"].annotation.__args__
        assert list(Padding.model_fields) == ["px", "py"]


class TestExampleValid:
    """Tests for known-valid examples."""

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", CONFIG_KINDS, ids=lambda k: k.value)
    def test_example_has_required_fields(self, kind):
        """Every example carries all required fields."""
        example = example_valid(kind)
        for name in schema_for(kind).required_fields():
            assert name in example

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", CONFIG_KINDS, ids=lambda k: k.value)
    def test_example_validates_against_model(self, kind):
        schema_for(kind).model_validate(example_valid(kind))

    @pytest.mark.unit
    def test_returns_independent_copy(self):
        """Mutating a returned example does not affect the registry."""
        first = example_valid("tabs")
        first["tabs"][0]["label"] = "changed"
        assert example_valid("tabs")["tabs"][0]["label"] == "Overview"


class TestDescribe:
    """Tests for prompt descriptions."""

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", CONFIG_KINDS, ids=lambda k: k.value)
    def test_every_field_is_listed(self, kind):
        """All top-level field names appear in the description."""
        text = describe(kind)
        for name in schema_for(kind).model_fields:
            assert name in text

    @pytest.mark.unit
    def test_mentions_omission_rule(self):
        """Descriptions tell the model to omit unchanged fields."""
        assert "Omit a field" in describe("button")

    @pytest.mark.unit
    def test_optional_marker(self):
        """Optional fields are marked with ?, required ones are not."""
        text = describe("card")
        assert "\n  title: string" in text
        assert "\n  image?: boolean" in text

    @pytest.mark.unit
    def test_bounds_rendered(self):
        """Numeric ranges and colors render with constraints."""
        text = describe("progress")
        assert "height?: number (1-100, in pixels)" in text
        assert "indicatorColor?: string (hex format: #RRGGBB)" in text
        assert "value?: number (>= 0)" in text

    @pytest.mark.unit
    def test_exclusive_minimum_rendered(self):
        text = describe("input")
        assert "px: number (> 0, in pixels)" in text

    @pytest.mark.unit
    def test_enum_rendered(self):
        assert 'variant: "outlined" | "standard"' in describe("input")

    @pytest.mark.unit
    def test_nested_block(self):
        """Nested models render as an indented block."""
        text = describe("modal")
        assert "\n  styles?: {\n    borderRadius?: number (0-50, in pixels)" in text

    @pytest.mark.unit
    def test_default_notes(self):
        """Documented defaults are rendered as rules."""
        assert "image defaults to true if omitted." in describe("card")
        assert 'size defaults to "medium" if omitted.' in describe("accordion")

    @pytest.mark.unit
    def test_union_array_rendered(self):
        """Select options render as a union array."""
        text = describe("select")
        assert "options: (string | { value: string, label: string })[]" in text

    @pytest.mark.unit
    def test_deterministic(self):
        """Repeated calls produce identical text."""
        assert describe("tabs") == describe("tabs")

    @pytest.mark.unit
    def test_playground_raises(self):
        """Playground has nothing to describe."""
        with pytest.raises(UnsupportedArtifactKindError):
            describe("playground")


class TestExportJsonSchema:
    """Tests for JSON Schema export."""

    @pytest.mark.unit
    def test_matches_model_schema(self):
        """Export is the model's own JSON Schema."""
        assert export_json_schema("card") == CardConfig.model_json_schema()

    @pytest.mark.unit
    def test_basic_structure(self):
        """Export has object type, properties and required list."""
        doc = export_json_schema("input")
        assert doc["type"] == "object"
        assert doc["required"] == ["label", "placeholder", "variant", "size"]
        assert doc["properties"]["variant"]["enum"] == ["outlined", "standard"]

    @pytest.mark.unit
    def test_color_pattern(self):
        """Colors export the hex pattern."""
        doc = export_json_schema("modal")
        styles = _optional(doc["properties"]["styles"], doc)
        color = _optional(styles["properties"]["titleColor"], doc)
        assert color["pattern"] == "^#[0-9A-Fa-f]{6}$"

    @pytest.mark.unit
    def test_exclusive_minimum(self):
        """Positive padding exports exclusiveMinimum."""
        doc = export_json_schema("icon-button")
        px = doc["$defs"]["Padding"]["properties"]["px"]
        assert px["exclusiveMinimum"] == 0
        assert px["x-unit"] == "pixels"

    @pytest.mark.unit
    def test_min_items(self):
        doc = export_json_schema("tabs")
        assert doc["properties"]["tabs"]["minItems"] == 1

    @pytest.mark.unit
    def test_cross_checks_listed(self):
        """Membership rules are carried in x-rules."""
        doc = export_json_schema("select")
        assert doc["x-rules"] == ["value: Value must match one of the option values"]
        assert "x-rules" not in export_json_schema("button")


class TestHexColor:
    """Tests for the hex color predicate."""

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["#1A2B3C", "#ffffff", "#000000"])
    def test_accepted(self, value):
        assert is_hex_color(value)

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["#ZZZZZZ", "#fff", "red", "1A2B3C", None, 123])
    def test_rejected(self, value):
        assert not is_hex_color(value)
