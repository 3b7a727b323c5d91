"""Unit tests for validation module."""

import pytest

from compareui.schema import (
    ArtifactKind,
    UnsupportedArtifactKindError,
    example_valid,
    list_config_kinds,
    schema_for,
)
from compareui.validation import (
    ROOT_PATH,
    Accepted,
    CompilationError,
    FieldError,
    Rejected,
    SchemaViolationError,
    get_validator,
    is_valid,
    validate,
)

REQUIRED_CASES = [
    (kind, name) for kind in list_config_kinds() for name in schema_for(kind).required_fields()
]


def _paths(outcome):
    assert isinstance(outcome, Rejected)
    return [error.path for error in outcome.errors]


class TestExamples:
    """Known-valid examples and required fields."""

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", list_config_kinds(), ids=lambda k: k.value)
    def test_example_accepted(self, kind):
        """Every kind's example validates."""
        outcome = validate(kind, example_valid(kind))
        assert isinstance(outcome, Accepted)
        assert outcome.value == example_valid(kind)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kind,name", REQUIRED_CASES, ids=[f"{k.value}-{n}" for k, n in REQUIRED_CASES]
    )
    def test_removing_required_field_rejected(self, kind, name):
        """Dropping a required field is reported at that field."""
        candidate = example_valid(kind)
        del candidate[name]
        outcome = validate(kind, candidate)
        assert FieldError(name, "Field required") in outcome.errors

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", list_config_kinds(), ids=lambda k: k.value)
    def test_revalidation_is_idempotent(self, kind):
        """An accepted value re-validates to the same accepted value."""
        first = validate(kind, example_valid(kind))
        second = validate(kind, first.value)
        assert second == first

    @pytest.mark.unit
    def test_whole_numbers_stay_integers(self):
        """Accepted numbers keep their JSON shape."""
        outcome = validate("progress", example_valid("progress"))
        assert type(outcome.value["value"]) is int
        assert type(outcome.value["styles"]["height"]) is int


class TestRootShape:
    """Top-level input that is not an object."""

    @pytest.mark.unit
    @pytest.mark.parametrize("candidate", [[1, 2], "text", None, 3])
    def test_non_object_rejected(self, candidate):
        """Non-objects give one root error instead of raising."""
        outcome = validate("button", candidate)
        assert isinstance(outcome, Rejected)
        assert len(outcome.errors) == 1
        assert outcome.errors[0].path == ROOT_PATH
        assert "valid dictionary" in outcome.errors[0].message


class TestColors:
    """Hex color enforcement."""

    @pytest.mark.unit
    @pytest.mark.parametrize("color", ["#ZZZZZZ", "#fff", "red", "#1A2B3C4"])
    def test_invalid_colors_rejected(self, color):
        candidate = example_valid("progress")
        candidate["styles"]["indicatorColor"] = color
        outcome = validate("progress", candidate)
        assert _paths(outcome) == ["styles.indicatorColor"]
        assert "#[0-9A-Fa-f]{6}" in outcome.errors[0].message

    @pytest.mark.unit
    @pytest.mark.parametrize("color", ["#1A2B3C", "#abcdef"])
    def test_valid_colors_accepted(self, color):
        candidate = example_valid("progress")
        candidate["styles"]["indicatorColor"] = color
        assert is_valid("progress", candidate)

    @pytest.mark.unit
    def test_plain_string_colors_stay_plain(self):
        """overlayColor and the legacy radio color are free-form strings."""
        modal = example_valid("modal")
        modal["styles"]["overlayColor"] = "rgba(0,0,0,0.7)"
        radio = example_valid("radio")
        radio["color"] = "primary"
        assert is_valid("modal", modal)
        assert is_valid("radio", radio)


class TestPrimitives:
    """Type, enum, bound and array checks."""

    @pytest.mark.unit
    def test_boolean_is_not_a_number(self):
        """True is rejected where a number is required."""
        candidate = example_valid("progress")
        candidate["value"] = True
        outcome = validate("progress", candidate)
        assert outcome.errors == (FieldError("value", "Input should be a valid number"),)

    @pytest.mark.unit
    def test_number_is_not_a_boolean(self):
        candidate = example_valid("card")
        candidate["image"] = 1
        assert _paths(validate("card", candidate)) == ["image"]

    @pytest.mark.unit
    def test_numeric_string_is_not_a_number(self):
        candidate = example_valid("progress")
        candidate["value"] = "10"
        assert _paths(validate("progress", candidate)) == ["value"]

    @pytest.mark.unit
    def test_non_finite_rejected(self):
        candidate = example_valid("progress")
        candidate["value"] = float("nan")
        assert _paths(validate("progress", candidate)) == ["value"]

    @pytest.mark.unit
    def test_enum_closed(self):
        candidate = example_valid("input")
        candidate["variant"] = "filled"
        outcome = validate("input", candidate)
        assert outcome.errors == (
            FieldError("variant", "Input should be 'outlined' or 'standard'"),
        )

    @pytest.mark.unit
    def test_upper_bound(self):
        candidate = example_valid("card")
        candidate["styles"]["borderRadius"] = 51
        outcome = validate("card", candidate)
        assert outcome.errors == (
            FieldError("styles.borderRadius", "Input should be less than or equal to 50"),
        )

    @pytest.mark.unit
    def test_lower_bound_inclusive(self):
        candidate = example_valid("progress")
        candidate["styles"]["height"] = 1
        assert is_valid("progress", candidate)
        candidate["styles"]["height"] = 0.5
        assert _paths(validate("progress", candidate)) == ["styles.height"]

    @pytest.mark.unit
    def test_positive_padding(self):
        """Padding components must be strictly positive."""
        candidate = example_valid("input")
        candidate["styles"]["padding"] = {"px": 0, "py": 4}
        outcome = validate("input", candidate)
        assert outcome.errors == (
            FieldError("styles.padding.px", "Input should be greater than 0"),
        )

    @pytest.mark.unit
    def test_nested_required(self):
        candidate = example_valid("card")
        candidate["styles"]["padding"] = {"px": 4}
        assert validate("card", candidate).errors == (
            FieldError("styles.padding.py", "Field required"),
        )

    @pytest.mark.unit
    def test_empty_array_rejected(self):
        candidate = example_valid("radio")
        candidate["options"] = []
        assert _paths(validate("radio", candidate)) == ["options"]

    @pytest.mark.unit
    def test_array_item_paths(self):
        candidate = example_valid("tabs")
        del candidate["tabs"][1]["content"]
        assert _paths(validate("tabs", candidate)) == ["tabs.1.content"]


class TestUnions:
    """Select options accept strings or {value, label} objects."""

    @pytest.mark.unit
    def test_object_option_missing_label(self):
        """Union member tags do not leak into the path."""
        candidate = example_valid("select")
        candidate["options"].append({"value": "kiwi"})
        assert validate("select", candidate).errors == (
            FieldError("options.2.label", "Field required"),
        )

    @pytest.mark.unit
    def test_wrong_option_type(self):
        candidate = example_valid("select")
        candidate["options"].append(7)
        assert validate("select", candidate).errors == (
            FieldError(
                "options.2", "Input should be a string or an object with value and label"
            ),
        )

    @pytest.mark.unit
    def test_mixed_options_round_trip(self):
        """Accepted options keep each entry's original shape."""
        outcome = validate("select", example_valid("select"))
        assert outcome.value["options"] == ["Apple", {"value": "banana", "label": "Banana"}]


class TestCrossField:
    """Membership rules."""

    @pytest.mark.unit
    def test_select_value_not_in_options(self):
        """Scenario: value "c" with options a/b is rejected citing value."""
        outcome = validate("select", {"options": ["a", "b"], "value": "c"})
        assert isinstance(outcome, Rejected)
        assert _paths(outcome) == ["value"]
        assert "'c'" in outcome.errors[0].message

    @pytest.mark.unit
    def test_select_value_matches_object_option(self):
        assert is_valid(
            "select",
            {"options": [{"value": "x", "label": "X"}], "value": "x"},
        )

    @pytest.mark.unit
    def test_radio_selected_value(self):
        outcome = validate("radio", {"options": ["a"], "selectedValue": "b"})
        assert _paths(outcome) == ["selectedValue"]

    @pytest.mark.unit
    def test_tabs_default_value(self):
        candidate = example_valid("tabs")
        candidate["defaultValue"] = "missing"
        assert _paths(validate("tabs", candidate)) == ["defaultValue"]

    @pytest.mark.unit
    def test_cross_field_reported_with_field_errors(self):
        """Membership is still checked when an unrelated field fails."""
        candidate = example_valid("select")
        candidate["value"] = "zzz"
        candidate["size"] = "huge"
        assert _paths(validate("select", candidate)) == ["size", "value"]

    @pytest.mark.unit
    def test_membership_skipped_when_options_invalid(self):
        outcome = validate("select", {"options": [], "value": "a"})
        assert _paths(outcome) == ["options"]


class TestErrorReporting:
    """Ordering, completeness and cleaning."""

    @pytest.mark.unit
    def test_every_violation_in_declaration_order(self):
        candidate = {
            "styles": {"borderRadius": -1, "backgroundColor": "blue"},
            "size": "tiny",
            "variant": "ghost",
        }
        outcome = validate("button", candidate)
        assert _paths(outcome) == [
            "label",
            "variant",
            "size",
            "styles.borderRadius",
            "styles.backgroundColor",
        ]

    @pytest.mark.unit
    def test_feedback_text(self):
        outcome = validate("modal", {"title": "Hi"})
        assert outcome.feedback == "content: Field required"

    @pytest.mark.unit
    def test_unknown_keys_dropped(self):
        candidate = example_valid("modal")
        candidate["extra"] = 1
        candidate["styles"]["glow"] = True
        outcome = validate("modal", candidate)
        assert "extra" not in outcome.value
        assert "glow" not in outcome.value["styles"]

    @pytest.mark.unit
    def test_no_defaults_injected(self):
        """Omitted optional fields stay omitted."""
        outcome = validate("card", {"title": "t", "description": "d"})
        assert outcome.value == {"title": "t", "description": "d"}

    @pytest.mark.unit
    def test_explicit_null_means_unset(self):
        outcome = validate("card", {"title": "t", "description": "d", "image": None})
        assert outcome.value == {"title": "t", "description": "d"}

    @pytest.mark.unit
    def test_unwrap_raises_schema_violation(self):
        outcome = validate("modal", {})
        with pytest.raises(SchemaViolationError) as info:
            outcome.unwrap()
        assert info.value.feedback == "title: Field required\ncontent: Field required"

    @pytest.mark.unit
    def test_unwrap_compilation(self):
        outcome = Rejected((FieldError("mui", "Unexpected token"),), source="compilation")
        with pytest.raises(CompilationError, match="mui: Unexpected token"):
            outcome.unwrap()


class TestRouting:
    """Validator lookup by kind."""

    @pytest.mark.unit
    def test_get_validator(self):
        validator = get_validator(ArtifactKind.ACCORDION)
        assert validator({}).ok

    @pytest.mark.unit
    def test_unknown_kind(self):
        with pytest.raises(UnsupportedArtifactKindError):
            validate("slider", {})

    @pytest.mark.unit
    def test_playground_has_no_validator(self):
        with pytest.raises(UnsupportedArtifactKindError):
            get_validator(ArtifactKind.PLAYGROUND)
