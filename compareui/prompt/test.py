"""Tests for PromptBuilder module."""

import pytest

from compareui.prompt import FEEDBACK_HEADER, PromptBuilder, PromptConfig
from compareui.schema import ArtifactKind, UnsupportedArtifactKindError, describe


class TestPromptConfig:
    """Tests for PromptConfig dataclass."""

    @pytest.mark.unit
    def test_default_config(self):
        """Test default configuration values."""
        config = PromptConfig()
        assert config.include_hint is True
        assert config.indent == 2

    @pytest.mark.unit
    def test_hint_can_be_disabled(self):
        builder = PromptBuilder(PromptConfig(include_hint=False))
        prompt = builder.build("progress", {}, "make the bar green")
        assert "Example: " not in prompt


class TestBuildConfigPrompt:
    """Tests for configuration prompts."""

    @pytest.fixture
    def builder(self):
        return PromptBuilder()

    @pytest.mark.unit
    def test_sections_present(self, builder):
        """Prompt contains role, schema, state, intent and instructions."""
        prompt = builder.build("progress", {"value": 10, "max": 100}, "make the bar green")
        assert prompt.startswith("You are a UI configuration generator.")
        assert "modify the current progress configuration" in prompt
        assert describe(ArtifactKind.PROGRESS) in prompt
        assert 'USER REQUEST: "make the bar green"' in prompt
        assert "Modify ONLY the properties mentioned in the request." in prompt
        assert "6-character HEX codes" in prompt
        assert 'change indicatorColor to "#00FF00"' in prompt
        assert prompt.rstrip().endswith("Generate the modified configuration JSON now:")

    @pytest.mark.unit
    def test_state_sorted_and_indented(self, builder):
        """Current state is serialized with sorted keys and indent 2."""
        prompt = builder.build("progress", {"max": 100, "value": 10}, "x")
        assert 'CURRENT CONFIGURATION:\n{\n  "max": 100,\n  "value": 10\n}' in prompt

    @pytest.mark.unit
    def test_key_order_does_not_change_prompt(self, builder):
        """Byte-identical output regardless of mapping insertion order."""
        first = builder.build("card", {"title": "a", "description": "b"}, "hi")
        second = builder.build("card", {"description": "b", "title": "a"}, "hi")
        assert first == second

    @pytest.mark.unit
    def test_no_feedback_without_errors(self, builder):
        for errors in (None, "", [], "   "):
            prompt = builder.build("button", {}, "x", prior_errors=errors)
            assert FEEDBACK_HEADER not in prompt

    @pytest.mark.unit
    def test_feedback_block_appended(self, builder):
        """Previous errors are appended literally at the end."""
        errors = "value: Value must match one of the option values ('a', 'b'), received 'c'"
        prompt = builder.build("select", {"options": ["a", "b"], "value": "a"}, "x", errors)
        assert prompt.endswith(
            f"{FEEDBACK_HEADER}\n{errors}\n\n"
            "Please fix these errors and try again. Return ONLY the corrected JSON."
        )

    @pytest.mark.unit
    def test_feedback_from_list(self, builder):
        prompt = builder.build("modal", {}, "x", ["title: Required", "content: Required"])
        assert f"{FEEDBACK_HEADER}\ntitle: Required\ncontent: Required" in prompt

    @pytest.mark.unit
    def test_context_metadata(self, builder):
        _, context = builder.build_with_context("tabs", {}, "x", "tabs: Required")
        assert context.kind is ArtifactKind.TABS
        assert context.feedback_included is True
        assert context.total_tokens_estimate > 0

    @pytest.mark.unit
    def test_none_state_is_empty_object(self, builder):
        assert "CURRENT CONFIGURATION:\n{}" in builder.build("accordion", None, "x")

    @pytest.mark.unit
    def test_unknown_kind(self, builder):
        with pytest.raises(UnsupportedArtifactKindError):
            builder.build("slider", {}, "x")

    @pytest.mark.unit
    def test_playground_is_not_a_config_prompt(self, builder):
        with pytest.raises(UnsupportedArtifactKindError):
            builder.build(ArtifactKind.PLAYGROUND, {}, "x")


class TestBuildPlaygroundPrompt:
    """Tests for multi-provider code prompts."""

    @pytest.fixture
    def builder(self):
        return PromptBuilder()

    @pytest.mark.unit
    def test_lists_providers_and_vocabulary(self, builder):
        prompt = builder.build_playground("a login card", None, ["mui", "chakra"])
        assert "PROVIDERS TO GENERATE FOR:\nmui, chakra" in prompt
        assert "- MUI: Box, Typography, Button" in prompt
        assert "- CHAKRA: Box, Text, Button" in prompt
        assert "- ANTD" not in prompt

    @pytest.mark.unit
    def test_import_conventions(self, builder):
        prompt = builder.build_playground("x", None, ["mui", "chakra"])
        assert 'Import from "@mui/material", "@chakra-ui/react"' in prompt
        assert "import React from 'react'" in prompt
        assert "lucide-react" in prompt
        assert "root-level named imports" in prompt
        assert "Chakra UI v2" in prompt
        assert "export default () =>" in prompt
        assert "Never use any comments" in prompt

    @pytest.mark.unit
    def test_output_format_keyed_by_provider(self, builder):
        prompt = builder.build_playground("x", None, ["antd", "shadcn"])
        assert "SINGLE JSON object where keys are the provider IDs" in prompt
        assert '"antd": "export default' in prompt
        assert '"shadcn": "export default' in prompt

    @pytest.mark.unit
    def test_current_code_string_verbatim(self, builder):
        code = "export default () => <Box />"
        prompt = builder.build_playground("x", code, ["mui"])
        assert f"CURRENT CODE STATE:\n{code}" in prompt

    @pytest.mark.unit
    def test_current_code_mapping_sorted(self, builder):
        first = builder.build_playground("x", {"mui": "a", "chakra": "b"}, ["mui"])
        second = builder.build_playground("x", {"chakra": "b", "mui": "a"}, ["mui"])
        assert first == second

    @pytest.mark.unit
    def test_empty_code_placeholder(self, builder):
        assert "from scratch" in builder.build_playground("x", "", ["mui"])

    @pytest.mark.unit
    def test_feedback_names_provider(self, builder):
        prompt = builder.build_playground(
            "x", None, ["mui", "chakra"], "Provider chakra: Unexpected token (1:5)"
        )
        assert f"{FEEDBACK_HEADER}\nProvider chakra: Unexpected token (1:5)" in prompt
        assert "regenerate the code for ALL providers" in prompt

    @pytest.mark.unit
    def test_duplicate_providers_collapsed(self, builder):
        _, context = builder.build_playground_with_context("x", None, ["mui", "MUI"])
        assert context.providers == ["mui"]
        assert context.kind is ArtifactKind.PLAYGROUND

    @pytest.mark.unit
    def test_unknown_provider(self, builder):
        with pytest.raises(KeyError):
            builder.build_playground("x", None, ["bootstrap"])
