"""Unit tests for MCP tools."""

import pytest
from pydantic import ValidationError

from compareui.schema import UnsupportedArtifactKindError, example_valid

from .generate import generate_code, generate_config

MUI_CODE = (
    "import React from 'react';\n"
    "import { Box, Button } from '@mui/material';\n"
    "export default () => <Box><Button>Go</Button></Box>;\n"
)


@pytest.fixture
def progress_state():
    return example_valid("progress")


@pytest.fixture
def green_progress(progress_state):
    config = example_valid("progress")
    config["styles"]["indicatorColor"] = "#00FF00"
    return config


class TestGenerateConfig:
    """Tests for the generate_config tool function."""

    @pytest.mark.unit
    def test_success_payload(
        self, scripted_backend, audit_recorder, progress_state, green_progress
    ):
        """Accepted configs are returned with the attempt count."""
        scripted_backend(green_progress)

        result = generate_config("progress", "make the bar green", progress_state)

        assert result == {"success": True, "config": green_progress, "attempts": 1}

    @pytest.mark.unit
    def test_repair_after_invalid_color(
        self, scripted_backend, audit_recorder, progress_state, green_progress
    ):
        """A color name is rejected and its error fed into the next prompt."""
        invalid = example_valid("progress")
        invalid["styles"]["indicatorColor"] = "green"
        backend = scripted_backend(invalid, green_progress)

        result = generate_config("progress", "make the bar green", progress_state)

        assert result["success"] is True
        assert result["attempts"] == 2
        retry_prompt = backend.generate.call_args_list[1].args[0]
        assert "PREVIOUS ATTEMPT FAILED WITH ERRORS:" in retry_prompt
        assert "indicatorColor" in retry_prompt

    @pytest.mark.unit
    def test_exhausted_payload(self, scripted_backend, audit_recorder, monkeypatch):
        monkeypatch.setenv("COMPAREUI_MAX_ATTEMPTS", "2")
        scripted_backend("not json", "still not json")

        result = generate_config("progress", "make the bar green", {})

        assert result["success"] is False
        assert result["error"] == "Failed to generate valid configuration after 2 attempts"
        assert result["attempts"] == 2
        assert result["lastError"]
        audit_recorder.record.assert_not_called()

    @pytest.mark.unit
    def test_success_is_recorded(
        self, scripted_backend, audit_recorder, progress_state, green_progress
    ):
        scripted_backend(green_progress)

        generate_config("progress", "make the bar green", progress_state)

        audit_recorder.record.assert_called_once_with(
            intent="make the bar green",
            kind="progress",
            response_config=green_progress,
            current_config=progress_state,
            attempts=1,
            model="mock:scripted",
        )

    @pytest.mark.unit
    def test_persist_disabled(self, scripted_backend, audit_recorder, green_progress):
        scripted_backend(green_progress)
        generate_config("progress", "make the bar green", persist=False)
        audit_recorder.record.assert_not_called()

    @pytest.mark.unit
    def test_recorder_failure_does_not_fail_call(
        self, scripted_backend, audit_recorder, green_progress
    ):
        audit_recorder.record.side_effect = RuntimeError("queue closed")
        scripted_backend(green_progress)

        result = generate_config("progress", "make the bar green")

        assert result["success"] is True

    @pytest.mark.unit
    def test_unknown_kind(self, scripted_backend, audit_recorder):
        backend = scripted_backend({})
        with pytest.raises(UnsupportedArtifactKindError):
            generate_config("carousel", "add slides")
        backend.generate.assert_not_called()

    @pytest.mark.unit
    def test_playground_is_not_a_config_kind(self, scripted_backend, audit_recorder):
        scripted_backend({})
        with pytest.raises(UnsupportedArtifactKindError):
            generate_config("playground", "a card")

    @pytest.mark.unit
    def test_empty_intent(self, scripted_backend, audit_recorder):
        scripted_backend({})
        with pytest.raises(ValidationError):
            generate_config("progress", "")

    @pytest.mark.unit
    def test_unknown_model(self, audit_recorder):
        with pytest.raises(ValueError, match="Unknown model: gpt-0"):
            generate_config("progress", "make the bar green", model="gpt-0")

    @pytest.mark.unit
    def test_temperature_override(
        self, scripted_backend, audit_recorder, green_progress
    ):
        backend = scripted_backend(green_progress)
        generate_config("progress", "make the bar green", temperature=0.2)
        assert backend.generate.call_args.kwargs["config"].temperature == 0.2


class TestGenerateCode:
    """Tests for the generate_code tool function."""

    @pytest.mark.unit
    def test_success_payload(self, scripted_backend, audit_recorder, compile_ok):
        scripted_backend({"mui": MUI_CODE})

        result = generate_code("a box with a button", providers=["mui"])

        assert result == {"success": True, "config": {"mui": MUI_CODE}, "attempts": 1}
        assert audit_recorder.record.call_args.kwargs["kind"] == "playground"

    @pytest.mark.unit
    def test_missing_provider_is_retried(
        self, scripted_backend, audit_recorder, compile_ok
    ):
        chakra_code = (
            "import { Box, Button } from '@chakra-ui/react';\n"
            "export default () => <Box><Button>Go</Button></Box>;"
        )
        backend = scripted_backend(
            {"mui": MUI_CODE}, {"mui": MUI_CODE, "chakra": chakra_code}
        )

        result = generate_code("a box with a button", providers=["mui", "chakra"])

        assert result["success"] is True
        assert result["attempts"] == 2
        assert "Provider chakra: Missing code" in backend.generate.call_args_list[1].args[0]

    @pytest.mark.unit
    def test_unknown_provider(self, scripted_backend, audit_recorder):
        scripted_backend({})
        with pytest.raises(ValidationError, match="Unknown provider 'bootstrap'"):
            generate_code("a card", providers=["bootstrap"])

    @pytest.mark.unit
    def test_empty_providers(self, scripted_backend, audit_recorder):
        scripted_backend({})
        with pytest.raises(ValidationError):
            generate_code("a card", providers=[])
