"""Tests for the generation orchestrator.

Covers:
- extract_json: recovery of JSON objects from noisy output
- Requests: typed config and playground requests
- ArtifactGenerator: the retry loop with a scripted backend
"""

import json
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from compareui.compiler import CompileResult, CompilerUnavailableError, SyntaxValidator
from compareui.llm.backend import RateLimitError
from compareui.schema import (
    ArtifactKind,
    UnsupportedArtifactKindError,
    example_valid,
    list_config_kinds,
)
from compareui.validation import is_valid

from .extract import MalformedResponseError, extract_json
from .lib import (
    BACKEND_ERROR_PREFIX,
    ArtifactGenerator,
    GenerationExhausted,
    GenerationState,
    GenerationSuccess,
    GeneratorConfig,
    RetriesExhaustedError,
)
from .request import ConfigRequest, PlaygroundRequest, parse_request

MUI_CODE = (
    "import React from 'react';\n"
    "import { Box, Button } from '@mui/material';\n"
    "export default () => <Box><Button variant=\"contained\">Save</Button></Box>;"
)
CHAKRA_CODE = (
    "import React from 'react';\n"
    "import { Box, Button } from '@chakra-ui/react';\n"
    "export default () => <Box><Button colorScheme=\"blue\">Save</Button></Box>;"
)
BROKEN_CODE = "export default () => <<Box>"


class FakeFrontend:
    """Rejects any source containing '<<'."""

    def compile(self, source: str) -> CompileResult:
        if "<<" in source:
            return CompileResult(ok=False, error="Unexpected token (1:22)")
        return CompileResult(ok=True)


# =============================================================================
# Extraction
# =============================================================================


class TestExtractJson:
    """Tests for extract_json."""

    @pytest.mark.unit
    def test_plain_object(self):
        assert extract_json('{"label": "Save"}') == {"label": "Save"}

    @pytest.mark.unit
    def test_surrounding_prose_and_fences(self):
        raw = 'Sure! Here it is:\n```json\n{"styles": {"color": "#00FF00"}}\n```\nEnjoy.'
        assert extract_json(raw) == {"styles": {"color": "#00FF00"}}

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", list_config_kinds(), ids=lambda k: k.value)
    def test_recovers_every_example(self, kind):
        """Each kind's example survives prose and code-fence wrapping."""
        example = example_valid(kind)
        body = json.dumps(example, indent=2)
        fenced = f"Here is the updated {kind.value} config:\n```json\n{body}\n```\nLet me know!"
        bare = f"Updated config: {body} (unchanged fields omitted)"
        assert extract_json(fenced) == example
        assert extract_json(bare) == example

    @pytest.mark.unit
    def test_first_and_last_brace(self):
        raw = 'prefix {"a": {"b": 1}} suffix'
        assert extract_json(raw) == {"a": {"b": 1}}

    @pytest.mark.unit
    def test_no_object(self):
        with pytest.raises(MalformedResponseError, match="^Failed to parse JSON response"):
            extract_json("I cannot help with that.")

    @pytest.mark.unit
    def test_array_is_rejected(self):
        with pytest.raises(MalformedResponseError, match="expected an object"):
            extract_json('```json\n["a", "b"]\n```')

    @pytest.mark.unit
    def test_broken_json(self):
        with pytest.raises(MalformedResponseError):
            extract_json('{"label": "Save",}')

    @pytest.mark.unit
    def test_empty(self):
        with pytest.raises(MalformedResponseError, match="empty response"):
            extract_json("```json\n```")


# =============================================================================
# Requests
# =============================================================================


class TestRequests:
    """Tests for typed generation requests."""

    @pytest.mark.unit
    def test_config_request_resolves_kind(self):
        request = ConfigRequest(kind=" Icon-Button ", intent="bigger")
        assert request.kind is ArtifactKind.ICON_BUTTON
        assert request.current_state == {}

    @pytest.mark.unit
    def test_config_request_rejects_playground(self):
        with pytest.raises(ValidationError):
            ConfigRequest(kind="playground", intent="x")

    @pytest.mark.unit
    def test_config_request_rejects_providers(self):
        with pytest.raises(ValidationError):
            ConfigRequest(kind="button", intent="x", providers=["mui"])

    @pytest.mark.unit
    def test_empty_intent_rejected(self):
        with pytest.raises(ValidationError):
            ConfigRequest(kind="button", intent="")

    @pytest.mark.unit
    def test_playground_request_normalizes_providers(self):
        request = PlaygroundRequest(intent="x", providers=["MUI", "chakra", "mui"])
        assert request.providers == ["mui", "chakra"]

    @pytest.mark.unit
    def test_playground_request_unknown_provider(self):
        with pytest.raises(ValidationError, match="Unknown provider 'bootstrap'"):
            PlaygroundRequest(intent="x", providers=["bootstrap"])

    @pytest.mark.unit
    def test_playground_request_needs_providers(self):
        with pytest.raises(ValidationError):
            PlaygroundRequest(intent="x", providers=[])

    @pytest.mark.unit
    def test_parse_request_discriminates(self):
        config = parse_request({"mode": "config", "kind": "tabs", "intent": "x"})
        code = parse_request({"mode": "playground", "intent": "x", "providers": ["antd"]})
        assert isinstance(config, ConfigRequest)
        assert isinstance(code, PlaygroundRequest)


class TestGeneratorConfig:
    """Tests for GeneratorConfig."""

    @pytest.mark.unit
    def test_defaults_from_environment(self, monkeypatch):
        monkeypatch.setenv("COMPAREUI_MAX_ATTEMPTS", "3")
        monkeypatch.setenv("COMPAREUI_TEMPERATURE", "0.2")
        config = GeneratorConfig()
        assert config.max_attempts == 3
        assert config.temperature == 0.2

    @pytest.mark.unit
    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError, match="at least 1"):
            GeneratorConfig(max_attempts=0)


# =============================================================================
# Config generation
# =============================================================================


class TestConfigGeneration:
    """ArtifactGenerator on config kinds with a scripted backend."""

    @pytest.fixture
    def make_generator(self, mock_llm_backend):
        def make(responses, max_attempts=5):
            backend = mock_llm_backend(responses)
            generator = ArtifactGenerator(
                backend=backend,
                config=GeneratorConfig(max_attempts=max_attempts, temperature=0.0),
            )
            return generator, backend

        return make

    @pytest.mark.unit
    def test_progress_make_bar_green(self, make_generator, progress_state):
        expected = example_valid("progress")
        expected["styles"]["indicatorColor"] = "#00FF00"
        generator, backend = make_generator([f"```json\n{json.dumps(expected, indent=2)}\n```"])

        result = generator.generate_config("progress", "make the bar green", progress_state)

        assert isinstance(result, GenerationSuccess)
        assert result.attempts_used == 1
        assert result.value["styles"]["indicatorColor"] == "#00FF00"
        assert result.value["value"] == progress_state["value"]
        assert result.value["max"] == progress_state["max"]
        assert 'USER REQUEST: "make the bar green"' in backend.prompts[0]
        assert backend.configs[0].temperature == 0.0

    @pytest.mark.unit
    def test_feedback_reaches_next_prompt(self, make_generator, progress_state):
        bad = example_valid("progress")
        bad["styles"]["indicatorColor"] = "green"
        good = example_valid("progress")
        good["styles"]["indicatorColor"] = "#00FF00"
        generator, backend = make_generator([bad, good])

        result = generator.generate_config("progress", "make the bar green", progress_state)

        assert result.ok
        assert result.attempts_used == 2
        assert "PREVIOUS ATTEMPT FAILED" not in backend.prompts[0]
        assert "styles.indicatorColor: String should match pattern" in backend.prompts[1]
        assert result.attempts[0].state is GenerationState.RETRYING
        assert result.attempts[1].state is GenerationState.ACCEPTED

    @pytest.mark.unit
    def test_retry_budget_on_malformed_output(self, make_generator):
        generator, backend = make_generator(["not json at all"], max_attempts=4)

        result = generator.generate_config("button", "make it red", example_valid("button"))

        assert isinstance(result, GenerationExhausted)
        assert result.attempts_used == 4
        assert backend.calls == 4
        assert result.last_error.startswith("Failed to parse JSON response")
        assert result.attempts[-1].state is GenerationState.EXHAUSTED

    @pytest.mark.unit
    def test_backend_error_becomes_feedback(self, make_generator):
        valid = example_valid("card")
        generator, backend = make_generator([RateLimitError("quota exceeded"), valid])

        result = generator.generate_config("card", "add a shadow", valid)

        assert result.ok
        assert result.attempts_used == 2
        assert f"{BACKEND_ERROR_PREFIX}: quota exceeded" in backend.prompts[1]
        assert result.attempts[0].raw_response is None

    @pytest.mark.unit
    def test_select_value_outside_options(self, make_generator):
        state = {"options": ["a", "b"], "value": "a"}
        generator, backend = make_generator(
            [{"options": ["a", "b"], "value": "c"}], max_attempts=2
        )

        result = generator.generate_config("select", "pick c", state)

        assert not result.ok
        assert result.last_error.startswith("value: ")
        assert "'c'" in result.last_error

    @pytest.mark.unit
    def test_unknown_kind_consumes_no_attempts(self, make_generator):
        generator, backend = make_generator(["{}"])
        with pytest.raises(UnsupportedArtifactKindError):
            generator.generate_config("carousel", "x", {})
        with pytest.raises(UnsupportedArtifactKindError):
            generator.generate_config("playground", "x", {})
        assert backend.calls == 0

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", [k for k in ArtifactKind if k.is_config])
    def test_accepted_value_revalidates(self, make_generator, kind):
        generator, _ = make_generator([example_valid(kind)])
        result = generator.generate_config(kind, "keep it", example_valid(kind))
        assert result.ok
        assert is_valid(kind, result.value)

    @pytest.mark.unit
    def test_result_payloads(self, make_generator):
        generator, _ = make_generator(["nope"], max_attempts=2)
        result = generator.generate_config("tabs", "x", {})

        assert result.to_dict() == {
            "success": False,
            "error": "Failed to generate valid configuration after 2 attempts",
            "lastError": result.last_error,
            "attempts": 2,
        }
        with pytest.raises(RetriesExhaustedError) as excinfo:
            result.unwrap()
        assert excinfo.value.attempts_used == 2

    @pytest.mark.unit
    def test_generate_with_typed_request(self, make_generator):
        valid = example_valid("modal")
        generator, _ = make_generator([valid])
        result = generator.generate(ConfigRequest(kind="modal", intent="x", current_state=valid))
        assert result.to_dict() == {"success": True, "config": valid, "attempts": 1}


# =============================================================================
# Playground generation
# =============================================================================


class TestPlaygroundGeneration:
    """ArtifactGenerator in multi-provider code mode."""

    @pytest.fixture
    def make_generator(self, mock_llm_backend):
        def make(responses, max_attempts=5):
            backend = mock_llm_backend(responses)
            generator = ArtifactGenerator(
                backend=backend,
                config=GeneratorConfig(max_attempts=max_attempts),
                syntax_validator=SyntaxValidator(FakeFrontend()),
            )
            return generator, backend

        return make

    @pytest.mark.unit
    def test_all_providers_compile(self, make_generator):
        generator, _ = make_generator([{"mui": MUI_CODE, "chakra": CHAKRA_CODE}])
        result = generator.generate_code("a save button", None, ["mui", "chakra"])
        assert result.ok
        assert result.value == {"mui": MUI_CODE, "chakra": CHAKRA_CODE}

    @pytest.mark.unit
    def test_one_provider_fails(self, make_generator):
        """Whole attempt is rejected and the next prompt names the failing provider."""
        first = {"mui": MUI_CODE, "chakra": BROKEN_CODE}
        second = {"mui": MUI_CODE, "chakra": CHAKRA_CODE}
        generator, backend = make_generator([first, second])

        result = generator.generate_code("a save button", None, ["mui", "chakra"])

        assert result.ok
        assert result.attempts_used == 2
        retry_prompt = backend.prompts[1]
        assert "Provider chakra: Unexpected token (1:22)" in retry_prompt
        assert "ALL providers" in retry_prompt
        assert BROKEN_CODE in retry_prompt
        assert "(none, generate from scratch)" in backend.prompts[0]

    @pytest.mark.unit
    def test_exhausted_payload(self, make_generator):
        generator, _ = make_generator([{"mui": BROKEN_CODE}], max_attempts=2)
        result = generator.generate_code("x", "export default () => null", ["mui"])
        assert result.to_dict()["error"] == "Failed to generate valid code after 2 attempts"
        assert result.last_error == "Provider mui: Unexpected token (1:22)"

    @pytest.mark.unit
    def test_compiler_unavailable_propagates(self, mock_llm_backend):
        frontend = MagicMock()
        frontend.compile.side_effect = CompilerUnavailableError("node missing")
        generator = ArtifactGenerator(
            backend=mock_llm_backend([{"mui": MUI_CODE}]),
            syntax_validator=SyntaxValidator(frontend),
        )
        with pytest.raises(CompilerUnavailableError):
            generator.generate_code("x", None, ["mui"])
