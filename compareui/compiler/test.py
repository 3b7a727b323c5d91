"""Tests for the syntax validator."""

import json
import shutil
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from compareui.compiler import (
    CHECK_SCRIPT,
    BabelFrontend,
    CompileResult,
    CompilerFrontend,
    CompilerUnavailableError,
    SyntaxValidator,
    check_vocabulary,
    parse_imports,
)
from compareui.providers import CHAKRA, MUI
from compareui.validation import Accepted, CompilationError, Rejected

MUI_OK = (
    "import React from 'react';\n"
    "import { Box, Button } from '@mui/material';\n"
    "export default () => <Box><Button>Hi</Button></Box>;\n"
)
CHAKRA_OK = (
    "import React from 'react';\n"
    "import { Box, Text } from '@chakra-ui/react';\n"
    "export default () => <Box><Text>Hi</Text></Box>;\n"
)


class FakeFrontend:
    """Rejects any source containing '<<'."""

    def __init__(self):
        self.calls: list[str] = []

    def compile(self, source: str) -> CompileResult:
        self.calls.append(source)
        if "<<" in source:
            return CompileResult(ok=False, error="Unexpected token (1:5)")
        return CompileResult(ok=True)


def _completed(stdout: str, returncode: int = 0, stderr: str = ""):
    return subprocess.CompletedProcess(
        args=["node"], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestBabelFrontend:
    """Subprocess handling with subprocess.run mocked."""

    @pytest.fixture
    def frontend(self, tmp_path):
        return BabelFrontend(node_binary="node", babel_dir=tmp_path, timeout=5)

    @pytest.mark.unit
    def test_is_a_frontend(self, frontend):
        assert isinstance(frontend, CompilerFrontend)

    @pytest.mark.unit
    def test_success(self, frontend, tmp_path):
        with patch("compareui.compiler.lib.subprocess.run") as run:
            run.return_value = _completed(json.dumps({"ok": True}))
            result = frontend.compile("export default () => null")

        assert result == CompileResult(ok=True)
        args, kwargs = run.call_args
        assert args[0] == ["node", str(CHECK_SCRIPT)]
        assert kwargs["input"] == "export default () => null"
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["timeout"] == 5.0

    @pytest.mark.unit
    def test_diagnostic_verbatim(self, frontend):
        message = "generated.tsx: Unexpected token (1:15)"
        with patch("compareui.compiler.lib.subprocess.run") as run:
            run.return_value = _completed(json.dumps({"ok": False, "error": message}))
            result = frontend.compile("export default () => <")
        assert result == CompileResult(ok=False, error=message)

    @pytest.mark.unit
    def test_timeout_is_a_rejection(self, frontend):
        with patch("compareui.compiler.lib.subprocess.run") as run:
            run.side_effect = subprocess.TimeoutExpired(cmd="node", timeout=5)
            result = frontend.compile("x")
        assert result.ok is False
        assert "timed out after 5s" in result.error

    @pytest.mark.unit
    def test_missing_node_raises(self, frontend):
        with patch("compareui.compiler.lib.subprocess.run") as run:
            run.side_effect = FileNotFoundError("node")
            with pytest.raises(CompilerUnavailableError, match="Node.js executable"):
                frontend.compile("x")

    @pytest.mark.unit
    def test_missing_babel_raises(self, frontend):
        payload = {"ok": False, "unavailable": True, "error": "Cannot find module"}
        with patch("compareui.compiler.lib.subprocess.run") as run:
            run.return_value = _completed(json.dumps(payload), returncode=3)
            with pytest.raises(CompilerUnavailableError, match="dev compiler install"):
                frontend.compile("x")

    @pytest.mark.unit
    def test_garbage_output_raises(self, frontend):
        with patch("compareui.compiler.lib.subprocess.run") as run:
            run.return_value = _completed("", returncode=1, stderr="Segmentation fault")
            with pytest.raises(CompilerUnavailableError, match="Segmentation fault"):
                frontend.compile("x")

    @pytest.mark.unit
    def test_is_available(self, frontend, tmp_path):
        with patch("compareui.compiler.lib.shutil.which", return_value="/usr/bin/node"):
            assert frontend.is_available() is False
            (tmp_path / "node_modules" / "@babel" / "core").mkdir(parents=True)
            assert frontend.is_available() is True
        with patch("compareui.compiler.lib.shutil.which", return_value=None):
            assert frontend.is_available() is False

    @pytest.mark.unit
    def test_env_configuration(self, monkeypatch, tmp_path):
        monkeypatch.setenv("COMPAREUI_NODE_BINARY", "/opt/node/bin/node")
        monkeypatch.setenv("COMPAREUI_BABEL_DIR", str(tmp_path))
        monkeypatch.setenv("COMPAREUI_COMPILE_TIMEOUT", "12.5")
        frontend = BabelFrontend()
        assert frontend.node_binary == "/opt/node/bin/node"
        assert frontend.babel_dir == tmp_path
        assert frontend.timeout == 12.5


class TestParseImports:
    """Import statement parsing."""

    @pytest.mark.unit
    def test_named_and_default(self):
        source = "import React, { useState } from 'react';\nimport { Box as B, Button } from \"@mui/material\";"
        assert parse_imports(source) == [
            ("react", ["useState", "React"], False),
            ("@mui/material", ["Box", "Button"], False),
        ]

    @pytest.mark.unit
    def test_multiline_named(self):
        source = "import {\n  Card,\n  CardContent,\n} from '@mui/material';"
        assert parse_imports(source) == [("@mui/material", ["Card", "CardContent"], False)]

    @pytest.mark.unit
    def test_namespace(self):
        assert parse_imports("import * as M from '@mui/material';") == [
            ("@mui/material", [], True)
        ]

    @pytest.mark.unit
    def test_subpath_default(self):
        assert parse_imports("import Box from '@mui/material/Box';") == [
            ("@mui/material/Box", ["Box"], False)
        ]


class TestCheckVocabulary:
    """Provider component vocabulary."""

    @pytest.mark.unit
    def test_allowed(self):
        assert check_vocabulary(MUI_OK, MUI) == []

    @pytest.mark.unit
    def test_disallowed_component(self):
        source = "import { Box, DataGrid } from '@mui/material';"
        problems = check_vocabulary(source, MUI)
        assert len(problems) == 1
        assert "'DataGrid'" in problems[0]

    @pytest.mark.unit
    def test_other_modules_ignored(self):
        source = "import { Heart } from 'lucide-react';\nimport React from 'react';"
        assert check_vocabulary(source, MUI) == []

    @pytest.mark.unit
    def test_hooks_pass(self):
        source = "import { Modal, useDisclosure } from '@chakra-ui/react';"
        assert check_vocabulary(source, CHAKRA) == []

    @pytest.mark.unit
    def test_namespace_rejected(self):
        problems = check_vocabulary("import * as C from '@chakra-ui/react';", CHAKRA)
        assert "Namespace import" in problems[0]


class TestSyntaxValidator:
    """Single-source and multi-provider checks with a fake front end."""

    @pytest.fixture
    def frontend(self):
        return FakeFrontend()

    @pytest.fixture
    def validator(self, frontend):
        return SyntaxValidator(frontend)

    @pytest.mark.unit
    def test_check_compiles_accepts(self, validator):
        outcome = validator.check_compiles(MUI_OK)
        assert outcome == Accepted(MUI_OK)

    @pytest.mark.unit
    def test_check_compiles_rejects(self, validator):
        outcome = validator.check_compiles("export default () => <<")
        assert isinstance(outcome, Rejected)
        assert outcome.source == "compilation"
        assert outcome.feedback == "source: Unexpected token (1:5)"

    @pytest.mark.unit
    def test_all_providers_accepted(self, validator, frontend):
        outcome = validator.check_providers(
            {"mui": MUI_OK, "chakra": CHAKRA_OK, "antd": "ignored"}, ["mui", "chakra"]
        )
        assert outcome == Accepted({"mui": MUI_OK, "chakra": CHAKRA_OK})
        assert frontend.calls == [MUI_OK, CHAKRA_OK]

    @pytest.mark.unit
    def test_one_provider_fails(self, validator, frontend):
        """Every provider is checked and the failing one is named."""
        outcome = validator.check_providers(
            {"mui": MUI_OK, "chakra": "export default () => <<"}, ["mui", "chakra"]
        )
        assert isinstance(outcome, Rejected)
        assert outcome.feedback == "Provider chakra: Unexpected token (1:5)"
        assert len(frontend.calls) == 2

    @pytest.mark.unit
    def test_missing_and_non_string(self, validator):
        outcome = validator.check_providers({"mui": 42}, ["mui", "chakra"])
        assert outcome.feedback == (
            "Provider mui: Expected code string, received int\n"
            "Provider chakra: Missing code for this provider"
        )

    @pytest.mark.unit
    def test_empty_code(self, validator):
        outcome = validator.check_providers({"mui": "  "}, ["mui"])
        assert outcome.feedback == "Provider mui: Code is empty"

    @pytest.mark.unit
    def test_non_mapping(self, validator):
        outcome = validator.check_providers(["code"], ["mui"])
        assert outcome.errors[0].path == "(root)"

    @pytest.mark.unit
    def test_vocabulary_violation(self, validator):
        source = "import { Input } from '@mui/material';\nexport default () => <Input />;"
        outcome = validator.check_providers({"mui": source}, ["mui"])
        assert "Provider mui: Component 'Input'" in outcome.feedback

    @pytest.mark.unit
    def test_vocabulary_check_can_be_disabled(self, frontend):
        validator = SyntaxValidator(frontend, check_imports=False)
        source = "import { Input } from '@mui/material';"
        assert validator.check_providers({"mui": source}, ["mui"]).ok

    @pytest.mark.unit
    def test_unwrap_raises_compilation_error(self, validator):
        outcome = validator.check_providers({}, ["mui"])
        with pytest.raises(CompilationError, match="Provider mui"):
            outcome.unwrap()

    @pytest.mark.unit
    def test_default_frontend_is_babel(self):
        assert isinstance(SyntaxValidator()._frontend, BabelFrontend)

    @pytest.mark.unit
    def test_frontend_errors_propagate(self):
        frontend = MagicMock()
        frontend.compile.side_effect = CompilerUnavailableError("no node")
        with pytest.raises(CompilerUnavailableError):
            SyntaxValidator(frontend).check_providers({"mui": MUI_OK}, ["mui"])


_BABEL_READY = shutil.which("node") is not None and (
    CHECK_SCRIPT.parent / "node_modules" / "@babel" / "core"
).exists()


@pytest.mark.integration
@pytest.mark.skipif(not _BABEL_READY, reason="node or @babel packages not installed")
class TestBabelIntegration:
    """Real Babel compilation. Requires `python . dev compiler install`."""

    def test_valid_tsx(self):
        result = BabelFrontend().compile(MUI_OK)
        assert result.ok

    def test_typescript_syntax(self):
        source = "type P = { n: number };\nexport default ({ n }: P) => <div>{n}</div>;"
        assert BabelFrontend().compile(source).ok

    def test_invalid_jsx(self):
        result = BabelFrontend().compile("export default () => <div><span></div>;")
        assert not result.ok
        assert result.error
