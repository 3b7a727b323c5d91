"""Tests for the root CLI entry point (`python . <command>`)."""

import importlib.util
import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from compareui.llm import GenerationExhausted, GenerationSuccess
from compareui.schema import ArtifactKind, example_valid

ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture(scope="module")
def cli():
    """Load the root __main__.py as a module without running it."""
    spec = importlib.util.spec_from_file_location("compareui_cli", ROOT / "__main__.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def generator(cli, monkeypatch):
    """Replace generator construction with a mock."""
    mock = MagicMock()
    monkeypatch.setattr(cli, "_create_generator", lambda args: mock)
    return mock


class TestKindsCommand:
    """Tests for `python . kinds`."""

    @pytest.mark.unit
    def test_lists_kinds(self, cli, capsys):
        assert cli.handle_kinds_command([]) == 0
        out = capsys.readouterr().out
        assert "progress" in out
        assert "icon-button" in out

    @pytest.mark.unit
    def test_describe_kind(self, cli, capsys):
        assert cli.handle_kinds_command(["select"]) == 0
        out = capsys.readouterr().out
        assert "Example:" in out

    @pytest.mark.unit
    def test_json_schema(self, cli, capsys):
        assert cli.handle_kinds_command(["progress", "--json"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["type"] == "object"

    @pytest.mark.unit
    def test_unknown_kind(self, cli):
        assert cli.handle_kinds_command(["carousel"]) == 1


class TestGenerateCommand:
    """Tests for `python . generate`."""

    @pytest.mark.unit
    def test_config_success(self, cli, generator, capsys):
        config = example_valid("progress")
        generator.generate_config.return_value = GenerationSuccess(
            kind=ArtifactKind.PROGRESS, value=config, attempts_used=1
        )

        code = cli.handle_generate_command(
            ["config", "progress", "make the bar green", "--state", '{"value": 10}', "--no-history"]
        )

        assert code == 0
        generator.generate_config.assert_called_once_with(
            "progress", "make the bar green", {"value": 10}
        )
        assert json.loads(capsys.readouterr().out) == config

    @pytest.mark.unit
    def test_config_state_must_be_object(self, cli, generator):
        code = cli.handle_generate_command(
            ["config", "progress", "green", "--state", "[1, 2]", "--no-history"]
        )
        assert code == 1
        generator.generate_config.assert_not_called()

    @pytest.mark.unit
    def test_config_exhausted(self, cli, generator):
        generator.generate_config.return_value = GenerationExhausted(
            kind=ArtifactKind.PROGRESS, last_error="styles.indicatorColor: bad", attempts_used=5
        )
        code = cli.handle_generate_command(["config", "progress", "green", "--no-history"])
        assert code == 1

    @pytest.mark.unit
    def test_code_output(self, cli, generator, capsys):
        generator.generate_code.return_value = GenerationSuccess(
            kind=ArtifactKind.PLAYGROUND,
            value={"mui": "export default () => null;"},
            attempts_used=2,
        )

        code = cli.handle_generate_command(
            ["code", "a card", "--providers", "mui", "--no-history"]
        )

        assert code == 0
        generator.generate_code.assert_called_once_with("a card", None, ["mui"])
        assert "// mui\nexport default () => null;" in capsys.readouterr().out

    @pytest.mark.unit
    def test_success_is_recorded(self, cli, generator):
        generator.generate_config.return_value = GenerationSuccess(
            kind=ArtifactKind.PROGRESS, value={"value": 10}, attempts_used=1
        )
        recorder = MagicMock()
        with (
            patch("compareui.history.get_audit_recorder", return_value=recorder),
            patch("compareui.history.close_history_manager") as close,
        ):
            cli.handle_generate_command(["config", "progress", "green"])

        assert recorder.record.call_args.kwargs["kind"] == "progress"
        close.assert_called_once()

    @pytest.mark.unit
    def test_no_arguments_shows_help(self, cli):
        assert cli.handle_generate_command([]) == 1


class TestHistoryCommand:
    """Tests for `python . history`."""

    @pytest.mark.unit
    def test_stats_and_list(self, cli, tmp_path, capsys):
        from compareui.history import HistoryManager

        db = tmp_path / "prompts.db"
        manager = HistoryManager(db_path=db)
        manager.record_prompt(intent="make it green", kind="progress", response_config={})
        manager.close()

        assert cli.handle_history_command(["stats", "--db", str(db)]) == 0
        assert "Records: 1" in capsys.readouterr().out

        assert cli.handle_history_command(["list", "--db", str(db)]) == 0
        assert "make it green" in capsys.readouterr().out


class TestDevCommand:
    """Tests for `python . dev`."""

    @pytest.mark.unit
    def test_test_tier_flags(self, cli):
        with patch.object(cli.subprocess, "call", return_value=0) as call:
            assert cli.cmd_test(["--unit", "-q"]) == 0
        cmd = call.call_args.args[0]
        assert cmd[1:] == ["-m", "pytest", "-m", "unit", "-q"]

    @pytest.mark.unit
    def test_compiler_install_without_npm(self, cli):
        with patch.object(cli.shutil, "which", return_value=None):
            assert cli.cmd_compiler(["install"]) == 1

    @pytest.mark.unit
    def test_compiler_install_runs_npm(self, cli, monkeypatch, tmp_path):
        monkeypatch.setenv("COMPAREUI_BABEL_DIR", str(tmp_path))
        with (
            patch.object(cli.shutil, "which", return_value="/usr/bin/npm"),
            patch.object(cli.subprocess, "call", return_value=0) as call,
        ):
            assert cli.cmd_compiler(["install"]) == 0

        assert (tmp_path / "package.json").exists()
        assert call.call_args.kwargs["cwd"] == str(tmp_path)

    @pytest.mark.unit
    def test_unknown_dev_command(self, cli):
        assert cli.handle_dev_command(["lint"]) == 1
